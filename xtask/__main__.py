#!/usr/bin/env python3
"""
xtask module entry point
Allows running: python3 -m xtask
"""

from xtask.cli import main

if __name__ == '__main__':
    main()
