#!/usr/bin/env python3
"""
xtask shared consoles
All user-facing output goes through these rich consoles
"""

from rich.console import Console

console = Console()

# Failures are printed to stderr so stdout stays clean for piping
err_console = Console(stderr=True)
