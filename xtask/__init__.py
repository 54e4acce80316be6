"""
xtask - Build Automation for the Tauri Installer Workspace
Wraps cargo, the Tauri CLI and the system package manager behind one command.
"""

__version__ = "0.3.0"
__author__ = "xtask contributors"
__license__ = "AGPL-3.0-or-later"

__all__ = ["__version__"]
