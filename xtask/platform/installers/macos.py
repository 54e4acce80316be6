#!/usr/bin/env python3
"""
xtask macOS Installer
Package installer for macOS using Homebrew
"""

from xtask.platform.installers.base import PackageInstaller


class HomebrewInstaller(PackageInstaller):
    """macOS package installer using Homebrew (never under sudo)"""

    HOMEBREW_URL = "https://brew.sh"

    def missing_manager_reason(self) -> str:
        return f"Homebrew not found, install it from {self.HOMEBREW_URL}"
