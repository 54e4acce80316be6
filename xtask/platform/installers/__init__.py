"""
xtask Platform-Specific Installers
Package-manager plans for Linux and macOS, plus the linuxdeploy download
"""

from xtask.platform.installers.base import PackageInstaller
from xtask.platform.installers.linux import AuxiliaryToolInstaller
from xtask.platform.installers.macos import HomebrewInstaller

__all__ = [
    'PackageInstaller',
    'AuxiliaryToolInstaller',
    'HomebrewInstaller',
]
