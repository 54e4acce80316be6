#!/usr/bin/env python3
"""
xtask Platform Detection
Detects operating system and Linux distribution family
"""

import platform
from pathlib import Path
from typing import Optional, Dict
from enum import Enum
from dataclasses import dataclass


OS_RELEASE_PATH = Path('/etc/os-release')


class OSType(Enum):
    """Operating system types"""
    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"
    UNKNOWN = "unknown"


class DistroFamily(Enum):
    """Linux distribution families with a known package plan"""
    DEBIAN_UBUNTU = "debian-ubuntu"
    FEDORA_RHEL = "fedora-rhel"
    ARCH_LIKE = "arch-like"
    UNKNOWN = "unknown"


# Checked in this order; the first family with a matching keyword wins
DISTRO_KEYWORDS = (
    (DistroFamily.DEBIAN_UBUNTU, ('ubuntu', 'debian')),
    (DistroFamily.FEDORA_RHEL, ('fedora', 'rhel', 'centos')),
    (DistroFamily.ARCH_LIKE, ('arch', 'cachyos', 'manjaro')),
)


@dataclass(frozen=True)
class PlatformProfile:
    """Resolved OS (and, on Linux, distribution family)"""
    os_kind: OSType
    distro_family: Optional[DistroFamily] = None

    @property
    def label(self) -> str:
        if self.distro_family is not None:
            return f"{self.os_kind.value}/{self.distro_family.value}"
        return self.os_kind.value

    def to_dict(self) -> Dict:
        """Convert to dictionary for display"""
        return {
            'os_kind': self.os_kind.value,
            'distro_family': self.distro_family.value if self.distro_family else None,
        }


def detect_os(system: Optional[str] = None) -> OSType:
    """
    Map a platform.system() value to an OSType

    Args:
        system: Override for platform.system() (used by tests)
    """
    system = (system if system is not None else platform.system()).lower()

    if system == 'linux':
        return OSType.LINUX
    elif system == 'darwin':
        return OSType.MACOS
    elif system == 'windows':
        return OSType.WINDOWS
    else:
        return OSType.UNKNOWN


def classify_distro(os_release: str) -> DistroFamily:
    """
    Classify system-identification text into a distribution family

    Case-insensitive substring match against DISTRO_KEYWORDS.

    Args:
        os_release: Contents of /etc/os-release (or any identification text)

    Returns:
        The first matching DistroFamily, or DistroFamily.UNKNOWN
    """
    text = os_release.lower()
    for family, keywords in DISTRO_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return family
    return DistroFamily.UNKNOWN


def read_os_release(path: Path = OS_RELEASE_PATH) -> str:
    """Read the identification file, treating any read failure as empty"""
    try:
        return path.read_text(encoding='utf-8', errors='replace')
    except OSError:
        # Missing or unreadable: detection is best-effort
        return ''


def detect_profile(system: Optional[str] = None,
                   os_release_path: Path = OS_RELEASE_PATH) -> PlatformProfile:
    """
    Perform platform detection

    Args:
        system: Override for platform.system()
        os_release_path: Identification file consulted on Linux

    Returns:
        PlatformProfile for the running machine
    """
    os_kind = detect_os(system)
    if os_kind != OSType.LINUX:
        return PlatformProfile(os_kind)
    return PlatformProfile(os_kind, classify_distro(read_os_release(os_release_path)))
