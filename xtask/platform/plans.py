#!/usr/bin/env python3
"""
xtask Package Plans
Native libraries needed to build the Tauri application, per platform
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from xtask.platform.detector import DistroFamily, OSType, PlatformProfile


@dataclass(frozen=True)
class PackagePlan:
    """Package-manager invocations for one PlatformProfile"""
    manager: str
    install_args: Tuple[str, ...]
    packages: Tuple[str, ...]
    refresh_args: Optional[Tuple[str, ...]] = None
    continue_on_nonzero_exit: bool = False
    privileged: bool = True
    installs_aux_tool: bool = False

    def _prefix(self, use_sudo: bool) -> List[str]:
        return ['sudo', self.manager] if self.privileged and use_sudo else [self.manager]

    def refresh_command(self, use_sudo: bool = True) -> Optional[List[str]]:
        """argv for the refresh step, or None if the plan has none"""
        if self.refresh_args is None:
            return None
        return self._prefix(use_sudo) + list(self.refresh_args)

    def install_command(self, use_sudo: bool = True) -> List[str]:
        """argv installing every package in a single invocation"""
        return self._prefix(use_sudo) + list(self.install_args) + list(self.packages)


LINUX_DEBIAN = PlatformProfile(OSType.LINUX, DistroFamily.DEBIAN_UBUNTU)
LINUX_FEDORA = PlatformProfile(OSType.LINUX, DistroFamily.FEDORA_RHEL)
LINUX_ARCH = PlatformProfile(OSType.LINUX, DistroFamily.ARCH_LIKE)
LINUX_UNKNOWN = PlatformProfile(OSType.LINUX, DistroFamily.UNKNOWN)
MACOS = PlatformProfile(OSType.MACOS)
WINDOWS = PlatformProfile(OSType.WINDOWS)


PACKAGE_PLANS: Dict[PlatformProfile, PackagePlan] = {
    LINUX_DEBIAN: PackagePlan(
        manager='apt-get',
        refresh_args=('update',),
        install_args=('install', '-y'),
        packages=(
            'libwebkit2gtk-4.1-dev',
            'build-essential',
            'curl',
            'wget',
            'file',
            'libssl-dev',
            'libayatana-appindicator3-dev',
            'librsvg2-dev',
        ),
        installs_aux_tool=True,
    ),
    LINUX_FEDORA: PackagePlan(
        manager='dnf',
        install_args=('install', '-y'),
        packages=(
            'webkit2gtk4.1-devel',
            'openssl-devel',
            'curl',
            'wget',
            'file',
            'libappindicator-gtk3-devel',
            'librsvg2-devel',
            'gcc',
            'gcc-c++',
            'make',
        ),
        installs_aux_tool=True,
    ),
    LINUX_ARCH: PackagePlan(
        manager='pacman',
        refresh_args=('-Syu', '--noconfirm'),
        install_args=('-S', '--needed', '--noconfirm'),
        packages=(
            'webkit2gtk-4.1',
            'base-devel',
            'curl',
            'wget',
            'file',
            'openssl',
            'appmenu-gtk-module',
            'libappindicator-gtk3',
            'librsvg',
        ),
        # pacman exits non-zero for already-installed or renamed packages
        continue_on_nonzero_exit=True,
        installs_aux_tool=True,
    ),
    MACOS: PackagePlan(
        manager='brew',
        refresh_args=('update',),
        install_args=('install',),
        packages=('pkg-config', 'libusb', 'dfu-util'),
        privileged=False,
    ),
}


WINDOWS_INSTRUCTIONS = (
    "Install the build prerequisites manually:",
    "  1. Microsoft C++ Build Tools: https://visualstudio.microsoft.com/visual-cpp-build-tools/",
    "     (select \"Desktop development with C++\")",
    "  2. WebView2 Runtime (preinstalled on Windows 11): "
    "https://developer.microsoft.com/microsoft-edge/webview2/",
    "  3. Rust via rustup: https://rustup.rs",
    "  4. Tauri CLI: cargo install tauri-cli",
)


def get_plan(profile: PlatformProfile) -> Optional[PackagePlan]:
    """Plan for a profile, or None when only manual instructions exist"""
    return PACKAGE_PLANS.get(profile)


def manual_instructions(profile: PlatformProfile) -> List[str]:
    """
    Human-readable setup steps for profiles without an executable plan

    Unknown Linux distributions get the install command for every known
    family so the user can pick the closest one.
    """
    if profile.os_kind == OSType.WINDOWS:
        return list(WINDOWS_INSTRUCTIONS)

    lines = [
        "Could not detect your Linux distribution.",
        "Install the equivalent of one of these package sets manually:",
    ]
    for known, label in ((LINUX_DEBIAN, 'Debian/Ubuntu'),
                         (LINUX_FEDORA, 'Fedora/RHEL'),
                         (LINUX_ARCH, 'Arch/Manjaro')):
        plan = PACKAGE_PLANS[known]
        lines.append(f"  {label}:")
        lines.append(f"    {' '.join(plan.install_command())}")
    lines.append("Then install linuxdeploy into ~/.local/bin for AppImage bundling.")
    return lines
