#!/usr/bin/env python3
"""
xtask Dependency Resolver
Detect the platform, pick its package plan and run it
"""

from pathlib import Path
from typing import Optional

from rich.console import Console

from xtask.config import XtaskConfig
from xtask.console import console as default_console
from xtask.core.errors import UnsupportedPlatform
from xtask.core.runner import CommandRunner
from xtask.platform.detector import OSType, PlatformProfile, detect_profile
from xtask.platform.installers import AuxiliaryToolInstaller, HomebrewInstaller, PackageInstaller
from xtask.platform.plans import PackagePlan, get_plan, manual_instructions


def make_installer(plan: PackagePlan, runner: CommandRunner, config: XtaskConfig,
                   console: Console) -> PackageInstaller:
    """Pick the installer class for a plan's package manager"""
    installer_cls = HomebrewInstaller if plan.manager == 'brew' else PackageInstaller
    return installer_cls(plan, runner, use_sudo=config.use_sudo, console=console)


def make_aux_tool_installer(runner: CommandRunner, config: XtaskConfig,
                            console: Console) -> AuxiliaryToolInstaller:
    return AuxiliaryToolInstaller(
        name=config.aux_tool_name,
        url_template=config.aux_tool_url,
        bin_dir=Path(config.aux_tool_bin_dir),
        runner=runner,
        console=console,
    )


def resolve_and_install(profile: Optional[PlatformProfile] = None,
                        runner: Optional[CommandRunner] = None,
                        config: Optional[XtaskConfig] = None,
                        console: Optional[Console] = None) -> None:
    """
    Install the native build prerequisites for this machine

    Args:
        profile: Pre-resolved platform (default: detect now)
        runner: Command runner to spawn processes with
        config: Loaded configuration (default: built-in defaults)
        console: Output console

    Raises:
        UnsupportedPlatform: if the OS is neither Linux, macOS nor Windows
        ExternalCommandFailed: if a package-manager step or the download fails
        FilesystemError: if the auxiliary tool cannot be placed
    """
    console = console or default_console
    config = config or XtaskConfig()
    runner = runner or CommandRunner(console=console)
    profile = profile or detect_profile()

    if profile.os_kind == OSType.UNKNOWN:
        raise UnsupportedPlatform(profile.label)

    console.print(f"[cyan]🔍 Detected platform: {profile.label}[/cyan]")

    plan = get_plan(profile)
    if plan is None:
        console.print("[yellow]⚠ No automatic dependency setup for this platform[/yellow]")
        for line in manual_instructions(profile):
            console.print(line, markup=False, highlight=False)
        return

    console.print(f"[cyan]📦 Installing {len(plan.packages)} packages with {plan.manager}...[/cyan]")
    make_installer(plan, runner, config, console).install()

    if plan.installs_aux_tool:
        make_aux_tool_installer(runner, config, console).ensure_installed()

    console.print("[green]✅ Dependencies installed![/green]")
