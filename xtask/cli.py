#!/usr/bin/env python3
"""
xtask CLI - Command-line interface
Click-based build automation for the Tauri installer workspace
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import click
from rich.markup import escape

from xtask import __version__
from xtask.config import ConfigManager, XtaskConfig
from xtask.console import console, err_console
from xtask.core.errors import XtaskError
from xtask.core.runner import CommandRunner, format_command
from xtask.core.tasks import CargoTasks

# Force UTF-8 on Windows terminals so the status emojis don't crash cp1252
if sys.platform == 'win32':
    import io
    if isinstance(sys.stdout, io.TextIOWrapper):
        sys.stdout.reconfigure(encoding='utf-8', errors='replace')
    if isinstance(sys.stderr, io.TextIOWrapper):
        sys.stderr.reconfigure(encoding='utf-8', errors='replace')


@dataclass
class XtaskContext:
    """Per-invocation state shared by every subcommand"""
    config: XtaskConfig
    runner: CommandRunner
    project_root: Path

    @property
    def tasks(self) -> CargoTasks:
        return CargoTasks(self.config, self.runner, console, self.project_root)


pass_xtask = click.make_pass_decorator(XtaskContext)


def _invoke(action: Callable[[], None]) -> None:
    """Run a subcommand body, turning XtaskError into a message and exit code"""
    try:
        action()
    except XtaskError as e:
        err_console.print(f"[red]❌ {escape(str(e))}[/red]", soft_wrap=True)
        sys.exit(e.exit_code)


@click.group(invoke_without_command=True)
@click.option('--version', is_flag=True, help='Show version and exit')
@click.option('--config', 'config_file', type=click.Path(exists=True, dir_okay=False),
              default=None, help='Path to .xtask.yml (default: search upwards from cwd)')
@click.option('-q', '--quiet', is_flag=True, help='Do not echo the commands being run')
@click.pass_context
def main(ctx, version, config_file, quiet):
    """
    xtask - Build automation for the Tauri installer workspace

    Examples:
        xtask setup              # Install native build dependencies
        xtask all                # check, fmt, lint, then build
        xtask build --target aarch64-unknown-linux-gnu
    """
    if version:
        click.echo(f"xtask v{__version__}")
        ctx.exit(0)

    config_path = Path(config_file) if config_file else ConfigManager.find_config()
    config = ConfigManager.load_config(config_path, console=err_console)
    project_root = config_path.resolve().parent if config_path else Path.cwd()

    ctx.obj = XtaskContext(
        config=config,
        runner=CommandRunner(console=console, echo=not quiet),
        project_root=project_root,
    )

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@click.option('--target', default=None, help='Build target (x86_64, aarch64, etc.)')
@pass_xtask
def build(xt, target):
    """Build the Tauri application"""
    _invoke(lambda: xt.tasks.build(target))


@main.command()
@pass_xtask
def dev(xt):
    """Run Tauri in development mode"""
    _invoke(xt.tasks.dev)


@main.command()
@pass_xtask
def check(xt):
    """Check code without building"""
    _invoke(xt.tasks.check)


@main.command()
@pass_xtask
def fmt(xt):
    """Format code"""
    _invoke(xt.tasks.fmt)


@main.command()
@pass_xtask
def lint(xt):
    """Run clippy linter"""
    _invoke(xt.tasks.lint)


@main.command()
@pass_xtask
def test(xt):
    """Run tests"""
    _invoke(xt.tasks.test)


@main.command()
@pass_xtask
def clean(xt):
    """Clean build artifacts"""
    _invoke(xt.tasks.clean)


@main.command()
@pass_xtask
def install(xt):
    """Install the application"""
    _invoke(xt.tasks.install)


@main.command('install-system')
@pass_xtask
def install_system(xt):
    """Install the binary and man page system-wide (Linux/macOS)"""
    _invoke(xt.tasks.install_system)


@main.command()
@pass_xtask
def setup(xt):
    """Install native build dependencies for this OS"""
    from xtask.platform.resolver import resolve_and_install

    console.print("\n[cyan]🔧 Dependency Setup[/cyan]\n")
    _invoke(lambda: resolve_and_install(runner=xt.runner, config=xt.config, console=console))


@main.command('all')
@click.option('--target', default=None, help='Build target (optional)')
@pass_xtask
def all_(xt, target):
    """Full build pipeline (check → fmt → lint → build)"""
    _invoke(lambda: xt.tasks.all(target))


@main.command()
@pass_xtask
def info(xt):
    """
    Show the detected platform and what `setup` would run.
    """
    from xtask.platform import detect_profile, get_plan
    from xtask.platform.resolver import make_aux_tool_installer, make_installer

    profile = detect_profile()

    console.print("[bold cyan]Platform:[/bold cyan]")
    console.print(f"  OS: {profile.os_kind.value}")
    if profile.distro_family is not None:
        console.print(f"  Distribution family: {profile.distro_family.value}")

    plan = get_plan(profile)
    console.print("\n[bold cyan]Dependency setup:[/bold cyan]")
    if plan is None:
        console.print("  [yellow]manual (run 'xtask setup' for instructions)[/yellow]")
    else:
        for cmd in make_installer(plan, xt.runner, xt.config, console).commands():
            console.print(f"  {escape(format_command(cmd))}", highlight=False, soft_wrap=True)
        if plan.continue_on_nonzero_exit:
            console.print("  [dim]package-manager failures are reported as warnings[/dim]")
        if plan.installs_aux_tool:
            aux = make_aux_tool_installer(xt.runner, xt.config, console)
            status = "[green]installed[/green]" if aux.is_installed() else "[yellow]missing[/yellow]"
            console.print(f"  {aux.name}: {status} ({aux.link_path})")

    console.print("\n[bold cyan]Configuration:[/bold cyan]")
    console.print(f"  Project root: {xt.project_root}")
    console.print(f"  cargo: {xt.config.cargo}")
    console.print(f"  TAURI_SKIP_WEBVIEW_DOWNLOAD={xt.config.tauri_env['TAURI_SKIP_WEBVIEW_DOWNLOAD']}")
    console.print(f"\n[bold cyan]xtask Version:[/bold cyan] v{__version__}")


@main.command()
@click.option('--force', is_flag=True, help='Overwrite an existing .xtask.yml')
def init(force):
    """Write a default .xtask.yml in the current directory"""
    config_path = Path.cwd() / ConfigManager.DEFAULT_CONFIG_NAME
    if config_path.exists() and not force:
        err_console.print(f"[yellow]⚠ {config_path} already exists (use --force to overwrite)[/yellow]")
        sys.exit(1)

    try:
        ConfigManager.create_default_config(Path.cwd())
    except OSError as e:
        err_console.print(f"[red]❌ Cannot write {config_path}: {escape(str(e))}[/red]")
        sys.exit(1)
    console.print(f"[green]✅ Created {config_path}[/green]")


if __name__ == '__main__':
    main()
