#!/usr/bin/env python3
"""
xtask Cargo Tasks
Build, check, format, lint, test, clean and install the Tauri application
"""

from pathlib import Path
from typing import List, Optional

from rich.console import Console

from xtask.config import XtaskConfig
from xtask.console import console as default_console
from xtask.core.errors import FilesystemError, UnsupportedPlatform
from xtask.core.runner import CommandRunner
from xtask.platform.detector import OSType, detect_os
from xtask.platform.installers.base import running_as_root


class CargoTasks:
    """
    The xtask subcommands.

    Every method runs its external commands one after another and lets
    the first failure propagate.
    """

    def __init__(self, config: Optional[XtaskConfig] = None,
                 runner: Optional[CommandRunner] = None,
                 console: Optional[Console] = None,
                 project_root: Optional[Path] = None):
        self.config = config or XtaskConfig()
        self.console = console or default_console
        self.runner = runner or CommandRunner(console=self.console)
        self.project_root = project_root or Path.cwd()

    def _cargo(self, *args: str, tauri_env: bool = False) -> None:
        env = self.config.tauri_env if tauri_env else None
        self.runner.run_checked([self.config.cargo, *args], env=env, cwd=self.project_root)

    def build(self, target: Optional[str] = None) -> None:
        """cargo tauri build, optionally for a given target triple"""
        self.console.print("🔨 Building Tauri application...")
        args = ['tauri', 'build']
        if target:
            args.append(f'--target={target}')
        self._cargo(*args, tauri_env=True)
        self.console.print("[green]✅ Build completed![/green]")

    def dev(self) -> None:
        self.console.print("🚀 Starting development server...")
        self._cargo('tauri', 'dev', tauri_env=True)

    def check(self) -> None:
        self.console.print("📋 Checking code...")
        self._cargo('check', '--all')
        self.console.print("[green]✅ Check passed![/green]")

    def fmt(self) -> None:
        self.console.print("📐 Formatting code...")
        self._cargo('fmt', '--all')
        self.console.print("[green]✅ Code formatted![/green]")

    def lint(self) -> None:
        self.console.print("🔍 Running linter...")
        self._cargo('clippy', '--all', '--', '-D', 'warnings')
        self.console.print("[green]✅ Linting passed![/green]")

    def test(self) -> None:
        self.console.print("🧪 Running tests...")
        self._cargo('test', '--all')
        self.console.print("[green]✅ Tests passed![/green]")

    def clean(self) -> None:
        self.console.print("🧹 Cleaning build artifacts...")
        self._cargo('clean')
        self.console.print("[green]✅ Clean completed![/green]")

    def install(self) -> None:
        """Produce the installable bundles"""
        self.console.print("📦 Installing application...")
        self._cargo('tauri', 'build', tauri_env=True)
        self.console.print("[green]✅ Installation completed![/green]")

    def install_system_commands(self) -> List[List[str]]:
        """The privileged copy commands run after the release build"""
        cfg = self.config
        prefix = ['sudo'] if cfg.use_sudo and not running_as_root() else []
        binary = self.project_root / 'target' / 'release' / cfg.binary_name
        man_page = self.project_root / cfg.man_page
        # BSD install(1) has no -D: create the target directories first
        return [
            prefix + ['install', '-d', '-m', '755', cfg.system_bin_dir, cfg.system_man_dir],
            prefix + ['install', '-m', '755', str(binary),
                      f"{cfg.system_bin_dir}/{cfg.binary_name}"],
            prefix + ['install', '-m', '644', str(man_page),
                      f"{cfg.system_man_dir}/{cfg.binary_name}.1"],
        ]

    def install_system(self, os_kind: Optional[OSType] = None) -> None:
        """
        Build a release binary and install it with its manual page

        Raises:
            UnsupportedPlatform: on anything but Linux or macOS
            FilesystemError: if the binary or manual page is missing
        """
        os_kind = os_kind or detect_os()
        if os_kind not in (OSType.LINUX, OSType.MACOS):
            raise UnsupportedPlatform(os_kind.value, action="install-system")

        self.console.print("📦 Installing to system...")
        self._cargo('build', '--release')

        binary = self.project_root / 'target' / 'release' / self.config.binary_name
        man_page = self.project_root / self.config.man_page
        for path in (binary, man_page):
            if not path.is_file():
                raise FilesystemError(f"Not found: {path}", path)

        for cmd in self.install_system_commands():
            self.runner.run_checked(cmd)

        self.console.print(
            f"[green]✅ Installed {self.config.binary_name} to {self.config.system_bin_dir}[/green]"
        )

    def all(self, target: Optional[str] = None) -> None:
        """Full pipeline: check, fmt, lint, build"""
        self.console.print("Running full build pipeline...\n")
        self.check()
        self.fmt()
        self.lint()
        self.build(target)
        self.console.print("\n[green]✅ Full pipeline completed successfully![/green]")
