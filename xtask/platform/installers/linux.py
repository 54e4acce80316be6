#!/usr/bin/env python3
"""
xtask Linux Auxiliary Tool Installer
Installs linuxdeploy into ~/.local/bin for AppImage bundling
"""

import os
import platform
import shutil
import stat
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from xtask.console import console as default_console
from xtask.core.errors import FilesystemError
from xtask.core.runner import CommandRunner


class AuxiliaryToolInstaller:
    """
    Download a single binary outside the package manager.

    The binary lands in bin_dir under its release file name and a stable
    symlink (the tool name) points at it.
    """

    def __init__(self, name: str, url_template: str, bin_dir: Path,
                 runner: CommandRunner, console: Optional[Console] = None,
                 arch: Optional[str] = None):
        self.name = name
        self.arch = arch or platform.machine() or 'x86_64'
        # Only {arch} is substituted; other braces pass through unchanged
        self.url = url_template.replace('{arch}', self.arch)
        self.bin_dir = Path(bin_dir).expanduser()
        self.runner = runner
        self.console = console or default_console

    @property
    def file_name(self) -> str:
        return self.url.rstrip('/').rsplit('/', 1)[-1] or self.name

    @property
    def target_path(self) -> Path:
        return self.bin_dir / self.file_name

    @property
    def link_path(self) -> Path:
        return self.bin_dir / self.name

    def is_installed(self) -> bool:
        """Check if the tool already resolves on PATH"""
        return shutil.which(self.name) is not None

    def download_command(self) -> List[str]:
        """curl when available, otherwise wget"""
        if shutil.which('curl') or not shutil.which('wget'):
            return ['curl', '-fL', '-o', str(self.target_path), self.url]
        return ['wget', '-O', str(self.target_path), self.url]

    def ensure_installed(self) -> bool:
        """
        Install the tool unless it is already on PATH

        Returns:
            True if the tool was installed, False if it was already present

        Raises:
            ExternalCommandFailed: if the download fails
            FilesystemError: if the directory, permission or symlink step fails
        """
        if self.is_installed():
            self.console.print(f"[green]✓[/green] {self.name} already installed")
            return False

        self.console.print(f"[cyan]Installing {self.name}...[/cyan]")

        try:
            self.bin_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(f"Cannot create {self.bin_dir}: {e}", self.bin_dir) from e

        self.runner.run_checked(self.download_command())

        try:
            mode = self.target_path.stat().st_mode
            self.target_path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        except OSError as e:
            raise FilesystemError(f"Cannot make {self.target_path} executable: {e}",
                                  self.target_path) from e

        self._replace_link()

        self.console.print(f"[green]✅ {self.name} installed to {self.link_path}[/green]")
        if not self._bin_dir_on_path():
            self.console.print(
                f"[yellow]⚠ {self.bin_dir} is not on PATH. Add to your shell profile:[/yellow]"
            )
            self.console.print(f"[cyan]   export PATH=\"{self.bin_dir}:$PATH\"[/cyan]")
        return True

    def _replace_link(self) -> None:
        if self.link_path == self.target_path:
            return

        if self.link_path.is_symlink():
            try:
                self.link_path.unlink()
            except OSError:
                # Already gone
                pass
        elif self.link_path.exists():
            raise FilesystemError(f"{self.link_path} exists and is not a symlink", self.link_path)

        try:
            self.link_path.symlink_to(self.target_path)
        except OSError as e:
            raise FilesystemError(f"Cannot link {self.link_path} -> {self.target_path}: {e}",
                                  self.link_path) from e

    def _bin_dir_on_path(self) -> bool:
        entries = os.environ.get('PATH', '').split(os.pathsep)
        return any(Path(entry).expanduser() == self.bin_dir for entry in entries if entry)
