#!/usr/bin/env python3
"""
xtask Configuration Management
Handles .xtask.yml configuration files
"""

import yaml
from pathlib import Path
from typing import Dict, Optional, Any
from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape


DEFAULT_AUX_TOOL_URL = (
    "https://github.com/linuxdeploy/linuxdeploy/releases/download/"
    "continuous/linuxdeploy-{arch}.AppImage"
)


def _flag(data: Dict[str, Any], key: str, default: bool) -> bool:
    """Read a YAML boolean; quoted strings like "false" are rejected, not coerced"""
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value


@dataclass
class XtaskConfig:
    """xtask configuration structure"""

    # Toolchain
    cargo: str = "cargo"

    # Read by the Tauri CLI, not by xtask
    skip_webview_download: bool = False

    # Prefix package-manager and system-install commands with sudo
    use_sudo: bool = True

    # install-system
    binary_name: str = "eim"
    man_page: str = "docs/eim.1"
    system_bin_dir: str = "/usr/local/bin"
    system_man_dir: str = "/usr/local/share/man/man1"

    # Auxiliary packaging helper (Linux only)
    aux_tool_name: str = "linuxdeploy"
    aux_tool_url: str = DEFAULT_AUX_TOOL_URL
    aux_tool_bin_dir: str = "~/.local/bin"

    @property
    def tauri_env(self) -> Dict[str, str]:
        """Environment overlay for cargo tauri build/dev"""
        return {'TAURI_SKIP_WEBVIEW_DOWNLOAD': 'true' if self.skip_webview_download else 'false'}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'XtaskConfig':
        """
        Create config from dictionary

        Raises:
            ValueError: if a boolean setting is not a YAML boolean
        """
        config = cls()

        config.cargo = str(data.get('cargo', config.cargo))
        config.skip_webview_download = _flag(data, 'skip_webview_download', config.skip_webview_download)
        config.use_sudo = _flag(data, 'use_sudo', config.use_sudo)

        install_system = data.get('install_system') or {}
        config.binary_name = str(install_system.get('binary', config.binary_name))
        config.man_page = str(install_system.get('man_page', config.man_page))
        config.system_bin_dir = str(install_system.get('bin_dir', config.system_bin_dir))
        config.system_man_dir = str(install_system.get('man_dir', config.system_man_dir))

        aux_tool = data.get('aux_tool') or {}
        config.aux_tool_name = str(aux_tool.get('name', config.aux_tool_name))
        config.aux_tool_url = str(aux_tool.get('url', config.aux_tool_url))
        config.aux_tool_bin_dir = str(aux_tool.get('bin_dir', config.aux_tool_bin_dir))

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for YAML export"""
        return {
            'cargo': self.cargo,
            'skip_webview_download': self.skip_webview_download,
            'use_sudo': self.use_sudo,
            'install_system': {
                'binary': self.binary_name,
                'man_page': self.man_page,
                'bin_dir': self.system_bin_dir,
                'man_dir': self.system_man_dir,
            },
            'aux_tool': {
                'name': self.aux_tool_name,
                'url': self.aux_tool_url,
                'bin_dir': self.aux_tool_bin_dir,
            },
        }


class ConfigManager:
    """Manage xtask configuration files"""

    DEFAULT_CONFIG_NAME = ".xtask.yml"

    @staticmethod
    def find_config(start_path: Path = None) -> Optional[Path]:
        """
        Find .xtask.yml by walking up directory tree

        Args:
            start_path: Starting directory (default: current directory)

        Returns:
            Path to .xtask.yml or None if not found
        """
        current = (start_path or Path.cwd()).resolve()

        while True:
            config_file = current / ConfigManager.DEFAULT_CONFIG_NAME
            if config_file.is_file():
                return config_file
            if current == current.parent:
                return None
            current = current.parent

    @staticmethod
    def load_config(config_path: Path = None, console: Optional[Console] = None) -> XtaskConfig:
        """
        Load configuration from .xtask.yml

        Args:
            config_path: Path to config file (default: search from current dir)
            console: Where to report an unreadable file

        Returns:
            XtaskConfig object
        """
        if config_path is None:
            config_path = ConfigManager.find_config()

        if config_path is None or not config_path.exists():
            return XtaskConfig()

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
            if not isinstance(data, dict):
                return XtaskConfig()
            return XtaskConfig.from_dict(data)
        except (OSError, yaml.YAMLError, ValueError) as e:
            if console is None:
                from xtask.console import err_console as console
            console.print(
                f"[yellow]⚠ Failed to load config from {escape(str(config_path))}: {escape(str(e))}[/yellow]",
                soft_wrap=True,
            )
            return XtaskConfig()

    @staticmethod
    def save_config(config: XtaskConfig, config_path: Path) -> None:
        """
        Save configuration to .xtask.yml

        Raises:
            OSError: if the file cannot be written
        """
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(
                config.to_dict(),
                f,
                default_flow_style=False,
                sort_keys=False,
                indent=2
            )

    @staticmethod
    def create_default_config(project_root: Path) -> Path:
        """
        Create default .xtask.yml in project root

        Returns:
            Path to created config file
        """
        config_path = project_root / ConfigManager.DEFAULT_CONFIG_NAME
        ConfigManager.save_config(XtaskConfig(), config_path)
        return config_path
