#!/usr/bin/env python3
"""
xtask Command Runner
Spawns one external program at a time and waits for it to exit
"""

import os
import shlex
import subprocess
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from rich.console import Console
from rich.markup import escape

from xtask.console import console as default_console
from xtask.core.errors import ExternalCommandFailed


def format_command(cmd: Sequence[str]) -> str:
    """Render an argv list the way a user would type it in a shell"""
    return shlex.join(list(cmd))


def build_environment(overlay: Optional[Mapping[str, str]]) -> Optional[Dict[str, str]]:
    """
    Merge an environment overlay on top of the inherited environment

    Args:
        overlay: Variables to set for a single child process

    Returns:
        A fresh environment dict, or None to inherit unchanged
    """
    if not overlay:
        return None
    env = dict(os.environ)
    env.update(overlay)
    return env


class CommandRunner:
    """
    Run external commands with inherited stdio.

    Nothing here touches the wrapper's own os.environ: variables the child
    needs are passed as an overlay scoped to that one invocation.
    """

    def __init__(self, console: Optional[Console] = None, echo: bool = True):
        self.console = console or default_console
        self.echo = echo

    def _spawn(self, cmd: List[str], env: Optional[Dict[str, str]],
               cwd: Optional[Path]) -> int:
        """Start the process and block until it exits"""
        # Inherited stdio: the child writes straight to the terminal
        return subprocess.run(cmd, env=env, cwd=cwd, check=False, shell=False).returncode

    def run(self, cmd: Sequence[str], env: Optional[Mapping[str, str]] = None,
            cwd: Optional[Path] = None) -> int:
        """
        Run a command and return its exit status

        Args:
            cmd: Program and arguments
            env: Environment overlay for this invocation only
            cwd: Working directory (default: current directory)

        Returns:
            The process exit status

        Raises:
            ExternalCommandFailed: if the program cannot be started
        """
        cmd = list(cmd)
        if self.echo:
            self.console.print(f"[dim]$ {escape(format_command(cmd))}[/dim]", highlight=False, soft_wrap=True)

        try:
            return self._spawn(cmd, build_environment(env), cwd)
        except FileNotFoundError as e:
            raise ExternalCommandFailed(cmd[0], cmd[1:], reason="command not found") from e
        except PermissionError as e:
            raise ExternalCommandFailed(cmd[0], cmd[1:], reason="permission denied") from e

    def run_checked(self, cmd: Sequence[str], env: Optional[Mapping[str, str]] = None,
                    cwd: Optional[Path] = None) -> None:
        """Run a command, raising ExternalCommandFailed on a non-zero exit"""
        cmd = list(cmd)
        returncode = self.run(cmd, env=env, cwd=cwd)
        if returncode != 0:
            raise ExternalCommandFailed(cmd[0], cmd[1:], returncode=returncode)
