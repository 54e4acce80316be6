#!/usr/bin/env python3
"""
xtask Base Installer Class
Runs a PackagePlan through the system package manager
"""

import os
import shutil
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from xtask.console import console as default_console
from xtask.core.errors import ExternalCommandFailed
from xtask.core.runner import CommandRunner, format_command
from xtask.platform.plans import PackagePlan


def running_as_root() -> bool:
    """True when sudo would be redundant"""
    geteuid = getattr(os, 'geteuid', None)
    return geteuid is not None and geteuid() == 0


class PackageInstaller:
    """
    Executes the refresh and install steps of a PackagePlan
    """

    def __init__(self, plan: PackagePlan, runner: CommandRunner,
                 use_sudo: bool = True, console: Optional[Console] = None):
        self.plan = plan
        self.runner = runner
        self.use_sudo = use_sudo and not running_as_root()
        self.console = console or default_console

    def missing_manager_reason(self) -> str:
        return f"{self.plan.manager} not found on PATH"

    def commands(self) -> List[List[str]]:
        """Every argv this installer would run, in order"""
        cmds = []
        refresh = self.plan.refresh_command(self.use_sudo)
        if refresh is not None:
            cmds.append(refresh)
        cmds.append(self.plan.install_command(self.use_sudo))
        return cmds

    def install(self) -> None:
        """
        Run the plan

        Raises:
            ExternalCommandFailed: on a non-zero exit, unless the plan
                continues past package-manager failures
        """
        if not shutil.which(self.plan.manager):
            install_cmd = self.plan.install_command(self.use_sudo)
            raise ExternalCommandFailed(install_cmd[0], install_cmd[1:],
                                        reason=self.missing_manager_reason())

        for cmd in self.commands():
            self._run_step(cmd)

    def _run_step(self, cmd: List[str]) -> None:
        if not self.plan.continue_on_nonzero_exit:
            self.runner.run_checked(cmd)
            return

        returncode = self.runner.run(cmd)
        if returncode != 0:
            self.console.print(
                f"[yellow]⚠ {escape(format_command(cmd))} exited with status {returncode}, "
                f"continuing[/yellow]"
            )
