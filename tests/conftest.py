"""
Shared fixtures for the xtask tests

No test here spawns a real process: RecordingRunner replaces the spawn
step and records every argv it is handed.
"""
import io
import shutil
from pathlib import Path

import pytest
from rich.console import Console

from xtask.core.runner import CommandRunner


class RecordingRunner(CommandRunner):
    """CommandRunner that records commands instead of running them"""

    def __init__(self, returncodes=None, console=None):
        super().__init__(console=console or Console(file=io.StringIO()), echo=False)
        # {('apt-get', 'update'): 100} -> any command starting with that prefix exits 100
        self.returncodes = returncodes or {}
        self.calls = []

    @property
    def commands(self):
        return [cmd for cmd, _env, _cwd in self.calls]

    def _spawn(self, cmd, env, cwd):
        self.calls.append((cmd, env, cwd))
        for prefix, code in self.returncodes.items():
            if tuple(cmd[:len(prefix)]) == tuple(prefix):
                return code
        self._fake_download(cmd)
        return 0

    @staticmethod
    def _fake_download(cmd):
        flag = {'curl': '-o', 'wget': '-O'}.get(cmd[0])
        if flag and flag in cmd:
            dest = Path(cmd[cmd.index(flag) + 1])
            dest.write_bytes(b'\x7fELF')


@pytest.fixture
def console():
    """Console writing into a buffer; read it back with console.file.getvalue()"""
    return Console(file=io.StringIO(), width=1000, force_terminal=False, color_system=None)


@pytest.fixture
def runner(console):
    return RecordingRunner(console=console)


@pytest.fixture
def fake_path(monkeypatch):
    """
    Control what shutil.which resolves.

    Returns a set; add program names to make them "installed".
    """
    available = set()

    def which(name, *args, **kwargs):
        return f"/usr/bin/{name}" if name in available else None

    monkeypatch.setattr(shutil, 'which', which)
    return available
