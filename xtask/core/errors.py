#!/usr/bin/env python3
"""
xtask Errors
Every failure a subcommand can surface to the command line
"""

from typing import Optional, Sequence, Tuple


class XtaskError(Exception):
    """Base class for errors that abort a subcommand"""

    @property
    def exit_code(self) -> int:
        return 1


class UnsupportedPlatform(XtaskError):
    """The running platform has neither a package plan nor a manual fallback"""

    def __init__(self, platform_name: str, action: str = "dependency setup"):
        self.platform_name = platform_name
        self.action = action
        super().__init__(f"Unsupported platform for {action}: {platform_name}")


class ExternalCommandFailed(XtaskError):
    """An external program exited non-zero or could not be started"""

    def __init__(self, program: str, args: Sequence[str],
                 returncode: Optional[int] = None, reason: Optional[str] = None):
        self.program = program
        self.arguments: Tuple[str, ...] = tuple(args)
        self.returncode = returncode
        self.reason = reason

        message = f"Command failed: {program} {list(self.arguments)}"
        if reason:
            message += f" ({reason})"
        elif returncode is not None:
            message += f" (exit status {returncode})"
        super().__init__(message)

    @property
    def exit_code(self) -> int:
        if self.returncode is not None and self.returncode > 0:
            return self.returncode
        return 1


class FilesystemError(XtaskError):
    """A directory, download target, permission or symlink operation failed"""

    def __init__(self, message: str, path=None):
        self.path = path
        super().__init__(message)
