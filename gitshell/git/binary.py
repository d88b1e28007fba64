"""Process-wide git executable setting and availability probe."""

from __future__ import annotations

from gitshell.platform.process import COMMAND_NOT_FOUND, run_status

__all__ = [
    "DEFAULT_BIN",
    "get_bin",
    "is_available",
    "reset_bin",
    "set_bin",
    "windows_mode",
]

DEFAULT_BIN = "/usr/bin/git"

_bin: str = DEFAULT_BIN


def set_bin(path: str) -> None:
    """Set the git executable (absolute path or a name resolved through PATH)."""
    global _bin
    _bin = path


def get_bin() -> str:
    return _bin


def windows_mode() -> None:
    """Use the bare ``git`` name, as a default Windows install expects."""
    set_bin("git")


def reset_bin() -> None:
    set_bin(DEFAULT_BIN)


def is_available(path: str | None = None) -> bool:
    """Probe the executable by running it without a subcommand.

    git prints its usage and exits 1 in that case, which still counts as
    available. Only "command not found" (127, or a launch failure) does not.
    """
    status = run_status([path or get_bin()])
    return status != COMMAND_NOT_FOUND
