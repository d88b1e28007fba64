"""Subprocess execution with Result-based error handling.

Commands are argument vectors, never shell strings, so values such as commit
messages or branch names need no quoting. Each call spawns one process, waits
for it to exit and captures both output streams. There is no timeout: a hung
process blocks the caller.

Usage:
    result = run(["git", "status"], cwd=repo_path, env=merged_env({"LANG": "C"}))
    match result:
        case Ok(stdout):
            print(stdout)
        case Err(error):
            print(error.message)
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from gitshell.core.result import Err, Ok, Result

__all__ = ["COMMAND_NOT_FOUND", "ProcessError", "merged_env", "run", "run_status"]

# Shell convention for "command not found"
COMMAND_NOT_FOUND = 127


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process (-1 if it could not start).
        stdout: Standard output (may be empty).
        stderr: Standard error (may be empty).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def message(self) -> str:
        """Both streams: some tools report errors on stdout."""
        return f"{self.stderr}\n{self.stdout}"

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def merged_env(
    overrides: Mapping[str, str],
    base: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Build an explicit environment: a snapshot of base with overrides on top.

    Args:
        overrides: Variables to set for the child process.
        base: Inherited environment (defaults to os.environ). May be empty.

    Returns:
        A new dict; neither base nor os.environ is modified.
    """
    env = dict(os.environ if base is None else base)
    env.update(overrides)
    return env


def run(
    cmd: list[str],
    cwd: Path,
    env: Mapping[str, str] | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return stdout or error.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Complete environment for the child (inherits os.environ if None).

    Output is decoded as UTF-8; undecodable bytes become U+FFFD.

    Returns:
        Ok(stdout) on exit status 0 (stderr is discarded),
        Err(ProcessError) otherwise.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=None if env is None else dict(env),
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=str(e),
            )
        )

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_status(cmd: list[str], cwd: Path | None = None) -> int:
    """Execute a command, discard its output and return the exit status.

    A command that cannot be launched reports COMMAND_NOT_FOUND, the same
    status a shell would give.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=None if cwd is None else str(cwd),
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return COMMAND_NOT_FOUND
    return proc.returncode
