"""Errors returned by repository operations.

Every failure is a frozen dataclass returned inside ``Err``; nothing here is
raised. Each error exposes a human-readable ``message``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from gitshell.platform.process import ProcessError

__all__ = [
    "AlreadyExists",
    "CommandFailed",
    "DetachedHead",
    "FileAccessError",
    "GitDirNotFound",
    "InvalidReference",
    "NotADirectory",
    "PathDoesNotExist",
    "RepoError",
    "RepositoryNotFound",
]


@dataclass(frozen=True, slots=True)
class PathDoesNotExist:
    path: Path
    reason: str | None = None

    @property
    def message(self) -> str:
        if self.reason:
            return f'"{self.path}": {self.reason}'
        return f'"{self.path}" does not exist'


@dataclass(frozen=True, slots=True)
class NotADirectory:
    path: Path

    @property
    def message(self) -> str:
        return f'"{self.path}" is not a directory'


@dataclass(frozen=True, slots=True)
class RepositoryNotFound:
    """The directory exists but holds neither .git nor a bare config."""

    path: Path

    @property
    def message(self) -> str:
        return f'"{self.path}" is not a git repository'


@dataclass(frozen=True, slots=True)
class AlreadyExists:
    path: Path

    @property
    def message(self) -> str:
        return f'"{self.path}" is already a git repository'


@dataclass(frozen=True, slots=True)
class InvalidReference:
    path: Path

    @property
    def message(self) -> str:
        return f'"{self.path}" is not a git repository. Cannot use as reference.'


@dataclass(frozen=True, slots=True)
class GitDirNotFound:
    path: Path

    @property
    def message(self) -> str:
        return f"could not find git dir for {self.path}."


@dataclass(frozen=True, slots=True)
class DetachedHead:
    """No branch is marked active (detached HEAD, or no commit yet)."""

    path: Path

    @property
    def message(self) -> str:
        return f"no active branch in {self.path} (detached HEAD or no commits yet)"


@dataclass(frozen=True, slots=True)
class FileAccessError:
    path: Path
    reason: str

    @property
    def message(self) -> str:
        return f"cannot access {self.path}: {self.reason}"


@dataclass(frozen=True, slots=True)
class CommandFailed:
    """git exited with a nonzero status (or could not be started).

    Attributes:
        command: The argument vector that was run
        returncode: Exit status, -1 if the process could not be launched
        stdout: Captured standard output
        stderr: Captured standard error
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def message(self) -> str:
        # Not every git error goes to stderr
        return f"{self.stderr}\n{self.stdout}"

    @classmethod
    def from_process_error(cls, error: ProcessError) -> CommandFailed:
        return cls(
            command=error.command,
            returncode=error.returncode,
            stdout=error.stdout,
            stderr=error.stderr,
        )


RepoError = (
    PathDoesNotExist
    | NotADirectory
    | RepositoryNotFound
    | AlreadyExists
    | InvalidReference
    | GitDirNotFound
    | DetachedHead
    | FileAccessError
    | CommandFailed
)
