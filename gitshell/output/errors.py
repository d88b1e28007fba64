"""Error presentation and exit code mapping for repository errors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gitshell.core.errors import ErrorCode
from gitshell.git.errors import (
    AlreadyExists,
    CommandFailed,
    DetachedHead,
    FileAccessError,
    GitDirNotFound,
    InvalidReference,
    NotADirectory,
    PathDoesNotExist,
    RepoError,
    RepositoryNotFound,
)
from gitshell.output.console import Style

if TYPE_CHECKING:
    from gitshell.output.console import ConsoleProtocol

__all__ = ["print_repo_error", "repo_error_exit_code"]


def print_repo_error(error: RepoError, console: ConsoleProtocol) -> None:
    """Print a repository error with a hint where one helps."""
    match error:
        case CommandFailed(command=command, returncode=rc, stdout=stdout, stderr=stderr):
            console.error(f"{' '.join(command[1:2]) or 'git'} failed (exit {rc})")
            detail = "\n".join(s.strip() for s in (stderr, stdout) if s.strip())
            if detail:
                console.print(detail, Style.DIM)
        case RepositoryNotFound():
            console.error(error.message)
            console.print("hint: run `gitshell init` to create one", Style.DIM)
        case DetachedHead():
            console.error(error.message)
            console.print("hint: check out a branch with `gitshell checkout <name>`", Style.DIM)
        case _:
            console.error(error.message)


def repo_error_exit_code(error: RepoError) -> int:
    match error:
        case InvalidReference():
            return int(ErrorCode.USER_ERROR)
        case (
            PathDoesNotExist()
            | NotADirectory()
            | RepositoryNotFound()
            | AlreadyExists()
            | GitDirNotFound()
            | DetachedHead()
        ):
            return int(ErrorCode.REPO_ERROR)
        case CommandFailed(returncode=-1):
            # git could not be started at all
            return int(ErrorCode.ENV_ERROR)
        case CommandFailed():
            return int(ErrorCode.COMMAND_ERROR)
        case FileAccessError():
            return int(ErrorCode.IO_ERROR)
    return int(ErrorCode.USER_ERROR)
