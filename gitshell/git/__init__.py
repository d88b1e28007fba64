"""Git operations module.

This module wraps the git executable:
- Repository: one handle per working tree or bare repository
- binary: the process-wide executable setting and availability probe
- facade: create / open / clone entry points

Usage:
    from gitshell.git import Repository, open_repo

    match open_repo(Path("/path/to/repo")):
        case Ok(repo):
            print(repo.active_branch().unwrap_or("(detached)"))
        case Err(e):
            print(e.message)
"""

from gitshell.git.binary import (
    DEFAULT_BIN,
    get_bin,
    is_available,
    reset_bin,
    set_bin,
    windows_mode,
)
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
from gitshell.git.facade import clone_remote, create, is_repo, open_repo
from gitshell.git.repository import Repository

__all__ = [
    # Repository
    "Repository",
    # Executable
    "DEFAULT_BIN",
    "get_bin",
    "is_available",
    "reset_bin",
    "set_bin",
    "windows_mode",
    # Facade
    "clone_remote",
    "create",
    "is_repo",
    "open_repo",
    # Errors
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
