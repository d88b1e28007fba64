"""Module-level entry points for creating and opening repositories.

    from gitshell.git import create, open_repo, clone_remote

    repo = open_repo("/srv/project").unwrap()
"""

from __future__ import annotations

from pathlib import Path

from gitshell.core.result import Result
from gitshell.git.errors import RepoError
from gitshell.git.repository import Repository

__all__ = ["clone_remote", "create", "is_repo", "open_repo"]


def create(path: str | Path, source: str | None = None) -> Result[Repository, RepoError]:
    """Create a repository at ``path``, cloning the local ``source`` if given."""
    return Repository.create_new(path, source)


def open_repo(path: str | Path) -> Result[Repository, RepoError]:
    """Open an existing working tree or bare repository."""
    return Repository.open(path)


def clone_remote(
    path: str | Path,
    remote: str,
    reference: str | Path | None = None,
) -> Result[Repository, RepoError]:
    """Clone ``remote`` into ``path``, optionally borrowing objects from ``reference``."""
    return Repository.create_new(path, remote, remote_source=True, reference=reference)


def is_repo(obj: object) -> bool:
    return isinstance(obj, Repository)
