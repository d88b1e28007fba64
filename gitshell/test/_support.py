"""Helpers shared by tests that drive a real git."""

from __future__ import annotations

from gitshell.core.result import Ok
from gitshell.git.repository import Repository

TEST_ENV = {
    "GIT_MERGE_AUTOEDIT": "no",
    "GIT_AUTHOR_NAME": "Test Author",
    "GIT_AUTHOR_EMAIL": "author@example.com",
    "GIT_COMMITTER_NAME": "Test Committer",
    "GIT_COMMITTER_EMAIL": "committer@example.com",
}


def commit_file(repo: Repository, name: str, content: str = "content\n") -> None:
    (repo.path / name).write_text(content, encoding="utf-8")
    assert isinstance(repo.add([name]), Ok)
    assert isinstance(repo.commit(f"add {name}"), Ok)
