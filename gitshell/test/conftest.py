from __future__ import annotations

import shutil
from collections.abc import Iterator
from pathlib import Path

import pytest

from gitshell.core.result import Ok
from gitshell.git.binary import get_bin, set_bin
from gitshell.git.repository import Repository
from gitshell.test._support import TEST_ENV

GIT = shutil.which("git")


@pytest.fixture(autouse=True)
def _restore_git_bin() -> Iterator[None]:
    saved = get_bin()
    yield
    set_bin(saved)


@pytest.fixture
def git_bin(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Point gitshell at the real git, isolated from user and system config."""
    if GIT is None:
        pytest.skip("git is not installed")
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.delenv("GIT_DIR", raising=False)
    monkeypatch.delenv("GIT_WORK_TREE", raising=False)
    set_bin(GIT)
    return GIT


@pytest.fixture
def repo(tmp_path: Path, git_bin: str) -> Repository:
    """A freshly initialized working tree with a commit identity configured."""
    result = Repository.open(tmp_path / "repo", create_new=True, env=TEST_ENV)
    assert isinstance(result, Ok)
    return result.value

