"""Tests that drive a real git executable (skipped when git is missing)."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from gitshell.core.result import Err, Ok
from gitshell.git.errors import CommandFailed, DetachedHead, InvalidReference
from gitshell.git.repository import Repository
from gitshell.test._support import TEST_ENV, commit_file


class TestRoundTrip:
    def test_add_commit_then_status_and_log(self, repo: Repository) -> None:
        (repo.path / "hello.txt").write_text("hello\n", encoding="utf-8")
        before = repo.status().unwrap()
        assert "hello.txt" in before

        assert isinstance(repo.add(["hello.txt"]), Ok)
        assert isinstance(repo.commit("add hello"), Ok)

        after = repo.status().unwrap()
        assert "hello.txt" not in after
        entries = [line for line in repo.log(fmt="%H").unwrap().splitlines() if line.strip()]
        assert len(entries) >= 1

    def test_add_everything_by_default(self, repo: Repository) -> None:
        (repo.path / "a.txt").write_text("a")
        (repo.path / "b.txt").write_text("b")

        output = repo.add().unwrap()

        assert "a.txt" in output
        assert "b.txt" in output

    def test_commit_message_with_shell_characters(self, repo: Repository) -> None:
        message = "fix: handle $HOME, `quotes` and 'single' \"double\"; done"
        commit_file(repo, "a.txt")
        (repo.path / "a.txt").write_text("changed\n")

        repo.commit(message).unwrap()

        assert repo.log(fmt="%s").unwrap().splitlines()[0] == message

    def test_rm_cached_untracks_file(self, repo: Repository) -> None:
        commit_file(repo, "a.txt")

        repo.rm(["a.txt"], cached=True).unwrap()

        assert (repo.path / "a.txt").exists()
        assert "a.txt" in repo.status().unwrap()

    def test_clean_force_removes_untracked(self, repo: Repository) -> None:
        commit_file(repo, "keep.txt")
        (repo.path / "junk.txt").write_text("x")

        repo.clean(force=True).unwrap()

        assert not (repo.path / "junk.txt").exists()
        assert (repo.path / "keep.txt").exists()

    def test_log_follow_filepath(self, repo: Repository) -> None:
        commit_file(repo, "a.txt")
        commit_file(repo, "b.txt")

        history = repo.log(fmt="%s", filepath="a.txt", follow=True).unwrap()

        assert history.strip() == "add a.txt"

    def test_full_diff_with_latin1_content(self, repo: Repository) -> None:
        (repo.path / "legacy.txt").write_bytes("caf\u00e9\n".encode("latin-1"))
        repo.add(["legacy.txt"]).unwrap()
        repo.commit("add legacy file").unwrap()

        result = repo.log(full_diff=True)

        assert isinstance(result, Ok)
        assert "caf\ufffd" in result.value

    def test_log_path_named_like_a_branch(self, repo: Repository) -> None:
        commit_file(repo, "topic")
        repo.create_branch("topic").unwrap()

        history = repo.log(fmt="%s", filepath="topic").unwrap()

        assert history.strip() == "add topic"

    def test_log_deleted_path(self, repo: Repository) -> None:
        commit_file(repo, "gone.txt")
        repo.rm(["gone.txt"]).unwrap()
        repo.commit("remove gone.txt").unwrap()

        history = repo.log(fmt="%s", filepath="gone.txt").unwrap()

        assert history.splitlines() == ["remove gone.txt", "add gone.txt"]


class TestBranches:
    def test_listing_and_active_branch(self, repo: Repository) -> None:
        commit_file(repo, "a.txt")
        default = repo.active_branch().unwrap()

        repo.create_branch("feature").unwrap()
        stripped = repo.list_branches().unwrap()
        marked = repo.list_branches(keep_asterisk=True).unwrap()

        assert sorted(stripped) == sorted([default, "feature"])
        assert all("*" not in b and b for b in stripped)
        assert f"* {default}" in marked
        assert repo.active_branch(keep_asterisk=True) == Ok(f"* {default}")

    def test_checkout_and_merge(self, repo: Repository) -> None:
        commit_file(repo, "a.txt")
        default = repo.active_branch().unwrap()
        repo.create_branch("topic").unwrap()
        repo.checkout("topic").unwrap()
        commit_file(repo, "b.txt")

        repo.checkout(default).unwrap()
        assert not (repo.path / "b.txt").exists()
        repo.merge("topic").unwrap()

        assert (repo.path / "b.txt").exists()
        assert "Merge branch" in repo.log(fmt="%s").unwrap()

    def test_delete_branch(self, repo: Repository) -> None:
        commit_file(repo, "a.txt")
        repo.create_branch("gone").unwrap()

        repo.delete_branch("gone").unwrap()

        assert "gone" not in repo.list_branches().unwrap()

    def test_no_commits_has_no_active_branch(self, repo: Repository) -> None:
        assert repo.active_branch() == Err(DetachedHead(repo.path))

    def test_detached_head(self, repo: Repository) -> None:
        commit_file(repo, "a.txt")
        sha = repo.log(fmt="%H").unwrap().split()[0]

        repo.checkout(sha).unwrap()

        assert repo.active_branch() == Err(DetachedHead(repo.path))

    def test_unknown_branch_fails_with_both_streams(self, repo: Repository) -> None:
        commit_file(repo, "a.txt")

        result = repo.checkout("no-such-branch")

        assert isinstance(result, Err)
        assert isinstance(result.error, CommandFailed)
        assert result.error.returncode != 0
        assert "no-such-branch" in result.error.message
        assert result.error.message == f"{result.error.stderr}\n{result.error.stdout}"


class TestTags:
    def test_add_and_list(self, repo: Repository) -> None:
        commit_file(repo, "a.txt")

        repo.add_tag("v1.0").unwrap()
        repo.add_tag("v2.0", "second").unwrap()

        assert repo.list_tags() == Ok(["v1.0", "v2.0"])
        assert repo.list_tags("v1*") == Ok(["v1.0"])
        assert repo.list_tags("nothing*") == Ok([])


class TestCloning:
    @pytest.fixture
    def origin(self, repo: Repository) -> Repository:
        commit_file(repo, "a.txt")
        return repo

    def test_local_clone_and_remote_branches(self, tmp_path: Path, origin: Repository) -> None:
        clone = Repository.create_new(tmp_path / "clone", str(origin.path), env=TEST_ENV).unwrap()
        default = origin.active_branch().unwrap()

        remotes = clone.list_remote_branches().unwrap()

        assert (clone.path / "a.txt").exists()
        assert f"origin/{default}" in remotes
        assert all("HEAD -> " not in r for r in remotes)

    def test_clone_to(self, tmp_path: Path, origin: Repository) -> None:
        origin.clone_to(tmp_path / "copy").unwrap()

        assert Repository.open(tmp_path / "copy").is_ok()

    def test_remote_clone_with_reference(self, tmp_path: Path, origin: Repository) -> None:
        clone = Repository.create_new(
            tmp_path / "clone",
            origin.path.as_uri(),
            remote_source=True,
            reference=origin.path,
        ).unwrap()

        alternates = clone.path / ".git" / "objects" / "info" / "alternates"
        assert (clone.path / "a.txt").exists()
        assert alternates.is_file()

    def test_invalid_reference(self, tmp_path: Path, origin: Repository) -> None:
        plain = tmp_path / "plain"
        plain.mkdir()

        result = Repository.create_new(
            tmp_path / "clone", origin.path.as_uri(), remote_source=True, reference=plain
        )

        assert result == Err(InvalidReference(plain))

    def test_fetch_and_pull(self, tmp_path: Path, origin: Repository) -> None:
        clone = Repository.create_new(tmp_path / "clone", str(origin.path), env=TEST_ENV).unwrap()
        commit_file(origin, "b.txt")

        clone.fetch().unwrap()
        clone.pull().unwrap()

        assert (clone.path / "b.txt").exists()

    def test_push(self, tmp_path: Path, git_bin: str, origin: Repository) -> None:
        bare = Repository.open(tmp_path / "hub.git", create_new=True, init=False).unwrap()
        bare.run("init", "--bare").unwrap()
        default = origin.active_branch().unwrap()
        origin.run("remote", "add", "hub", str(bare.path)).unwrap()

        origin.push("hub", default).unwrap()

        reopened = Repository.open(bare.path).unwrap()
        assert reopened.bare is True
        assert default in reopened.list_branches().unwrap()


class TestBareAndDescription:
    def test_bare_repository_git_dir(self, tmp_path: Path, git_bin: str) -> None:
        path = tmp_path / "store.git"
        Repository.open(path, create_new=True, init=False).unwrap().run("init", "--bare").unwrap()

        first = Repository.open(path).unwrap()
        second = Repository.open(path).unwrap()

        assert first.bare is True
        assert first.git_directory_path() == Ok(path.resolve())
        assert first.git_directory_path() == second.git_directory_path()

    def test_description_round_trip(self, repo: Repository) -> None:
        repo.set_description("x").unwrap()

        assert repo.get_description() == Ok("x")

    def test_worktree_pointer(self, repo: Repository, tmp_path: Path) -> None:
        commit_file(repo, "a.txt")
        repo.run("worktree", "add", "-b", "wt-branch", str(tmp_path / "wt")).unwrap()

        worktree = Repository.open(tmp_path / "wt").unwrap()
        git_dir = worktree.git_directory_path().unwrap()

        assert (tmp_path / "wt" / ".git").is_file()
        assert git_dir.resolve() == (repo.path / ".git" / "worktrees" / "wt").resolve()


class TestEnvironment:
    def test_override_visible_with_inherited_environment(self, repo: Repository) -> None:
        repo.set_env("GIT_AUTHOR_NAME", "Probe Person")

        ident = repo.run("var", "GIT_AUTHOR_IDENT").unwrap()

        assert "Probe Person" in ident

    @pytest.mark.skipif(sys.platform == "win32", reason="git needs SYSTEMROOT on Windows")
    def test_override_visible_with_empty_environment(self, repo: Repository) -> None:
        repo.set_env("GIT_AUTHOR_NAME", "Empty Env Person")
        repo.set_env("GIT_AUTHOR_EMAIL", "empty@example.com")

        with patch.dict(os.environ, {}, clear=True):
            result = repo.run("var", "GIT_AUTHOR_IDENT")
            assert "GIT_AUTHOR_NAME" not in os.environ

        assert isinstance(result, Ok)
        assert "Empty Env Person" in result.value

    def test_commit_uses_override_identity(self, repo: Repository) -> None:
        repo.set_env("GIT_AUTHOR_NAME", "Release Bot")
        commit_file(repo, "a.txt")

        assert repo.log(fmt="%an").unwrap().strip() == "Release Bot"
