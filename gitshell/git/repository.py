"""Git repository handle.

A Repository owns a validated path (a working tree or a bare repository) and
offers one method per git command. Every method builds an argument vector,
runs it with the configured executable inside the repository, and returns a
Result.

Usage:
    match Repository.open(Path("/path/to/repo")):
        case Ok(repo):
            repo.set_env("GIT_AUTHOR_NAME", "Build Bot")
            repo.add(["README.md"])
            repo.commit("docs: add readme")
        case Err(e):
            print(e.message)

    # Create (init or clone) in one step
    repo = Repository.create_new(target, source="https://example.com/x.git", remote_source=True)
"""

from __future__ import annotations

import configparser
import re
from collections.abc import Mapping, Sequence
from pathlib import Path

from gitshell.core.result import Err, Ok, Result
from gitshell.git.binary import get_bin
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
from gitshell.platform.process import merged_env
from gitshell.platform.process import run as run_process

__all__ = ["Repository"]

_GITDIR_RE = re.compile(r"^gitdir: (.+)$", re.MULTILINE)
_TRUE_VALUES = frozenset({"true", "yes", "on", "1"})
_ACTIVE_MARKER = "* "

type Files = str | Sequence[str]


class Repository:
    """Handle on a single git repository.

    Prefer ``Repository.open`` or ``Repository.create_new`` over calling the
    constructor, which trusts its arguments.

    Attributes:
        path: Absolute repository path (read-only)
        bare: True for a bare repository (read-only)
    """

    def __init__(
        self,
        path: Path,
        *,
        bare: bool = False,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._path = path
        self._bare = bare
        self._env: dict[str, str] = dict(env or {})

    def __repr__(self) -> str:
        kind = "bare" if self._bare else "worktree"
        return f"Repository({str(self._path)!r}, {kind})"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def bare(self) -> bool:
        return self._bare

    @property
    def env(self) -> dict[str, str]:
        """Copy of the environment overrides passed to every command."""
        return dict(self._env)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def open(
        cls,
        path: str | Path,
        *,
        create_new: bool = False,
        init: bool = True,
        env: Mapping[str, str] | None = None,
    ) -> Result[Repository, RepoError]:
        """Resolve and validate a repository path.

        Args:
            path: Repository location
            create_new: Accept (and create if needed) a path with no repository
            init: Run ``git init`` when a new location is accepted
            env: Initial environment overrides

        Returns:
            Ok(Repository) on success
            Err(PathDoesNotExist | NotADirectory | RepositoryNotFound | CommandFailed)
        """
        raw = Path(path)
        try:
            resolved = raw.resolve(strict=True)
        except OSError:
            return cls._open_missing(raw, create_new=create_new, init=init, env=env)

        if not resolved.is_dir():
            return Err(NotADirectory(resolved))

        if (resolved / ".git").exists():
            return Ok(cls(resolved, bare=False, env=env))

        config = resolved / "config"
        if config.is_file() and _config_marks_bare(config):
            return Ok(cls(resolved, bare=True, env=env))

        if not create_new:
            return Err(RepositoryNotFound(resolved))

        return cls._accept_new(resolved, init=init, env=env)

    @classmethod
    def _open_missing(
        cls,
        raw: Path,
        *,
        create_new: bool,
        init: bool,
        env: Mapping[str, str] | None,
    ) -> Result[Repository, RepoError]:
        if not create_new:
            return Err(PathDoesNotExist(raw))

        if not raw.absolute().parent.is_dir():
            return Err(
                PathDoesNotExist(raw, reason="cannot create repository in non-existent directory")
            )

        try:
            raw.mkdir()
        except OSError as e:
            return Err(PathDoesNotExist(raw, reason=str(e)))

        return cls._accept_new(raw.resolve(), init=init, env=env)

    @classmethod
    def _accept_new(
        cls,
        path: Path,
        *,
        init: bool,
        env: Mapping[str, str] | None,
    ) -> Result[Repository, RepoError]:
        repo = cls(path, bare=False, env=env)
        if init:
            result = repo.run("init")
            if isinstance(result, Err):
                return result
        return Ok(repo)

    @classmethod
    def create_new(
        cls,
        path: str | Path,
        source: str | None = None,
        *,
        remote_source: bool = False,
        reference: str | Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> Result[Repository, RepoError]:
        """Create a repository by cloning ``source`` or by running ``git init``.

        Args:
            path: Target location (created if its parent exists)
            source: Repository to clone; None runs ``git init``
            remote_source: Clone ``source`` as a remote URL instead of ``--local``
            reference: Local repository used as ``--reference`` for remote clones
            env: Initial environment overrides

        Returns:
            Ok(Repository) on success
            Err(AlreadyExists) if ``path`` already holds a repository (no git call)
            Err(InvalidReference) if ``reference`` is not a repository
        """
        target = Path(path)
        if target.is_dir() and (target / ".git").exists():
            return Err(AlreadyExists(target))

        reference_path: Path | None = None
        if source is not None and remote_source and reference:
            ref_result = cls.open(reference)
            if isinstance(ref_result, Err):
                return Err(InvalidReference(Path(reference)))
            reference_path = ref_result.value.path

        opened = cls.open(target, create_new=True, init=False, env=env)
        if isinstance(opened, Err):
            return opened
        repo = opened.value

        if source is None:
            result = repo.run("init")
        elif remote_source:
            result = repo.clone_remote(source, reference_path)
        else:
            result = repo.clone_from(source)

        if isinstance(result, Err):
            return result
        return Ok(repo)

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def set_env(self, key: str, value: str) -> None:
        """Set an environment variable for every subsequent git call."""
        self._env[key] = value

    def run(self, *args: str) -> Result[str, CommandFailed]:
        """Run ``git <args>`` in this repository and return its stdout."""
        cmd = [get_bin(), *args]
        result = run_process(cmd, cwd=self._path, env=merged_env(self._env))
        return result.map_err(CommandFailed.from_process_error)

    def git_directory_path(self) -> Result[Path, GitDirNotFound]:
        """Locate the metadata directory (the ".git" directory).

        Follows a ``gitdir:`` pointer file for worktrees and submodules.
        """
        if self._bare:
            return Ok(self._path)

        dot_git = self._path / ".git"
        if dot_git.is_dir():
            return Ok(dot_git)

        if dot_git.is_file():
            try:
                content = dot_git.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError):
                return Err(GitDirNotFound(self._path))
            match = _GITDIR_RE.search(content)
            if match and match.group(1).strip():
                pointer = Path(match.group(1).strip())
                if pointer.is_absolute():
                    return Ok(pointer)
                return Ok((self._path / pointer).resolve())

        return Err(GitDirNotFound(self._path))

    # -------------------------------------------------------------------------
    # Working tree
    # -------------------------------------------------------------------------

    def status(self, html: bool = False) -> Result[str, CommandFailed]:
        """Run ``git status``; with ``html`` newlines become ``<br />``."""
        result = self.run("status")
        if html:
            return result.map(lambda out: out.replace("\n", "<br />"))
        return result

    def add(self, files: Files = "*") -> Result[str, CommandFailed]:
        return self.run("add", "-v", "--", *_as_args(files))

    def rm(self, files: Files = "*", cached: bool = False) -> Result[str, CommandFailed]:
        flags = ["--cached"] if cached else []
        return self.run("rm", *flags, "--", *_as_args(files))

    def commit(self, message: str = "", commit_all: bool = True) -> Result[str, CommandFailed]:
        """Commit staged changes (all tracked changes with ``commit_all``)."""
        return self.run("commit", "-av" if commit_all else "-v", "-m", message)

    def clean(self, dirs: bool = False, force: bool = False) -> Result[str, CommandFailed]:
        args = ["clean"]
        if force:
            args.append("-f")
        if dirs:
            args.append("-d")
        return self.run(*args)

    # -------------------------------------------------------------------------
    # Cloning
    # -------------------------------------------------------------------------

    def clone_to(self, target: str | Path) -> Result[str, CommandFailed]:
        """Clone this repository into ``target``."""
        return self.run("clone", "--local", str(self._path), str(target))

    def clone_from(self, source: str | Path) -> Result[str, CommandFailed]:
        """Clone the local repository ``source`` into this location."""
        return self.run("clone", "--local", str(source), str(self._path))

    def clone_remote(
        self,
        source: str,
        reference: str | Path | None = None,
    ) -> Result[str, CommandFailed]:
        """Clone a remote URL into this location."""
        args = ["clone"]
        if reference:
            args += ["--reference", str(reference)]
        return self.run(*args, source, str(self._path))

    # -------------------------------------------------------------------------
    # Branches
    # -------------------------------------------------------------------------

    def create_branch(self, branch: str) -> Result[str, CommandFailed]:
        return self.run("branch", branch)

    def delete_branch(self, branch: str, force: bool = False) -> Result[str, CommandFailed]:
        return self.run("branch", "-D" if force else "-d", branch)

    def list_branches(self, keep_asterisk: bool = False) -> Result[list[str], CommandFailed]:
        """List local branches.

        The active branch keeps its ``* `` marker only with ``keep_asterisk``.
        """
        result = self.run("branch")
        if keep_asterisk:
            return result.map(_split_lines)
        return result.map(lambda out: [b.removeprefix(_ACTIVE_MARKER) for b in _split_lines(out)])

    def list_remote_branches(self) -> Result[list[str], CommandFailed]:
        """List remote-tracking branches, without the ``origin/HEAD -> ...`` alias."""
        return self.run("branch", "-r").map(
            lambda out: [b for b in _split_lines(out) if "HEAD -> " not in b]
        )

    def active_branch(self, keep_asterisk: bool = False) -> Result[str, RepoError]:
        """Return the name of the checked-out branch."""
        listed = self.list_branches(keep_asterisk=True)
        if isinstance(listed, Err):
            return listed

        active = [b for b in listed.value if b.startswith("*")]
        if not active or active[0].removeprefix(_ACTIVE_MARKER).startswith("("):
            return Err(DetachedHead(self._path))

        if keep_asterisk:
            return Ok(active[0])
        return Ok(active[0].removeprefix(_ACTIVE_MARKER))

    def checkout(self, branch: str) -> Result[str, CommandFailed]:
        return self.run("checkout", branch)

    def merge(self, branch: str) -> Result[str, CommandFailed]:
        """Merge ``branch`` into the current branch, always creating a merge commit."""
        return self.run("merge", branch, "--no-ff")

    # -------------------------------------------------------------------------
    # Remotes
    # -------------------------------------------------------------------------

    def fetch(self) -> Result[str, CommandFailed]:
        return self.run("fetch")

    def push(self, remote: str = "", branch: str = "") -> Result[str, CommandFailed]:
        """Push ``branch`` to ``remote``.

        With both omitted git follows the ``push.default`` setting.
        """
        return self.run("push", *_present(remote, branch))

    def pull(self, remote: str = "", branch: str = "") -> Result[str, CommandFailed]:
        """Pull ``branch`` from ``remote`` (the configured upstream when omitted)."""
        return self.run("pull", *_present(remote, branch))

    # -------------------------------------------------------------------------
    # Tags and history
    # -------------------------------------------------------------------------

    def add_tag(self, tag: str, message: str | None = None) -> Result[str, CommandFailed]:
        """Create an annotated tag; the message defaults to the tag name."""
        return self.run("tag", "-a", tag, "-m", tag if message is None else message)

    def list_tags(self, pattern: str | None = None) -> Result[list[str], CommandFailed]:
        """List tags, optionally only those matching a shell wildcard pattern."""
        return self.run("tag", "-l", *_present(pattern or "")).map(_split_lines)

    def log(
        self,
        fmt: str | None = None,
        full_diff: bool = False,
        filepath: str | None = None,
        follow: bool = False,
    ) -> Result[str, CommandFailed]:
        """Run ``git log``.

        Args:
            fmt: ``--pretty=format:`` string
            full_diff: Show full patches (``--full-diff -p``)
            filepath: Limit history to this path
            follow: Follow renames of ``filepath``; takes precedence over full_diff
        """
        args = ["log"]
        if fmt is not None:
            args.append(f"--pretty=format:{fmt}")
        # git cannot combine --follow with --full-diff
        if follow:
            args.append("--follow")
        elif full_diff:
            args += ["--full-diff", "-p"]
        if filepath:
            args += ["--", filepath]
        return self.run(*args)

    # -------------------------------------------------------------------------
    # Description
    # -------------------------------------------------------------------------

    def set_description(self, text: str) -> Result[None, RepoError]:
        git_dir = self.git_directory_path()
        if isinstance(git_dir, Err):
            return git_dir

        path = git_dir.value / "description"
        try:
            path.write_bytes(text.encode("utf-8"))
        except OSError as e:
            return Err(FileAccessError(path, reason=str(e)))
        return Ok(None)

    def get_description(self) -> Result[str, RepoError]:
        """Return the description file verbatim."""
        git_dir = self.git_directory_path()
        if isinstance(git_dir, Err):
            return git_dir

        path = git_dir.value / "description"
        try:
            return Ok(path.read_bytes().decode("utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            return Err(FileAccessError(path, reason=str(e)))


def _config_marks_bare(path: Path) -> bool:
    """Return True if a git config file sets ``bare`` to a true value."""
    parser = configparser.ConfigParser(
        strict=False,
        allow_no_value=True,
        interpolation=None,
        inline_comment_prefixes=("#", ";"),
    )
    try:
        parser.read(path, encoding="utf-8")
    except (configparser.Error, OSError, UnicodeDecodeError):
        return False

    for section in parser.sections():
        if not parser.has_option(section, "bare"):
            continue
        value = parser.get(section, "bare")
        # A bare key with no "= value" means true in git config syntax
        if value is None or value.strip().lower() in _TRUE_VALUES:
            return True
    return False


def _split_lines(output: str) -> list[str]:
    return [line.strip() for line in output.split("\n") if line.strip()]


def _as_args(files: Files) -> list[str]:
    if isinstance(files, str):
        return [files]
    return [str(f) for f in files]


def _present(*args: str) -> list[str]:
    return [a for a in args if a]
