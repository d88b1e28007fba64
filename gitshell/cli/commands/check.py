from __future__ import annotations

import typer

from gitshell.cli.context import build_context
from gitshell.core.errors import ErrorCode
from gitshell.core.result import Err
from gitshell.git.binary import get_bin, is_available
from gitshell.git.repository import Repository
from gitshell.output.console import Style


def check(ctx: typer.Context) -> None:
    """Check that git can be run and report the repository layout."""
    cli = build_context(ctx)
    git_bin = get_bin()
    if not is_available():
        cli.console.error(f"git not found: {git_bin}")
        cli.console.print("hint: pass --git-bin or set GITSHELL_GIT_BIN", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
    cli.console.success(f"git: {git_bin}")

    opened = Repository.open(cli.repo_path, env=cli.env)
    if isinstance(opened, Err):
        cli.console.warning(opened.error.message)
        return

    repo = opened.value
    kind = "bare" if repo.bare else "worktree"
    cli.console.success(f"repository: {repo.path} ({kind})")
    git_dir = repo.git_directory_path()
    if isinstance(git_dir, Err):
        cli.console.warning(git_dir.error.message)
        return
    cli.console.print(f"git dir: {git_dir.value}", Style.DIM)
