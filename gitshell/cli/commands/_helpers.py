"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from gitshell.core.result import Err, Result
from gitshell.git.errors import RepoError
from gitshell.git.repository import Repository
from gitshell.output.errors import print_repo_error, repo_error_exit_code

if TYPE_CHECKING:
    from gitshell.cli.context import CLIContext


def unwrap_or_exit[T](result: Result[T, RepoError], ctx: CLIContext) -> T:
    """Return the Ok value, or print the error and exit with its mapped code."""
    if isinstance(result, Err):
        print_repo_error(result.error, ctx.console)
        raise typer.Exit(code=repo_error_exit_code(result.error))
    return result.value


def open_repository(ctx: CLIContext) -> Repository:
    return unwrap_or_exit(Repository.open(ctx.repo_path, env=ctx.env), ctx)


def show_output(ctx: CLIContext, output: str) -> None:
    """Print git output as-is, skipping empty output."""
    if output.strip():
        ctx.console.raw(output)


def parse_env_pairs(values: list[str]) -> tuple[tuple[str, str], ...]:
    """Parse repeated ``KEY=VALUE`` options."""
    pairs: list[tuple[str, str]] = []
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected KEY=VALUE, got {item!r}", param_hint="--env")
        pairs.append((key, value))
    return tuple(pairs)
