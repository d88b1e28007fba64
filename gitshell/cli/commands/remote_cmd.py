from __future__ import annotations

import typer

from gitshell.cli.commands._helpers import open_repository, show_output, unwrap_or_exit
from gitshell.cli.context import build_context


def fetch(ctx: typer.Context) -> None:
    """Download objects and refs from the default remote."""
    cli = build_context(ctx)
    repo = open_repository(cli)
    show_output(cli, unwrap_or_exit(repo.fetch(), cli))


def push(
    ctx: typer.Context,
    remote: str = typer.Argument("", help="Remote name (default: push.default)."),
    branch: str = typer.Argument("", help="Branch to push."),
) -> None:
    """Update a remote branch."""
    cli = build_context(ctx)
    repo = open_repository(cli)
    show_output(cli, unwrap_or_exit(repo.push(remote, branch), cli))


def pull(
    ctx: typer.Context,
    remote: str = typer.Argument("", help="Remote name (default: upstream)."),
    branch: str = typer.Argument("", help="Branch to pull."),
) -> None:
    """Fetch and integrate a remote branch."""
    cli = build_context(ctx)
    repo = open_repository(cli)
    show_output(cli, unwrap_or_exit(repo.pull(remote, branch), cli))
