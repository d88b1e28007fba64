from __future__ import annotations

import typer

from gitshell.cli.commands._helpers import open_repository, show_output, unwrap_or_exit
from gitshell.cli.context import build_context


branch_app = typer.Typer(no_args_is_help=True)


@branch_app.command("list")
def list_branches(
    ctx: typer.Context,
    remote: bool = typer.Option(False, "-r", "--remote", help="List remote-tracking branches."),
    keep_asterisk: bool = typer.Option(
        False, "--keep-asterisk", help="Keep the '* ' marker on the active branch."
    ),
) -> None:
    """List branches, one per line."""
    cli = build_context(ctx)
    repo = open_repository(cli)
    if remote:
        names = unwrap_or_exit(repo.list_remote_branches(), cli)
    else:
        names = unwrap_or_exit(repo.list_branches(keep_asterisk=keep_asterisk), cli)
    for name in names:
        cli.console.raw(name)


@branch_app.command("create")
def create(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Branch name."),
) -> None:
    """Create a branch at HEAD."""
    cli = build_context(ctx)
    repo = open_repository(cli)
    show_output(cli, unwrap_or_exit(repo.create_branch(name), cli))
    cli.console.success(f"created branch {name}")


@branch_app.command("delete")
def delete(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Branch name."),
    force: bool = typer.Option(False, "-f", "--force", help="Delete even if unmerged (-D)."),
) -> None:
    """Delete a branch."""
    cli = build_context(ctx)
    repo = open_repository(cli)
    show_output(cli, unwrap_or_exit(repo.delete_branch(name, force=force), cli))


@branch_app.command("current")
def current(ctx: typer.Context) -> None:
    """Print the active branch."""
    cli = build_context(ctx)
    repo = open_repository(cli)
    cli.console.raw(unwrap_or_exit(repo.active_branch(), cli))
