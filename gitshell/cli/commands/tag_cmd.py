from __future__ import annotations

import typer

from gitshell.cli.commands._helpers import open_repository, show_output, unwrap_or_exit
from gitshell.cli.context import build_context


tag_app = typer.Typer(no_args_is_help=True)


@tag_app.command("add")
def add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Tag name."),
    message: str | None = typer.Option(
        None, "-m", "--message", help="Annotation (default: the tag name)."
    ),
) -> None:
    """Create an annotated tag at HEAD."""
    cli = build_context(ctx)
    repo = open_repository(cli)
    show_output(cli, unwrap_or_exit(repo.add_tag(name, message), cli))
    cli.console.success(f"tagged {name}")


@tag_app.command("list")
def list_tags(
    ctx: typer.Context,
    pattern: str | None = typer.Argument(None, help="Shell wildcard pattern."),
) -> None:
    """List tags, one per line."""
    cli = build_context(ctx)
    repo = open_repository(cli)
    for tag in unwrap_or_exit(repo.list_tags(pattern), cli):
        cli.console.raw(tag)
