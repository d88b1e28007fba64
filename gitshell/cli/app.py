from __future__ import annotations

from pathlib import Path

import typer

from gitshell import __version__
from gitshell.cli.commands._helpers import parse_env_pairs
from gitshell.cli.commands.branch_cmd import branch_app
from gitshell.cli.commands.check import check
from gitshell.cli.commands.remote_cmd import fetch, pull, push
from gitshell.cli.commands.repo_cmd import (
    add,
    checkout,
    clean,
    commit,
    describe,
    init,
    log,
    merge,
    rm,
    status,
)
from gitshell.cli.commands.tag_cmd import tag_app
from gitshell.cli.context import GlobalOptions


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(init)
app.command()(status)
app.command()(add)
app.command()(rm)
app.command()(commit)
app.command()(clean)
app.command()(checkout)
app.command()(merge)
app.command()(fetch)
app.command()(push)
app.command()(pull)
app.command()(log)
app.command()(describe)
app.command()(check)

# Sub-apps
app.add_typer(branch_app, name="branch", help="List, create and delete branches.")
app.add_typer(tag_app, name="tag", help="Create and list tags.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    repo: Path | None = typer.Option(
        None,
        "-C",
        "--repo",
        help="Repository path (default: current directory).",
    ),
    git_bin: str | None = typer.Option(
        None,
        "--git-bin",
        help="git executable (overrides GITSHELL_GIT_BIN and the config file).",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: user config dir / config.toml).",
    ),
    env: list[str] | None = typer.Option(
        None,
        "--env",
        help="KEY=VALUE passed to git; repeatable.",
    ),
) -> None:
    ctx.obj = GlobalOptions(
        repo=repo,
        git_bin=git_bin,
        config_path=config,
        env=parse_env_pairs(env or []),
    )


def main() -> None:
    app()
