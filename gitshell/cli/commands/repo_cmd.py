from __future__ import annotations

from pathlib import Path

import typer

from gitshell.cli.commands._helpers import open_repository, show_output, unwrap_or_exit
from gitshell.cli.context import build_context
from gitshell.git.repository import Repository


def init(
    ctx: typer.Context,
    path: Path | None = typer.Argument(None, help="Repository path (default: --repo or cwd)."),
    source: str | None = typer.Option(None, "--source", help="Repository to clone from."),
    remote: bool = typer.Option(False, "--remote", help="Treat --source as a remote URL."),
    reference: Path | None = typer.Option(
        None, "--reference", help="Local repository to borrow objects from (remote clones)."
    ),
) -> None:
    """Create a repository: git init, or clone --source into PATH."""
    cli = build_context(ctx)
    target = path or cli.repo_path
    repo = unwrap_or_exit(
        Repository.create_new(
            target,
            source,
            remote_source=remote,
            reference=reference,
            env=cli.env,
        ),
        cli,
    )
    verb = "Initialized" if source is None else "Cloned into"
    cli.console.success(f"{verb} {repo.path}")


def status(
    ctx: typer.Context,
    html: bool = typer.Option(False, "--html", help="Replace newlines with <br />."),
) -> None:
    """Show the working tree status."""
    cli = build_context(ctx)
    repo = open_repository(cli)
    show_output(cli, unwrap_or_exit(repo.status(html=html), cli))


def add(
    ctx: typer.Context,
    files: list[str] | None = typer.Argument(None, help="Paths to stage (default: all)."),
) -> None:
    """Stage files."""
    cli = build_context(ctx)
    repo = open_repository(cli)
    show_output(cli, unwrap_or_exit(repo.add(files or "*"), cli))


def rm(
    ctx: typer.Context,
    files: list[str] = typer.Argument(..., help="Paths to remove."),
    cached: bool = typer.Option(False, "--cached", help="Only remove from the index."),
) -> None:
    """Remove files from the working tree and the index."""
    cli = build_context(ctx)
    repo = open_repository(cli)
    show_output(cli, unwrap_or_exit(repo.rm(files, cached=cached), cli))


def commit(
    ctx: typer.Context,
    message: str = typer.Option(..., "-m", "--message", help="Commit message."),
    commit_all: bool = typer.Option(
        True, "--all/--no-all", help="Commit all tracked changes (git commit -a)."
    ),
) -> None:
    """Record changes."""
    cli = build_context(ctx)
    repo = open_repository(cli)
    show_output(cli, unwrap_or_exit(repo.commit(message, commit_all=commit_all), cli))


def clean(
    ctx: typer.Context,
    dirs: bool = typer.Option(False, "-d", "--dirs", help="Also remove untracked directories."),
    force: bool = typer.Option(False, "-f", "--force", help="Actually delete files."),
) -> None:
    """Remove untracked files."""
    cli = build_context(ctx)
    repo = open_repository(cli)
    show_output(cli, unwrap_or_exit(repo.clean(dirs=dirs, force=force), cli))


def checkout(
    ctx: typer.Context,
    branch: str = typer.Argument(..., help="Branch to check out."),
) -> None:
    """Switch branches."""
    cli = build_context(ctx)
    repo = open_repository(cli)
    show_output(cli, unwrap_or_exit(repo.checkout(branch), cli))


def merge(
    ctx: typer.Context,
    branch: str = typer.Argument(..., help="Branch to merge (always --no-ff)."),
) -> None:
    """Merge a branch into the current one."""
    cli = build_context(ctx)
    repo = open_repository(cli)
    show_output(cli, unwrap_or_exit(repo.merge(branch), cli))


def log(
    ctx: typer.Context,
    filepath: str | None = typer.Argument(None, help="Limit history to this path."),
    fmt: str | None = typer.Option(None, "--format", help="git --pretty=format: string."),
    full_diff: bool = typer.Option(False, "--full-diff", help="Show full patches."),
    follow: bool = typer.Option(False, "--follow", help="Follow renames of PATH."),
) -> None:
    """Show commit history."""
    cli = build_context(ctx)
    repo = open_repository(cli)
    output = unwrap_or_exit(
        repo.log(fmt=fmt, full_diff=full_diff, filepath=filepath, follow=follow), cli
    )
    show_output(cli, output)


def describe(
    ctx: typer.Context,
    text: str | None = typer.Argument(None, help="New description (omit to print it)."),
) -> None:
    """Get or set the repository description."""
    cli = build_context(ctx)
    repo = open_repository(cli)
    if text is None:
        cli.console.raw(unwrap_or_exit(repo.get_description(), cli))
        return
    unwrap_or_exit(repo.set_description(text), cli)
    cli.console.success("description updated")
