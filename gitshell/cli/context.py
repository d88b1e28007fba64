from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import typer

from gitshell.core.config import Config, effective_git_bin, load_config
from gitshell.core.errors import ErrorCode
from gitshell.core.result import Err
from gitshell.git.binary import set_bin, windows_mode
from gitshell.output.console import ConsoleProtocol, RichConsole
from gitshell.platform.detection import is_windows
from gitshell.platform.paths import default_config_path


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Options given before the command name (stored on typer's ctx.obj)."""

    repo: Path | None = None
    git_bin: str | None = None
    config_path: Path | None = None
    env: tuple[tuple[str, str], ...] = ()


def _empty_env() -> dict[str, str]:
    return {}


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo_path: Path
    config: Config
    console: ConsoleProtocol
    env: dict[str, str] = field(default_factory=_empty_env)


def _load(opts: GlobalOptions, console: ConsoleProtocol) -> Config:
    explicit = opts.config_path is not None
    path = opts.config_path or default_config_path()
    if not explicit and not path.exists():
        return Config()

    result = load_config(path)
    if isinstance(result, Err):
        if explicit:
            console.error(result.error.message)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
        console.warning(f"ignoring config: {result.error.message}")
        return Config()
    return result.value


def build_context(ctx: typer.Context) -> CLIContext:
    opts = ctx.obj if isinstance(ctx.obj, GlobalOptions) else GlobalOptions()
    console = RichConsole()
    config = _load(opts, console)

    git_bin = opts.git_bin or effective_git_bin(config)
    if git_bin:
        set_bin(git_bin)
    elif is_windows():
        windows_mode()

    env = dict(config.env)
    env.update(opts.env)

    return CLIContext(
        repo_path=opts.repo or Path.cwd(),
        config=config,
        console=console,
        env=env,
    )
