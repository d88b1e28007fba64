"""Typed configuration loading and access.

The config file is optional. When present it may pin the git executable and
declare environment overrides applied to every repository handle:

    [git]
    bin = "/usr/local/bin/git"

    [env]
    GIT_AUTHOR_NAME = "Build Bot"
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_map, get_table

__all__ = [
    "Config",
    "ConfigError",
    "GitConfig",
    "GIT_BIN_ENV_VAR",
    "effective_git_bin",
    "load_config",
]

# Takes precedence over [git] bin
GIT_BIN_ENV_VAR = "GITSHELL_GIT_BIN"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class GitConfig:
    """Executable configuration."""

    bin: str | None = None


def _empty_env() -> dict[str, str]:
    return {}


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    git: GitConfig = field(default_factory=GitConfig)
    env: dict[str, str] = field(default_factory=_empty_env)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: if [env] holds a non-string value.
        """
        git: StrDict = get_table(data, "git") or {}

        env: dict[str, str] = {}
        if "env" in data:
            parsed = get_str_map(data, "env")
            if parsed is None:
                raise ValueError("[env] must be a table of string values")
            env = parsed

        return cls(git=GitConfig(bin=get_str(git, "bin")), env=env)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to config.toml file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def effective_git_bin(config: Config, environ: Mapping[str, str] | None = None) -> str | None:
    """Return the executable to use: $GITSHELL_GIT_BIN, then [git] bin, else None."""
    env = os.environ if environ is None else environ
    override = env.get(GIT_BIN_ENV_VAR, "").strip()
    return override or config.git.bin
