"""Core types: results, exit codes and configuration."""

from .config import Config, ConfigError, GitConfig, effective_git_bin, load_config
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "Config",
    "ConfigError",
    "GitConfig",
    "effective_git_bin",
    "load_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
