"""Platform abstraction layer."""

from .detection import (
    Platform,
    detect_platform,
    is_windows,
)
from .paths import (
    default_config_path,
    home,
    user_config_dir,
)
from .process import (
    COMMAND_NOT_FOUND,
    ProcessError,
    merged_env,
    run,
    run_status,
)

__all__ = [
    # detection
    "Platform",
    "detect_platform",
    "is_windows",
    # paths
    "default_config_path",
    "home",
    "user_config_dir",
    # process
    "COMMAND_NOT_FOUND",
    "ProcessError",
    "merged_env",
    "run",
    "run_status",
]
