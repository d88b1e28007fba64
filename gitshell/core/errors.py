"""Exit codes for the gitshell command line.

The numeric values are part of the CLI contract and should remain stable:
- 0: Success
- 1: User error (bad arguments, unusable reference repository)
- 2: Environment error (git executable missing, unreadable config)
- 3: Repository error (path missing, not a directory, no repository marker)
- 4: Command error (git exited with a nonzero status)
- 5: I/O error (description file could not be read or written)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    REPO_ERROR = 3
    COMMAND_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")
