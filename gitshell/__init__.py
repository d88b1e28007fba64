"""gitshell: a thin facade over the git executable."""

__version__ = "0.1.4"
