"""Exception types raised by the installer services.

- InstallerError: base class, caught once in cli.py
- PreconditionError: environment is not ready (no git, not a repository, ...)
- GitError: a git command exited non-zero
- ConfigError: invalid environment variable or flag value
"""

from typing import List, Optional

__all__ = [
    "InstallerError",
    "PreconditionError",
    "GitError",
    "ConfigError",
]


class InstallerError(Exception):
    """Base exception for installer failures."""

    def __init__(self, message: str, hints: Optional[List[str]] = None):
        super().__init__(message)
        self.hints = list(hints or [])


class PreconditionError(InstallerError):
    """Raised before any change when a required tool or directory is missing."""


class GitError(InstallerError):
    """Raised when a git command fails.

    Keeps the argv and stderr of the failed command so the CLI can show
    what went wrong without re-running it.
    """

    def __init__(self, command: List[str], stderr: str = "", hints: Optional[List[str]] = None):
        self.command = list(command)
        self.stderr = stderr.strip()
        message = f"git command failed: {' '.join(self.command)}"
        if self.stderr:
            message = f"{message}\n   {self.stderr}"
        super().__init__(message, hints)


class ConfigError(InstallerError):
    """Raised for an unknown language, hosting or MCP choice."""
