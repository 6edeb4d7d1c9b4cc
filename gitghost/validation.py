"""
Validation — Error taxonomy and repository checks.

Fatal conditions (invalid repositories, a failed history query, missing
configuration) are raised as exceptions. Per-commit and push failures are
collected on the SyncResult instead.

## Usage

    from gitghost.validation import InvalidRepository, validate_git_repository

    try:
        validate_git_repository(path, role="source")
    except InvalidRepository as e:
        print(f"Validation failed: {e}")
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class GitGhostError(Exception):
    """Base class for all GitGhost errors."""
    pass


class InvalidRepository(GitGhostError):
    """Raised when a path lacks git metadata."""

    def __init__(self, path: Path, role: Optional[str] = None):
        self.path = Path(path)
        self.role = role
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.role:
            return f"The {self.role} repo path ({self.path}) is not a valid Git repository."
        return f"{self.path} is not a valid Git repository."


class SubprocessFailure(GitGhostError):
    """Raised when an external command exits non-zero or cannot start."""

    def __init__(self, message: str, command: Optional[list] = None):
        self.message = message
        self.command = command
        super().__init__(message)


class MalformedRecord(GitGhostError):
    """Raised when a history line does not parse into hash and timestamp."""

    def __init__(self, line: str, reason: str = "expected <hash>|<timestamp>"):
        self.line = line
        self.reason = reason
        super().__init__(f"Malformed history record {line!r}: {reason}")


class ConfigurationError(GitGhostError):
    """Raised when configuration is missing or invalid."""
    pass


def is_git_repository(path: Path) -> bool:
    """Check for git metadata (a .git directory, or a .git file for worktrees)."""
    git_dir = Path(path) / ".git"
    return git_dir.is_dir() or git_dir.is_file()


def validate_git_repository(path: Path, role: Optional[str] = None) -> None:
    """Raise InvalidRepository unless path holds git metadata."""
    if not is_git_repository(path):
        raise InvalidRepository(path, role)
