"""
Git Access — Subprocess runner and history listing.
"""

from .commits import CommitRecord, list_commits, parse_log_line
from .runner import CommandResult, run_command

__all__ = [
    "CommandResult",
    "CommitRecord",
    "list_commits",
    "parse_log_line",
    "run_command",
]
