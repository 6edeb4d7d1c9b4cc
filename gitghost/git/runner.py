"""
Command Runner — Execute one git invocation in a working directory.

Commands are passed as argument lists, never as shell strings, so author
names and hashes reach git unescaped and uninterpreted. The committer date
is supplied through the environment rather than the command line.

The runner never raises: every failure, including a process that cannot be
started, is reported through the returned CommandResult.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

START_FAILURE_MESSAGE = "Failed to start process."

_NEWLINE = re.compile(r"\r\n|\r|\n")


@dataclass
class CommandResult:
    """Outcome of a single command invocation."""

    success: bool
    output_lines: List[str] = field(default_factory=list)
    error: str = ""


Runner = Callable[..., CommandResult]


def format_git_date(timestamp: int) -> str:
    """Render epoch seconds in git's raw date format."""
    return f"{int(timestamp)} +0000"


def split_lines(text: str) -> List[str]:
    """Split output on any newline convention, dropping surrounding whitespace."""
    text = text.strip()
    if not text:
        return []
    return _NEWLINE.split(text)


def run_command(
    args: Sequence[str],
    cwd: Union[str, Path],
    committer_timestamp: Optional[int] = None,
) -> CommandResult:
    """
    Run a command synchronously in cwd.

    Args:
        args: Command and arguments, e.g. ["git", "log"]
        cwd: Working directory
        committer_timestamp: If set, exported as GIT_COMMITTER_DATE

    Returns:
        CommandResult with success flag, stdout lines and stderr text
    """
    env = os.environ.copy()
    if committer_timestamp is not None:
        env["GIT_COMMITTER_DATE"] = format_git_date(committer_timestamp)

    logger.debug(f"[ghost-run] {' '.join(args)} (cwd={cwd})")

    try:
        proc = subprocess.run(
            list(args),
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as e:
        logger.debug(f"[ghost-run] Could not start {args[0] if args else '?'}: {e}")
        return CommandResult(success=False, output_lines=[], error=START_FAILURE_MESSAGE)

    return CommandResult(
        success=proc.returncode == 0,
        output_lines=split_lines(proc.stdout or ""),
        error=(proc.stderr or "").strip(),
    )
