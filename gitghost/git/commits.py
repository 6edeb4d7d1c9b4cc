"""
Commit Lister — Enumerate source commits as (hash, timestamp) records.

One `git log` call per listing. Each author filter becomes its own
`--author` option; git ORs them, so a commit matches if any pattern does.
Output is newest-first, one `<hash>|<committer-epoch>` line per commit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from ..validation import MalformedRecord, SubprocessFailure
from .runner import Runner, run_command

logger = logging.getLogger(__name__)

LOG_FORMAT = "%H|%ct"


@dataclass(frozen=True)
class CommitRecord:
    """A source commit reduced to what the mirror needs."""

    hash: str
    timestamp: int


def build_log_command(filter_authors: Sequence[str]) -> List[str]:
    """Build the git log argument list for the given author filters."""
    cmd = ["git", "log"]
    cmd.extend(f"--author={author}" for author in filter_authors)
    cmd.append(f"--pretty=format:{LOG_FORMAT}")
    return cmd


def parse_log_line(line: str) -> CommitRecord:
    """
    Parse one `<hash>|<timestamp>` line.

    Raises:
        MalformedRecord: If the line has the wrong field count or a
            non-integer timestamp
    """
    parts = line.split("|")
    if len(parts) != 2:
        raise MalformedRecord(line)

    commit_hash, raw_ts = parts
    try:
        timestamp = int(raw_ts)
    except ValueError:
        raise MalformedRecord(line, reason=f"timestamp {raw_ts!r} is not an integer")

    return CommitRecord(hash=commit_hash, timestamp=timestamp)


def list_commits(
    source_repo: Path,
    filter_authors: Sequence[str] = (),
    runner: Runner = run_command,
) -> List[CommitRecord]:
    """
    List commits in source_repo, newest first.

    Args:
        source_repo: Path to the source repository
        filter_authors: Author patterns, OR-combined; empty means all commits
        runner: Command runner (injectable for tests)

    Returns:
        CommitRecords in reverse-chronological order

    Raises:
        SubprocessFailure: If git log exits non-zero
    """
    cmd = build_log_command(filter_authors)
    result = runner(cmd, source_repo)

    if not result.success:
        raise SubprocessFailure(result.error or "git log failed", command=cmd)

    records: List[CommitRecord] = []
    for line in result.output_lines:
        if not line.strip():
            continue
        try:
            records.append(parse_log_line(line))
        except MalformedRecord as e:
            logger.warning(f"[ghost-log] Skipping record: {e}")

    logger.debug(f"[ghost-log] {len(records)} commit(s) listed in {source_repo}")
    return records
