"""
Sync Engine — Replay source commit activity into the mirror repository.

Each run:
1. Validates both repositories
2. Lists source commits (newest first)
3. Drops commits already in the ledger
4. Reverses to chronological order
5. For each commit: ledger append, stage, placeholder commit
6. Pushes the mirror branch once
7. Returns a SyncResult

## Write-ahead ledger

A hash is appended to the ledger *before* its mirror commit is attempted.
If staging or committing then fails, the hash stays recorded and the commit
is never retried by later runs. This trades completeness for never
committing the same source hash twice. Failed hashes are listed in
`SyncResult.failures`.

## Usage

    from gitghost.sync.engine import SyncRequest, sync_repository

    result = sync_repository(SyncRequest(
        source_repo=Path("~/code/project").expanduser(),
        mirror_repo=Path("~/.gitghost/mirror").expanduser(),
        filter_authors=["alice@example.com"],
    ))
    print(f"{result.succeeded_count} synced, {result.failed_count} failed")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from ..git.commits import CommitRecord, list_commits
from ..git.runner import Runner, format_git_date, run_command
from ..logging_config import repo_logger
from ..validation import SubprocessFailure, validate_git_repository
from .ledger import Ledger

logger = logging.getLogger(__name__)

DEFAULT_REMOTE = "origin"
DEFAULT_BRANCH = "main"

STEP_STAGE = "stage"
STEP_COMMIT = "commit"

CommitCallback = Callable[[CommitRecord, bool], None]
PlanCallback = Callable[[int], None]


def commit_message(commit_hash: str) -> str:
    """Fixed placeholder message referencing the source hash."""
    return f"Dummy commit for {commit_hash}"


@dataclass
class SyncRequest:
    """Explicit inputs for one sync run."""

    source_repo: Path
    mirror_repo: Path
    filter_authors: Sequence[str] = ()
    remote: str = DEFAULT_REMOTE
    branch: str = DEFAULT_BRANCH
    dry_run: bool = False


@dataclass
class CommitFailure:
    """A source commit whose mirror commit could not be created."""

    hash: str
    step: str  # stage, commit
    error: str


@dataclass
class SyncResult:
    """Result of a sync run."""

    source_repo: Path
    mirror_repo: Path
    ledger_path: Optional[Path] = None

    # Hashes committed to the mirror this run, in replay order
    synced: List[str] = field(default_factory=list)
    failures: List[CommitFailure] = field(default_factory=list)

    # Dry run only: hashes that would be replayed
    pending: List[str] = field(default_factory=list)

    listing_error: Optional[str] = None
    pushed: bool = False
    push_error: Optional[str] = None

    @property
    def succeeded_count(self) -> int:
        return len(self.synced)

    @property
    def failed_count(self) -> int:
        return len(self.failures)

    @property
    def ok(self) -> bool:
        """True when nothing failed, including the push."""
        return self.listing_error is None and not self.failures and self.push_error is None


def sync_repository(
    request: SyncRequest,
    runner: Runner = run_command,
    on_commit: Optional[CommitCallback] = None,
    on_plan: Optional[PlanCallback] = None,
) -> SyncResult:
    """
    Mirror new source commits into the mirror repository.

    Args:
        request: Source, mirror and filter inputs
        runner: Command runner (injectable for tests)
        on_commit: Called after each replayed commit with (record, ok)
        on_plan: Called once with the number of commits about to be replayed

    Returns:
        SyncResult describing what was committed, failed and pushed

    Raises:
        InvalidRepository: If either path lacks git metadata
    """
    # The ledger is keyed by basename, so relative paths like "." must be resolved
    source_repo = Path(request.source_repo).expanduser().resolve()
    mirror_repo = Path(request.mirror_repo).expanduser().resolve()

    validate_git_repository(source_repo, role="source")
    validate_git_repository(mirror_repo, role="mirror")

    log = repo_logger(logger, source_repo.name)
    result = SyncResult(source_repo=source_repo, mirror_repo=mirror_repo)

    try:
        commits = list_commits(source_repo, request.filter_authors, runner=runner)
    except SubprocessFailure as e:
        log.error(f"[ghost-sync] Failed to retrieve commits from {source_repo}: {e.message}")
        result.listing_error = e.message
        return result

    if not commits:
        log.info(f"[ghost-sync] No matching commits found in {source_repo}")

    ledger = Ledger.for_repositories(mirror_repo, source_repo)
    result.ledger_path = ledger.path

    if request.dry_run:
        known = ledger.load() if ledger.path.exists() else []
        result.pending = [c.hash for c in _new_commits(commits, known)]
        log.info(f"[ghost-sync] Dry run: {len(result.pending)} commit(s) would be mirrored")
        return result

    new_commits = _new_commits(commits, ledger.load())
    log.info(f"[ghost-sync] {len(new_commits)} new of {len(commits)} listed commit(s)")

    if on_plan is not None:
        on_plan(len(new_commits))

    for record in new_commits:
        ok = _replay_commit(record, ledger, mirror_repo, runner, result, log)
        if on_commit is not None:
            on_commit(record, ok)

    _push(request, mirror_repo, runner, result, log)

    log.info(
        f"[ghost-sync] {result.succeeded_count} synced, {result.failed_count} failed, "
        f"push {'ok' if result.pushed else 'failed'}"
    )
    return result


def _new_commits(commits: Sequence[CommitRecord], known: Iterable[str]) -> List[CommitRecord]:
    """Commits not in known, oldest first (input is newest first)."""
    seen = set(known)
    return [c for c in reversed(commits) if c.hash not in seen]


def _replay_commit(
    record: CommitRecord,
    ledger: Ledger,
    mirror_repo: Path,
    runner: Runner,
    result: SyncResult,
    log: logging.LoggerAdapter,
) -> bool:
    """Write-ahead ledger append, stage, commit. Returns True on success."""
    ledger.append(record.hash)

    staged = runner(["git", "add", ledger.relative_dir], mirror_repo)
    if not staged.success:
        log.error(
            f"[ghost-sync] Failed to stage changes: {staged.error}",
            extra={"commit": record.hash},
        )
        result.failures.append(CommitFailure(record.hash, STEP_STAGE, staged.error))
        return False

    committed = runner(
        [
            "git",
            "commit",
            "-m",
            commit_message(record.hash),
            f"--date={format_git_date(record.timestamp)}",
        ],
        mirror_repo,
        committer_timestamp=record.timestamp,
    )
    if not committed.success:
        log.error(
            f"[ghost-sync] Failed to create commit: {committed.error}",
            extra={"commit": record.hash},
        )
        result.failures.append(CommitFailure(record.hash, STEP_COMMIT, committed.error))
        return False

    log.debug("[ghost-sync] Committed placeholder", extra={"commit": record.hash})
    result.synced.append(record.hash)
    return True


def _push(
    request: SyncRequest,
    mirror_repo: Path,
    runner: Runner,
    result: SyncResult,
    log: logging.LoggerAdapter,
) -> None:
    """Push the mirror branch once. Local commits are kept on failure."""
    pushed = runner(["git", "push", request.remote, request.branch], mirror_repo)
    if pushed.success:
        result.pushed = True
        log.info(f"[ghost-sync] Pushed {request.branch} to {request.remote}")
        return

    result.push_error = pushed.error or "Push failed"
    log.error(f"[ghost-sync] Failed to push changes to the mirror repo: {result.push_error}")
