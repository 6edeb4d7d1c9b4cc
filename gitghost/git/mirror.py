"""
Mirror Preparation — Create the mirror repo and configure its remote.

Used by `gitghost setup`. The sync engine expects the mirror to exist with
an `origin` remote and a `main` branch; these helpers get it there.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..validation import is_git_repository
from .runner import Runner, run_command

logger = logging.getLogger(__name__)


def init_mirror(mirror_repo: Path, branch: str = "main", runner: Runner = run_command) -> bool:
    """
    Initialize the mirror repository if needed.

    Returns True if a new repository was created, False if one existed.
    """
    if is_git_repository(mirror_repo):
        return False

    mirror_repo.mkdir(parents=True, exist_ok=True)
    result = runner(["git", "init"], mirror_repo)
    if not result.success:
        raise RuntimeError(f"git init failed in {mirror_repo}: {result.error}")

    # Unborn HEAD can be pointed at any branch name
    result = runner(["git", "symbolic-ref", "HEAD", f"refs/heads/{branch}"], mirror_repo)
    if not result.success:
        raise RuntimeError(f"Could not set initial branch {branch}: {result.error}")

    logger.info(f"[ghost-mirror] Initialized mirror repo at {mirror_repo}")
    return True


def ensure_remote(
    mirror_repo: Path,
    remote_url: str,
    remote_name: str = "origin",
    runner: Runner = run_command,
) -> bool:
    """
    Ensure remote_name points at remote_url.

    Returns True if the remote is ready.
    """
    current = runner(["git", "remote", "get-url", remote_name], mirror_repo)

    if current.success:
        current_url = current.output_lines[0] if current.output_lines else ""
        if current_url != remote_url:
            logger.info(f"[ghost-mirror] Updating remote URL for {remote_name}")
            updated = runner(["git", "remote", "set-url", remote_name, remote_url], mirror_repo)
            if not updated.success:
                logger.error(f"[ghost-mirror] Failed to update remote {remote_name}: {updated.error}")
                return False
        return True

    logger.info(f"[ghost-mirror] Adding remote: {remote_name} → {remote_url}")
    added = runner(["git", "remote", "add", remote_name, remote_url], mirror_repo)
    if not added.success:
        logger.error(f"[ghost-mirror] Failed to add remote {remote_name}: {added.error}")
        return False

    return True


def set_identity(
    mirror_repo: Path,
    name: Optional[str],
    email: Optional[str],
    runner: Runner = run_command,
) -> bool:
    """Set the local commit identity used for placeholder commits."""
    ok = True
    for key, value in (("user.name", name), ("user.email", email)):
        if not value:
            continue
        result = runner(["git", "config", "--local", key, value], mirror_repo)
        if not result.success:
            logger.error(f"[ghost-mirror] Failed to set {key}: {result.error}")
            ok = False
    return ok
