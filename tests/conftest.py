"""
Shared fixtures for GitGhost tests.

Provides temporary source/mirror directories that pass the repository
check without running real git.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest


@pytest.fixture
def source_repo(tmp_path: Path) -> Path:
    """A directory that looks like a git repository."""
    path = tmp_path / "project"
    (path / ".git").mkdir(parents=True)
    return path


@pytest.fixture
def mirror_repo(tmp_path: Path) -> Path:
    """A directory that looks like the mirror repository."""
    path = tmp_path / "mirror"
    (path / ".git").mkdir(parents=True)
    return path


@pytest.fixture
def ledger_file(mirror_repo: Path, source_repo: Path) -> Path:
    """Where the ledger for source_repo lives."""
    return mirror_repo / "repos" / source_repo.name


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging() replaces root handlers; put them back after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
