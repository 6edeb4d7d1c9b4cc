"""
Ledger — Append-only record of source hashes already mirrored.

One plain-text file per source repository, stored inside the mirror's
working tree at `repos/<source basename>`. One hash per line, in sync
order. Lines are never edited or removed, only appended.

Two source repositories with the same basename share a ledger file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

LEDGER_DIR = "repos"


class Ledger:
    """
    Append-only hash ledger.

    Usage:
        ledger = Ledger.for_repositories(mirror_repo, source_repo)
        if not ledger.contains(commit_hash):
            ledger.append(commit_hash)
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._hashes: Optional[List[str]] = None
        self._members: set = set()

    @classmethod
    def for_repositories(cls, mirror_repo: Path, source_repo: Path) -> "Ledger":
        """Ledger for source_repo inside mirror_repo."""
        return cls(Path(mirror_repo) / LEDGER_DIR / Path(source_repo).name)

    @property
    def relative_dir(self) -> str:
        """Directory to stage in the mirror, relative to its root."""
        return f"{LEDGER_DIR}/"

    def _ensure_exists(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.path.touch()

    def load(self) -> List[str]:
        """Read recorded hashes, creating an empty ledger if none exists."""
        self._ensure_exists()
        text = self.path.read_text(encoding="utf-8")
        self._hashes = [line for line in text.splitlines() if line]
        self._members = set(self._hashes)
        logger.debug(f"[ghost-ledger] {len(self._hashes)} hash(es) in {self.path}")
        return list(self._hashes)

    @property
    def hashes(self) -> List[str]:
        if self._hashes is None:
            self.load()
        return list(self._hashes)

    def contains(self, commit_hash: str) -> bool:
        """Exact-match membership test."""
        if self._hashes is None:
            self.load()
        return commit_hash in self._members

    def append(self, commit_hash: str) -> None:
        """Append one hash as its own line."""
        if self._hashes is None:
            self.load()

        prefix = ""
        if self.path.stat().st_size > 0:
            with self.path.open("rb") as f:
                f.seek(-1, 2)
                if f.read(1) not in (b"\n", b"\r"):
                    prefix = "\n"

        with self.path.open("a", encoding="utf-8", newline="\n") as f:
            f.write(f"{prefix}{commit_hash}\n")

        self._hashes.append(commit_hash)
        self._members.add(commit_hash)

