"""
Sync — Ledger and engine for replaying source activity into the mirror.
"""

from .engine import CommitFailure, SyncRequest, SyncResult, sync_repository
from .ledger import Ledger

__all__ = [
    "CommitFailure",
    "Ledger",
    "SyncRequest",
    "SyncResult",
    "sync_repository",
]
