"""History store exports."""

from __future__ import annotations

from .store import HistoryEntry, HistoryStore

__all__ = [
    "HistoryEntry",
    "HistoryStore",
]
