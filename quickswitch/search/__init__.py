"""Search package exports for the navigator's live filter."""

from __future__ import annotations

from .filtering import filter_entries, fold_query, match_label_indices

__all__ = [
    "filter_entries",
    "fold_query",
    "match_label_indices",
]
