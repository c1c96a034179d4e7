"""Live substring filter producing index views into an entry sequence.

The filter is a pure function of ``(entries, query)``: no caching and no
incremental diffing. Matching is case-insensitive and unanchored.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

T = TypeVar("T")


def fold_query(query: str) -> str:
    """Normalize text for case-insensitive comparison."""
    return query.casefold()


def match_label_indices(labels: Sequence[str], query: str) -> list[int]:
    """Return indices of ``labels`` containing ``query``, preserving order."""
    if not query:
        return list(range(len(labels)))
    folded_query = fold_query(query)
    return [idx for idx, label in enumerate(labels) if folded_query in fold_query(label)]


def filter_entries(
    entries: Sequence[T],
    query: str,
    key: Callable[[T], str] | None = None,
) -> list[int]:
    """Return the filtered view of ``entries`` for ``query``.

    ``key`` selects the text matched for each entry and defaults to its
    ``name`` attribute. An empty query yields the identity view.
    """
    if not query:
        return list(range(len(entries)))
    label_for = key if key is not None else (lambda entry: entry.name)
    return match_label_indices([label_for(entry) for entry in entries], query)


__all__ = [
    "fold_query",
    "match_label_indices",
    "filter_entries",
]
