"""Directory previews: one level of children with a capped entry count.

The first ``max_entries`` children in listing order are kept and classified;
the rest are only counted, so the remainder marker stays cheap for huge
directories.
"""

from __future__ import annotations

import heapq
import os
from pathlib import Path

from ..entries.fs import entry_kind, scandir_sort_key
from ..entries.types import KIND_DIRECTORY, KIND_SYMLINK
from .payload import DirectorySummary

DIR_PREVIEW_MAX_ENTRIES = 100
DIR_PREVIEW_COUNT_LIMIT = 100_000


def _label(name: str, kind: str) -> str:
    if kind == KIND_DIRECTORY:
        return f"{name}/"
    if kind == KIND_SYMLINK:
        return f"{name}@"
    return name


def build_directory_summary(directory: Path, max_entries: int = DIR_PREVIEW_MAX_ENTRIES) -> DirectorySummary:
    """Summarize ``directory`` as sorted child labels plus a remainder count.

    ``OSError`` from scanning propagates to the dispatcher.
    """
    children: list[os.DirEntry] = []
    scan_limit = max_entries + DIR_PREVIEW_COUNT_LIMIT
    with os.scandir(directory) as scanned:
        for child in scanned:
            children.append(child)
            if len(children) >= scan_limit:
                break

    kept = heapq.nsmallest(max_entries, children, key=scandir_sort_key)
    return DirectorySummary(
        path=directory,
        names=tuple(_label(child.name, entry_kind(child)) for child in kept),
        remainder=len(children) - len(kept),
    )


__all__ = [
    "DIR_PREVIEW_MAX_ENTRIES",
    "DIR_PREVIEW_COUNT_LIMIT",
    "build_directory_summary",
]
