"""Single-level directory listing with symlink-safe kind detection."""

from __future__ import annotations

import heapq
import os
from pathlib import Path

from loguru import logger

from ..errors import error_for_os_error
from .types import KIND_DIRECTORY, KIND_FILE, KIND_OTHER, KIND_SYMLINK, Entry, EntrySet, entry_sort_key, name_sort_key

LISTING_MAX_ENTRIES = 20_000


def entry_kind(child: os.DirEntry) -> str:
    """Classify a scandir child without following symlinks."""
    try:
        if child.is_symlink():
            return KIND_SYMLINK
        if child.is_dir(follow_symlinks=False):
            return KIND_DIRECTORY
        if child.is_file(follow_symlinks=False):
            return KIND_FILE
    except OSError:
        pass
    return KIND_OTHER


def scandir_sort_key(child: os.DirEntry) -> tuple[bool, str, str]:
    """Same ordering as ``entry_sort_key``, from cached scandir type bits."""
    try:
        is_dir = child.is_dir(follow_symlinks=False)
    except OSError:
        is_dir = False
    return name_sort_key(child.name, is_dir)


def safe_file_size(path: Path) -> int | None:
    """Return ``st_size`` for ``path`` or ``None`` on stat failure."""
    try:
        return int(path.stat().st_size)
    except OSError:
        return None


def _build_entry(child: os.DirEntry) -> Entry:
    kind = entry_kind(child)
    size: int | None = None
    mtime_ns: int | None = None
    try:
        stat = child.stat(follow_symlinks=False)
        mtime_ns = int(stat.st_mtime_ns)
        if kind == KIND_FILE:
            size = int(stat.st_size)
    except OSError:
        pass
    return Entry(name=child.name, path=Path(child.path), kind=kind, size=size, mtime_ns=mtime_ns)


def list_directory(directory: Path, max_entries: int = LISTING_MAX_ENTRIES) -> EntrySet:
    """List direct children of ``directory`` sorted directories-first.

    Raises ``NotFound``, ``AccessDenied``, ``NotADirectory`` or ``IoFailure``
    when the directory cannot be scanned. At most ``max_entries`` children are
    kept, always the first ones in sorted order; ``EntrySet.truncated``
    reports whether more existed. Only kept children are stat'ed.
    """
    try:
        with os.scandir(directory) as scanned:
            children = list(scanned)
        truncated = len(children) > max_entries
        if truncated:
            children = heapq.nsmallest(max_entries, children, key=scandir_sort_key)
        entries = [_build_entry(child) for child in children]
    except OSError as exc:
        error = error_for_os_error(directory, exc)
        logger.debug("listing {} failed: {}", directory, error.message)
        raise error from exc

    entries.sort(key=entry_sort_key)
    logger.trace("listed {} entries in {}", len(entries), directory)
    return EntrySet(directory=directory, entries=tuple(entries), truncated=truncated)


__all__ = [
    "LISTING_MAX_ENTRIES",
    "entry_kind",
    "scandir_sort_key",
    "list_directory",
    "safe_file_size",
]
