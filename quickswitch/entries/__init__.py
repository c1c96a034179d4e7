"""Filesystem entry model and the one-level directory lister.

This package contains non-UI primitives:
- entry datatypes with a closed set of kinds
- the ``list_directory`` scanner used by the navigator
"""

from __future__ import annotations

from .fs import LISTING_MAX_ENTRIES, list_directory, safe_file_size
from .types import KIND_DIRECTORY, KIND_FILE, KIND_OTHER, KIND_SYMLINK, Entry, EntrySet, entry_sort_key

__all__ = [
    "KIND_DIRECTORY",
    "KIND_FILE",
    "KIND_SYMLINK",
    "KIND_OTHER",
    "Entry",
    "EntrySet",
    "entry_sort_key",
    "LISTING_MAX_ENTRIES",
    "list_directory",
    "safe_file_size",
]
