"""Domain datatypes for one directory level of filesystem entries."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

KIND_DIRECTORY = "directory"
KIND_FILE = "file"
KIND_SYMLINK = "symlink"
KIND_OTHER = "other"


@dataclass(frozen=True)
class Entry:
    """One filesystem node observed while listing its parent directory."""

    name: str
    path: Path
    kind: str
    size: int | None = None
    mtime_ns: int | None = None

    @property
    def is_dir(self) -> bool:
        return self.kind == KIND_DIRECTORY

    @property
    def is_symlink(self) -> bool:
        return self.kind == KIND_SYMLINK

    @property
    def display_name(self) -> str:
        """Name with a kind suffix (``/`` for directories, ``@`` for symlinks)."""
        if self.is_dir:
            return self.name if self.name.endswith("/") else f"{self.name}/"
        if self.is_symlink:
            return f"{self.name}@"
        return self.name


@dataclass(frozen=True)
class EntrySet:
    """Ordered children of one directory; replaced wholesale on every listing."""

    directory: Path
    entries: tuple[Entry, ...] = ()
    truncated: bool = False

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> Entry:
        return self.entries[index]


def name_sort_key(name: str, is_dir: bool) -> tuple[bool, str, str]:
    """Directories first, then case-insensitive name, then exact name."""
    return (not is_dir, name.casefold(), name)


def entry_sort_key(entry: Entry) -> tuple[bool, str, str]:
    return name_sort_key(entry.name, entry.is_dir)


__all__ = [
    "KIND_DIRECTORY",
    "KIND_FILE",
    "KIND_SYMLINK",
    "KIND_OTHER",
    "Entry",
    "EntrySet",
    "entry_sort_key",
    "name_sort_key",
]
