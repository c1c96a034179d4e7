"""Bounded most-recent-first history of visited directories.

The on-disk record is JSON Lines, oldest entry first. Loading replays the
lines in order, so an appended line for an existing path simply moves it to
the front. Malformed lines are skipped and a missing file is an empty history.
"""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from pathlib import Path

from loguru import logger

from ..config import SORT_ALPHABETICAL, SORT_FREQUENCY, HistoryConfig
from ..errors import PersistenceFailure


@dataclass(frozen=True)
class HistoryEntry:
    """One remembered directory with visit statistics."""

    path: Path
    frequency: int = 1
    last_accessed: float = 0.0

    def to_record(self) -> dict[str, object]:
        return {
            "path": str(self.path),
            "frequency": self.frequency,
            "last_accessed": self.last_accessed,
        }


def _entry_from_record(record: object) -> HistoryEntry | None:
    """Validate one decoded JSON line, returning ``None`` when unusable."""
    if not isinstance(record, dict):
        return None
    raw_path = record.get("path")
    if not isinstance(raw_path, str) or not raw_path:
        return None
    path = Path(raw_path)
    if not path.is_absolute():
        return None

    frequency = record.get("frequency", 1)
    if isinstance(frequency, bool) or not isinstance(frequency, int) or frequency < 1:
        frequency = 1
    last_accessed = record.get("last_accessed", 0.0)
    if isinstance(last_accessed, bool) or not isinstance(last_accessed, (int, float)):
        last_accessed = 0.0
    return HistoryEntry(path=path, frequency=frequency, last_accessed=float(last_accessed))


class HistoryStore:
    """Ordered, de-duplicated, capped history list backed by one file."""

    def __init__(
        self,
        path: Path,
        config: HistoryConfig | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.path = path
        self.config = config if config is not None else HistoryConfig()
        self._clock = clock
        self._entries: list[HistoryEntry] = []

    @property
    def entries(self) -> tuple[HistoryEntry, ...]:
        """Stored entries, most recently visited first."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def _index_of(self, path: Path) -> int | None:
        for idx, entry in enumerate(self._entries):
            if entry.path == path:
                return idx
        return None

    def _truncate(self) -> None:
        del self._entries[max(0, self.config.max_entries):]

    def record(self, path: Path) -> HistoryEntry:
        """Move ``path`` to the front (or insert it there) and enforce the cap."""
        now = self._clock()
        idx = self._index_of(path)
        if idx is None:
            entry = HistoryEntry(path=path, frequency=1, last_accessed=now)
        else:
            previous = self._entries.pop(idx)
            entry = replace(previous, frequency=previous.frequency + 1, last_accessed=now)
        self._entries.insert(0, entry)
        self._truncate()
        return entry

    def list(self) -> list[Path]:
        """Return display-ordered history paths.

        Directories that no longer exist are hidden when
        ``config.hide_missing`` is set; they stay in the stored record.
        """
        entries = list(self._entries)
        if self.config.hide_missing:
            entries = [entry for entry in entries if entry.path.is_dir()]
        if self.config.sort_mode == SORT_FREQUENCY:
            # Stable sort keeps recency order among equal frequencies.
            entries.sort(key=lambda entry: -entry.frequency)
        elif self.config.sort_mode == SORT_ALPHABETICAL:
            entries.sort(key=lambda entry: str(entry.path).casefold())
        return [entry.path for entry in entries]

    def load(self) -> None:
        """Replace in-memory history with the persisted record.

        A missing or unreadable file yields an empty history.
        """
        self._entries = []
        try:
            with self.path.open("r", encoding="utf-8", errors="replace") as handle:
                raw_lines = handle.readlines()
        except FileNotFoundError:
            return
        except OSError as exc:
            logger.warning("history load failed for {}: {}", self.path, exc)
            return

        skipped = 0
        for raw_line in raw_lines:
            line = raw_line.strip()
            if not line:
                continue
            try:
                entry = _entry_from_record(json.loads(line))
            except ValueError:
                entry = None
            if entry is None:
                skipped += 1
                continue
            idx = self._index_of(entry.path)
            if idx is not None:
                self._entries.pop(idx)
            self._entries.insert(0, entry)
        self._truncate()
        if skipped:
            logger.warning("skipped {} malformed history line(s) in {}", skipped, self.path)
        logger.debug("loaded {} history entries from {}", len(self._entries), self.path)

    def save(self) -> None:
        """Rewrite the record atomically, oldest entry first.

        Raises ``PersistenceFailure`` when the file cannot be written; the
        in-memory state is kept so a later save can retry.
        """
        payload = "".join(json.dumps(entry.to_record()) + "\n" for entry in reversed(self._entries))
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".history-", dir=self.path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            logger.warning("history save failed for {}: {}", self.path, exc)
            raise PersistenceFailure(self.path, "Could not save history") from exc
        logger.trace("saved {} history entries to {}", len(self._entries), self.path)


__all__ = [
    "HistoryEntry",
    "HistoryStore",
]
