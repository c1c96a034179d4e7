"""Mutable navigator state owned by the input-handling thread."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..entries.types import Entry, EntrySet
from ..preview.payload import PreviewPayload

MODE_BROWSING = "browsing"
MODE_SEARCHING = "searching"
MODE_HISTORY = "history"

OUTCOME_CONFIRMED = "confirmed"
OUTCOME_CANCELLED = "cancelled"


@dataclass
class NavigatorState:
    current_path: Path
    entry_set: EntrySet
    mode: str = MODE_BROWSING
    search_base_mode: str = MODE_BROWSING
    query: str = ""
    view: list[int] = field(default_factory=list)
    selected_idx: int = 0
    list_start: int = 0
    page_rows: int = 20
    history_entries: tuple[Entry, ...] = ()
    preview: PreviewPayload | None = None
    preview_path: Path | None = None
    preview_pending: bool = False
    status_message: str = ""
    status_message_until: float = 0.0
    dirty: bool = True
    skip_next_lf: bool = False
    outcome: str | None = None
    handoff_path: Path | None = None

    @property
    def base_mode(self) -> str:
        """Mode whose entries are displayed (``Searching`` filters another mode)."""
        if self.mode == MODE_SEARCHING:
            return self.search_base_mode
        return self.mode

    @property
    def source_entries(self) -> tuple[Entry, ...]:
        if self.base_mode == MODE_HISTORY:
            return self.history_entries
        return self.entry_set.entries

    @property
    def displayed_entries(self) -> list[Entry]:
        source = self.source_entries
        return [source[idx] for idx in self.view]

    @property
    def selected_entry(self) -> Entry | None:
        if not self.view:
            return None
        return self.source_entries[self.view[self.selected_idx]]
