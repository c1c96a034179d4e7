"""Navigator state machine: Browsing, Searching, and History modes.

Every transition that changes the displayed set or the query goes through
``_refresh_view``, which recomputes the filtered view, clamps the selection,
and refreshes the preview before control returns to the loop.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from pathlib import Path

from loguru import logger

from ..entries.fs import list_directory
from ..entries.types import KIND_DIRECTORY, Entry, EntrySet
from ..errors import PersistenceFailure, QuickSwitchError
from ..history.store import HistoryStore
from ..input.key_registry import KeyComboRegistry
from ..preview.dispatch import PreviewOptions, build_preview, is_heavy_preview, preview_note
from ..preview.payload import PreviewPayload
from ..preview.worker import PreviewJobResult, PreviewJobScheduler
from ..search.filtering import filter_entries
from .state import (
    MODE_BROWSING,
    MODE_HISTORY,
    MODE_SEARCHING,
    OUTCOME_CANCELLED,
    OUTCOME_CONFIRMED,
    NavigatorState,
)

STATUS_MESSAGE_SECONDS = 3.0


def history_entry(path: Path) -> Entry:
    """Frame a history path as a pseudo-directory entry labelled by its full path."""
    return Entry(name=str(path), path=path, kind=KIND_DIRECTORY)


def _points_to_directory(entry: Entry) -> bool:
    if entry.is_dir:
        return True
    # Descending into a symlinked directory lists it once; nothing recurses.
    return entry.is_symlink and entry.path.is_dir()


class Navigator:
    """Owns navigator state and applies key events to it."""

    def __init__(
        self,
        start: Path,
        *,
        history: HistoryStore,
        preview_options: PreviewOptions | None = None,
        preview_scheduler: PreviewJobScheduler | None = None,
        lister: Callable[[Path], EntrySet] = list_directory,
        preview_builder: Callable[[Entry, PreviewOptions], PreviewPayload] = build_preview,
        clock: Callable[[], float] = time.monotonic,
        start_in_history: bool = False,
    ) -> None:
        self.history = history
        self.preview_options = preview_options if preview_options is not None else PreviewOptions()
        self.preview_scheduler = preview_scheduler
        self._lister = lister
        self._preview_builder = preview_builder
        self._clock = clock

        self.state = NavigatorState(current_path=start, entry_set=EntrySet(directory=start))
        try:
            self.state.entry_set = self._lister(start)
        except QuickSwitchError as exc:
            logger.warning("initial listing of {} failed: {}", start, exc.message)
            self.set_status(exc.status_text)

        self._browsing_keys = self._build_browsing_keys()
        self._history_keys = self._build_history_keys()
        self._searching_keys = self._build_searching_keys()

        if start_in_history:
            self.enter_history()
        else:
            self._refresh_view()

    # Key tables.

    def _build_browsing_keys(self) -> KeyComboRegistry:
        return (
            KeyComboRegistry()
            .register("UP", "k", handler=lambda: self.move_selection(-1))
            .register("DOWN", "j", handler=lambda: self.move_selection(1))
            .register("PAGE_UP", handler=lambda: self.move_selection(-self.state.page_rows))
            .register("PAGE_DOWN", handler=lambda: self.move_selection(self.state.page_rows))
            .register("RIGHT", "l", handler=self.descend_selected)
            .register("LEFT", "h", handler=self.go_parent)
            .register("ENTER", handler=self.activate_selected)
            .register("TAB", handler=self.confirm_selected)
            .register("/", handler=self.begin_search)
            .register("v", handler=self.enter_history)
            .register("ESC", "CTRL_C", handler=self.cancel)
        )

    def _build_history_keys(self) -> KeyComboRegistry:
        return (
            KeyComboRegistry()
            .register("UP", "k", handler=lambda: self.move_selection(-1))
            .register("DOWN", "j", handler=lambda: self.move_selection(1))
            .register("PAGE_UP", handler=lambda: self.move_selection(-self.state.page_rows))
            .register("PAGE_DOWN", handler=lambda: self.move_selection(self.state.page_rows))
            .register("RIGHT", "l", "ENTER", handler=self.descend_selected)
            .register("TAB", handler=self.confirm_selected)
            .register("/", handler=self.begin_search)
            .register("v", "ESC", handler=self.leave_history)
            .register("CTRL_C", handler=self.cancel)
        )

    def _build_searching_keys(self) -> KeyComboRegistry:
        return (
            KeyComboRegistry()
            .register("UP", handler=lambda: self.move_selection(-1))
            .register("DOWN", handler=lambda: self.move_selection(1))
            .register("PAGE_UP", handler=lambda: self.move_selection(-self.state.page_rows))
            .register("PAGE_DOWN", handler=lambda: self.move_selection(self.state.page_rows))
            .register("BACKSPACE", handler=self.pop_query_char)
            .register("CTRL_U", handler=lambda: self.set_query(""))
            .register("ESC", handler=self.end_search)
            .register("ENTER", handler=lambda: self._finish_search_then(self._base_registry(), "ENTER"))
            .register("TAB", handler=lambda: self._finish_search_then(self._base_registry(), "TAB"))
            .register("RIGHT", handler=lambda: self._finish_search_then(self._base_registry(), "RIGHT"))
            .register("LEFT", handler=lambda: self._finish_search_then(self._base_registry(), "LEFT"))
            .register("CTRL_C", handler=self.cancel)
        )

    def _base_registry(self) -> KeyComboRegistry:
        if self.state.search_base_mode == MODE_HISTORY:
            return self._history_keys
        return self._browsing_keys

    def handle_key(self, key: str) -> bool:
        """Apply one key token and return whether the session should end."""
        state = self.state
        if state.mode == MODE_SEARCHING:
            handled = self._searching_keys.dispatch(key)
            if handled is None and len(key) == 1 and key.isprintable():
                self.append_query_char(key)
        elif state.mode == MODE_HISTORY:
            self._history_keys.dispatch(key)
        else:
            self._browsing_keys.dispatch(key)
        return state.outcome is not None

    # Status line.

    def set_status(self, message: str) -> None:
        self.state.status_message = message
        self.state.status_message_until = self._clock() + STATUS_MESSAGE_SECONDS
        self.state.dirty = True

    def expire_status(self) -> None:
        state = self.state
        if state.status_message and self._clock() >= state.status_message_until:
            state.status_message = ""
            state.status_message_until = 0.0
            state.dirty = True

    # View and preview maintenance.

    def _refresh_view(self, selected_idx: int | None = None) -> None:
        """Recompute view, clamp selection, and refresh preview as one step."""
        state = self.state
        previous = state.selected_idx if selected_idx is None else selected_idx
        state.view = filter_entries(state.source_entries, state.query)
        if state.view:
            state.selected_idx = max(0, min(previous, len(state.view) - 1))
        else:
            state.selected_idx = 0
        self._refresh_preview()
        state.dirty = True

    def _refresh_preview(self) -> None:
        state = self.state
        entry = state.selected_entry
        if entry is None:
            self._cancel_preview_job()
            state.preview = None
            state.preview_path = None
            state.preview_pending = False
            return
        if entry.path == state.preview_path and (state.preview is not None or state.preview_pending):
            return

        self._cancel_preview_job()
        state.preview_path = entry.path
        if self.preview_scheduler is not None and is_heavy_preview(entry):
            state.preview = None
            state.preview_pending = True
            self.preview_scheduler.schedule(entry)
            return

        state.preview_pending = False
        self._set_preview(self._preview_builder(entry, self.preview_options))

    def _set_preview(self, payload: PreviewPayload) -> None:
        self.state.preview = payload
        note = preview_note(payload)
        if note:
            self.set_status(note)

    def _cancel_preview_job(self) -> None:
        if self.preview_scheduler is not None:
            self.preview_scheduler.cancel()

    def apply_preview_results(self, results: list[PreviewJobResult]) -> bool:
        """Install finished background previews for the still-highlighted entry."""
        state = self.state
        changed = False
        for result in results:
            if not state.preview_pending or result.job.entry.path != state.preview_path:
                continue
            state.preview_pending = False
            self._set_preview(result.payload)
            changed = True
        if changed:
            state.dirty = True
        return changed

    def shutdown(self) -> None:
        """Drop any in-flight preview work when the session ends."""
        self._cancel_preview_job()

    # Transitions.

    def move_selection(self, delta: int) -> bool:
        state = self.state
        if not state.view:
            return False
        target = max(0, min(state.selected_idx + delta, len(state.view) - 1))
        if target == state.selected_idx:
            return False
        state.selected_idx = target
        self._refresh_preview()
        state.dirty = True
        return True

    def begin_search(self) -> bool:
        state = self.state
        state.search_base_mode = state.mode
        state.mode = MODE_SEARCHING
        state.dirty = True
        return True

    def set_query(self, query: str) -> bool:
        self.state.query = query
        self._refresh_view()
        return True

    def append_query_char(self, char: str) -> bool:
        return self.set_query(self.state.query + char)

    def pop_query_char(self) -> bool:
        if not self.state.query:
            return False
        return self.set_query(self.state.query[:-1])

    def end_search(self) -> bool:
        """Clear the query and return to the mode search was started from."""
        state = self.state
        state.mode = state.search_base_mode
        state.query = ""
        self._refresh_view()
        return True

    def _finish_search_then(self, registry: KeyComboRegistry, key: str) -> bool:
        """Stop editing the query (keeping the filter) and replay ``key``."""
        state = self.state
        state.mode = state.search_base_mode
        state.dirty = True
        registry.dispatch(key)
        return True

    def enter_history(self) -> bool:
        state = self.state
        state.history_entries = tuple(history_entry(path) for path in self.history.list())
        state.mode = MODE_HISTORY
        state.search_base_mode = MODE_HISTORY
        state.query = ""
        self._refresh_view(selected_idx=0)
        if not state.history_entries:
            self.set_status("History is empty")
        return True

    def leave_history(self) -> bool:
        state = self.state
        state.mode = MODE_BROWSING
        state.search_base_mode = MODE_BROWSING
        state.query = ""
        self._refresh_view(selected_idx=0)
        return True

    def enter_directory(self, target: Path) -> bool:
        """List ``target`` and make it current; keep prior listing on failure."""
        state = self.state
        try:
            entry_set = self._lister(target)
        except QuickSwitchError as exc:
            logger.info("cannot enter {}: {}", target, exc.message)
            self.set_status(exc.status_text)
            return False

        state.current_path = target
        state.entry_set = entry_set
        state.mode = MODE_BROWSING
        state.search_base_mode = MODE_BROWSING
        state.query = ""
        state.list_start = 0
        self._refresh_view(selected_idx=0)
        return True

    def descend_selected(self) -> bool:
        entry = self.state.selected_entry
        if entry is None or not _points_to_directory(entry):
            return False
        if not self.enter_directory(entry.path):
            return False
        self.record_history(entry.path)
        return True

    def go_parent(self) -> bool:
        current = self.state.current_path
        parent = current.parent
        if parent == current:
            return False
        return self.enter_directory(parent)

    def activate_selected(self) -> bool:
        """Enter: descend into a directory, otherwise confirm the current directory."""
        entry = self.state.selected_entry
        if entry is not None and _points_to_directory(entry):
            return self.descend_selected()
        return self.confirm(self.state.current_path)

    def confirm_selected(self) -> bool:
        """Explicit confirm: hand off the highlighted directory or the containing one."""
        state = self.state
        entry = state.selected_entry
        if state.base_mode == MODE_HISTORY:
            if entry is None:
                return False
            return self.confirm(entry.path)
        if entry is not None and _points_to_directory(entry):
            return self.confirm(entry.path)
        return self.confirm(state.current_path)

    def confirm(self, path: Path) -> bool:
        state = self.state
        state.outcome = OUTCOME_CONFIRMED
        state.handoff_path = path.absolute()
        self.record_history(state.handoff_path)
        self.shutdown()
        return True

    def cancel(self) -> bool:
        state = self.state
        state.outcome = OUTCOME_CANCELLED
        state.handoff_path = None
        self.shutdown()
        return True

    def record_history(self, path: Path) -> None:
        self.history.record(path)
        try:
            self.history.save()
        except PersistenceFailure as exc:
            self.set_status(exc.status_text)


__all__ = [
    "STATUS_MESSAGE_SECONDS",
    "Navigator",
    "history_entry",
]
