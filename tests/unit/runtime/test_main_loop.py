"""Tests for the interactive event loop with scripted key input."""

from __future__ import annotations

import contextlib
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from quickswitch.config import HistoryConfig
from quickswitch.entries import KIND_FILE, Entry, EntrySet
from quickswitch.history import HistoryStore
from quickswitch.preview import BinaryInfo, PreviewOptions
from quickswitch.runtime.loop import RuntimeLoopCallbacks, normalize_enter, run_main_loop
from quickswitch.runtime.navigator import Navigator
from quickswitch.runtime.state import OUTCOME_CANCELLED, OUTCOME_CONFIRMED


class _FakeTerminal:
    def __init__(self) -> None:
        self.entered = 0
        self.exited = 0

    @contextlib.contextmanager
    def raw_mode(self):
        self.entered += 1
        try:
            yield
        finally:
            self.exited += 1


class MainLoopTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.start = Path(self._tmp.name)
        entries = tuple(
            Entry(name=f"file{idx:02d}.txt", path=self.start / f"file{idx:02d}.txt", kind=KIND_FILE)
            for idx in range(40)
        )
        self.navigator = Navigator(
            self.start,
            history=HistoryStore(self.start / "history.jsonl", HistoryConfig(hide_missing=False)),
            preview_options=PreviewOptions(colorize=False),
            lister=lambda path: EntrySet(directory=path, entries=entries),
            preview_builder=lambda entry, options: BinaryInfo(path=entry.path, size=0),
        )
        self.terminal = _FakeTerminal()
        self.frames: list = []

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, keys: list, **callback_kwargs) -> None:
        callbacks = RuntimeLoopCallbacks(
            render=self.frames.append,
            terminal_size=callback_kwargs.pop("terminal_size", lambda: (100, 12)),
            **callback_kwargs,
        )
        with mock.patch("quickswitch.runtime.loop.read_key", side_effect=keys):
            run_main_loop(self.navigator, self.terminal, 0, callbacks, left_width=40, colorize=False)

    def test_enter_on_file_confirms_and_leaves_raw_mode(self) -> None:
        self._run(["", "DOWN", "ENTER_CR"])

        state = self.navigator.state
        self.assertEqual(state.outcome, OUTCOME_CONFIRMED)
        self.assertEqual(state.handoff_path, self.start)
        self.assertEqual((self.terminal.entered, self.terminal.exited), (1, 1))
        self.assertEqual(len(self.frames), 2)
        self.assertEqual(self.frames[-1].selected_idx, 1)

    def test_escape_cancels(self) -> None:
        self._run(["ESC"])
        self.assertEqual(self.navigator.state.outcome, OUTCOME_CANCELLED)
        self.assertIsNone(self.navigator.state.handoff_path)

    def test_keyboard_interrupt_is_ignored(self) -> None:
        self._run([KeyboardInterrupt(), "ESC"])
        self.assertEqual(self.navigator.state.outcome, OUTCOME_CANCELLED)

    def test_page_rows_follow_terminal_height_and_list_scrolls(self) -> None:
        self._run(["PAGE_DOWN", "PAGE_DOWN", "ESC"])

        # Height 12 leaves 11 list rows; paging moves by one less.
        self.assertEqual(self.navigator.state.page_rows, 10)
        last = self.frames[-1]
        self.assertEqual(last.selected_idx, 20)
        self.assertEqual(last.list_start, 10)
        self.assertEqual((last.width, last.height), (100, 12))

    def test_resize_triggers_redraw(self) -> None:
        sizes = iter([(100, 12), (100, 12), (80, 20)])
        self._run(["", "", "ESC"], terminal_size=lambda: next(sizes))
        self.assertEqual([(frame.width, frame.height) for frame in self.frames], [(100, 12), (80, 20)])

    def test_preview_results_are_drained_each_iteration(self) -> None:
        drained: list[int] = []

        def drain() -> list:
            drained.append(1)
            return []

        self._run(["", "", "ESC"], drain_preview_results=drain)
        self.assertEqual(len(drained), 3)


class NormalizeEnterTests(unittest.TestCase):
    def test_crlf_pair_is_one_enter(self) -> None:
        navigator = mock.Mock()
        navigator.state.skip_next_lf = False

        self.assertEqual(normalize_enter("ENTER_CR", navigator), "ENTER")
        self.assertIsNone(normalize_enter("ENTER_LF", navigator))
        self.assertEqual(normalize_enter("ENTER_LF", navigator), "ENTER")
        self.assertEqual(normalize_enter("x", navigator), "x")


if __name__ == "__main__":
    unittest.main()
