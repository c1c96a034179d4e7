"""Main interactive event loop for the navigator.

Each iteration expires status text, installs finished background previews,
renders when the state is dirty, then blocks briefly for one key.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass

from ..input import ENTER_KEYS, read_key
from ..render import RenderContext, clamp_left_width, context_from_state, list_rows, scroll_list_start
from .state import MODE_SEARCHING
from .navigator import Navigator
from .terminal import TerminalController

KEY_POLL_TIMEOUT_MS = 120


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    render: Callable[[RenderContext], None]
    drain_preview_results: Callable[[], list] | None = None
    terminal_size: Callable[[], tuple[int, int]] | None = None


def _default_terminal_size() -> tuple[int, int]:
    size = shutil.get_terminal_size((80, 24))
    return size.columns, size.lines


def normalize_enter(key: str, navigator: Navigator) -> str | None:
    """Collapse CR/LF pairs into one ``ENTER`` token; ``None`` means skip."""
    state = navigator.state
    if state.skip_next_lf and key == "ENTER_LF":
        state.skip_next_lf = False
        return None
    state.skip_next_lf = key == "ENTER_CR"
    if key in ENTER_KEYS:
        return "ENTER"
    return key


def run_main_loop(
    navigator: Navigator,
    terminal: TerminalController,
    stdin_fd: int,
    callbacks: RuntimeLoopCallbacks,
    *,
    left_width: int,
    colorize: bool = True,
) -> None:
    """Run the interactive loop until the navigator reaches an outcome."""
    state = navigator.state
    terminal_size = callbacks.terminal_size or _default_terminal_size
    last_size: tuple[int, int] | None = None

    with terminal.raw_mode():
        while state.outcome is None:
            columns, lines = terminal_size()
            if (columns, lines) != last_size:
                last_size = (columns, lines)
                state.dirty = True
            navigator.expire_status()
            if callbacks.drain_preview_results is not None:
                navigator.apply_preview_results(callbacks.drain_preview_results())

            query_row = state.mode == MODE_SEARCHING or bool(state.query)
            visible_rows = list_rows(lines, query_row)
            state.page_rows = max(1, visible_rows - 1)
            list_start = scroll_list_start(state.selected_idx, state.list_start, visible_rows, len(state.view))
            if list_start != state.list_start:
                state.list_start = list_start
                state.dirty = True

            if state.dirty:
                callbacks.render(
                    context_from_state(
                        state,
                        width=columns,
                        height=lines,
                        left_width=clamp_left_width(columns, left_width),
                        colorize=colorize,
                    )
                )
                state.dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=KEY_POLL_TIMEOUT_MS)
            except KeyboardInterrupt:
                continue
            if key == "":
                continue
            token = normalize_enter(key, navigator)
            if token is None:
                continue
            navigator.handle_key(token)


__all__ = [
    "KEY_POLL_TIMEOUT_MS",
    "RuntimeLoopCallbacks",
    "normalize_enter",
    "run_main_loop",
]
