"""Runtime composition: build collaborators, run the loop, hand off the result."""

from __future__ import annotations

import shutil
import sys
import termios
from dataclasses import dataclass
from functools import partial
from pathlib import Path

from loguru import logger

from ..config import history_path, load_history_config
from ..errors import IoFailure
from ..history.store import HistoryStore
from ..preview.dispatch import PreviewOptions, build_preview
from ..preview.text import DEFAULT_STYLE
from ..preview.worker import PreviewJobScheduler
from ..render import compute_left_width, render_frame
from .handoff import write_handoff
from .loop import RuntimeLoopCallbacks, run_main_loop
from .navigator import Navigator
from .state import OUTCOME_CONFIRMED
from .terminal import TerminalController


@dataclass(frozen=True)
class SessionOptions:
    start: Path
    output_file: Path | None = None
    start_in_history: bool = False
    style: str = DEFAULT_STYLE
    colorize: bool = True


def run_session(options: SessionOptions) -> Path | None:
    """Run one interactive session and return the handed-off directory.

    Raises ``IoFailure`` when the terminal cannot be initialized or the
    handoff write fails.
    """
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    try:
        terminal = TerminalController(stdin_fd, stdout_fd)
    except termios.error as exc:
        raise IoFailure(None, f"Cannot initialize terminal: {exc}") from exc

    history = HistoryStore(history_path(), load_history_config())
    history.load()

    preview_options = PreviewOptions(style=options.style, colorize=options.colorize)
    scheduler = PreviewJobScheduler(partial(build_preview, options=preview_options))
    navigator = Navigator(
        options.start,
        history=history,
        preview_options=preview_options,
        preview_scheduler=scheduler,
        start_in_history=options.start_in_history,
    )
    logger.info("session started in {}", options.start)

    columns = shutil.get_terminal_size((80, 24)).columns
    try:
        run_main_loop(
            navigator,
            terminal,
            stdin_fd,
            RuntimeLoopCallbacks(
                render=render_frame,
                drain_preview_results=scheduler.drain_results,
            ),
            left_width=compute_left_width(columns),
            colorize=options.colorize,
        )
    except termios.error as exc:
        raise IoFailure(None, f"Cannot initialize terminal: {exc}") from exc
    finally:
        navigator.shutdown()

    state = navigator.state
    handoff = state.handoff_path if state.outcome == OUTCOME_CONFIRMED else None
    logger.info("session ended: {} {}", state.outcome, handoff)
    write_handoff(handoff, options.output_file)
    return handoff


__all__ = [
    "SessionOptions",
    "run_session",
]
