"""Public runtime orchestration entry points.

This package groups the interactive session bootstrap (``run_session``), the
navigator state machine, and the event loop contracts used by tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .app import SessionOptions
    from .loop import RuntimeLoopCallbacks


def run_session(*args, **kwargs):
    """Lazily import session entrypoint to avoid heavy runtime bootstrap on import."""
    from .app import run_session as _run_session

    return _run_session(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


def __getattr__(name: str):
    if name == "RuntimeLoopCallbacks":
        from . import loop as _loop

        return getattr(_loop, name)
    if name == "SessionOptions":
        from . import app as _app

        return getattr(_app, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "run_session",
    "run_main_loop",
    "RuntimeLoopCallbacks",
    "SessionOptions",
]
