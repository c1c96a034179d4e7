"""Logging configuration for quickswitch.

Logs go to a file only; the terminal belongs to the navigator UI.
"""

from __future__ import annotations

import os
import tempfile
import time
from pathlib import Path

from loguru import logger

LOG_LEVEL_ENV = "QUICKSWITCH_LOG"
LOG_FORMAT = "{elapsed} {level: <7} {name}:{line} {message}"
VERBOSITY_LEVELS = {1: "INFO", 2: "DEBUG", 3: "TRACE"}


def _default_log_file() -> Path:
    """Create and return a fresh ``qs-<date>-<pid>-XXXXX.log`` temp file."""
    prefix = f"qs-{time.strftime('%Y-%m-%d')}-{os.getpid()}-"
    fd, name = tempfile.mkstemp(prefix=prefix, suffix=".log")
    os.close(fd)
    return Path(name)


def configure_logging(verbosity: int = 0, log_file: Path | None = None) -> Path | None:
    """Configure loguru for the session and return the log file path, if any.

    Verbosity 0 disables logging unless ``QUICKSWITCH_LOG`` names a level;
    1 is INFO, 2 is DEBUG, and 3 or more is TRACE.
    """
    logger.remove()
    if verbosity <= 0:
        level = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
        if not level:
            return None
    else:
        level = VERBOSITY_LEVELS.get(verbosity, "TRACE")

    target = log_file if log_file is not None else _default_log_file()
    try:
        logger.add(target, level=level, format=LOG_FORMAT, mode="a", encoding="utf-8")
    except ValueError:
        # Unknown level name in the environment variable.
        logger.add(target, level="INFO", format=LOG_FORMAT, mode="a", encoding="utf-8")
        logger.warning("unknown log level {!r}; using INFO", level)
    if verbosity > 3:
        logger.warning("verbosity {} is above the maximum; using TRACE", verbosity)
    return target


__all__ = [
    "LOG_LEVEL_ENV",
    "configure_logging",
]
