"""Output handoff: deliver the chosen directory to the invoking shell.

The shell wrapper reads the output file, ``cd``s when it names an existing
directory, and deletes it. Cancelled sessions leave the file empty.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from loguru import logger

from ..errors import IoFailure


def directory_for(path: Path) -> Path:
    """Return ``path`` as an absolute directory, or its parent when it is not one."""
    absolute = Path(os.path.abspath(path))
    if absolute.is_dir():
        return absolute
    return absolute.parent


def write_handoff(path: Path | None, output_file: Path | None) -> None:
    """Write ``path`` as the sole content of ``output_file``.

    ``path=None`` (cancelled) truncates the file to empty. Without an output
    file the path is printed to stdout. Raises ``IoFailure`` when the write
    fails; the caller treats that as fatal.
    """
    text = str(path) if path is not None else ""
    if output_file is None:
        if path is not None:
            sys.stdout.write(text + "\n")
            sys.stdout.flush()
        return

    try:
        with output_file.open("w", encoding="utf-8") as handle:
            handle.write(text)
    except OSError as exc:
        logger.error("handoff write to {} failed: {}", output_file, exc)
        raise IoFailure(output_file, f"Could not write output file ({exc.strerror or exc})") from exc
    logger.info("handed off {!r} via {}", text, output_file)


__all__ = [
    "directory_for",
    "write_handoff",
]
