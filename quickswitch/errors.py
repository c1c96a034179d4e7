"""Error taxonomy for listing, preview, history, and handoff failures.

Recoverable errors are shown on the status line via ``status_text``.
Only terminal setup and the final handoff write are fatal.
"""

from __future__ import annotations

from pathlib import Path


class QuickSwitchError(Exception):
    """Base error carrying the offending path and a short user message."""

    def __init__(self, path: Path | None, message: str) -> None:
        super().__init__(message)
        self.path = path
        self.message = message

    @property
    def status_text(self) -> str:
        """One-line text suitable for the status bar."""
        if self.path is None:
            return self.message
        return f"{self.message}: {self.path}"


class NotFound(QuickSwitchError):
    """Path vanished between selection and read."""


class AccessDenied(QuickSwitchError):
    """Permissions forbid reading the path."""


class NotADirectory(QuickSwitchError):
    """Path was expected to be a directory but is not (anymore)."""


class DecodeFailure(QuickSwitchError):
    """Image or document content could not be decoded."""


class IoFailure(QuickSwitchError):
    """Generic read/write error."""


class PersistenceFailure(QuickSwitchError):
    """History record could not be loaded or saved."""


def error_for_os_error(path: Path, exc: OSError) -> QuickSwitchError:
    """Map an ``OSError`` raised while reading ``path`` onto the taxonomy."""
    if isinstance(exc, FileNotFoundError):
        return NotFound(path, "No such file or directory")
    if isinstance(exc, PermissionError):
        return AccessDenied(path, "Permission denied")
    if isinstance(exc, NotADirectoryError):
        return NotADirectory(path, "Not a directory")
    return IoFailure(path, exc.strerror or str(exc))


__all__ = [
    "QuickSwitchError",
    "NotFound",
    "AccessDenied",
    "NotADirectory",
    "DecodeFailure",
    "IoFailure",
    "PersistenceFailure",
    "error_for_os_error",
]
