"""Preview dispatch: classify the highlighted entry and build its payload.

Classification order is directory, document extension, image extension, then
content sniffing. ``build_preview`` never raises; every failure downgrades to
``BinaryInfo`` with a short note.
"""

from __future__ import annotations

import stat
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from ..entries.fs import safe_file_size
from ..entries.types import Entry
from ..errors import QuickSwitchError, error_for_os_error
from .directory import DIR_PREVIEW_MAX_ENTRIES, build_directory_summary
from .document import extract_document_text, is_document_path
from .image import decode_image, is_image_path
from .payload import BinaryInfo, PreviewPayload, TextExcerpt
from .text import DEFAULT_STYLE, TEXT_PREVIEW_MAX_LINES, highlight_lines, read_text_excerpt

PREVIEW_DIRECTORY = "directory"
PREVIEW_DOCUMENT = "document"
PREVIEW_IMAGE = "image"
PREVIEW_TEXT = "text"
PREVIEW_SPECIAL = "special"
PREVIEW_MISSING = "missing"


@dataclass(frozen=True)
class PreviewOptions:
    """Knobs shared by every preview build."""

    style: str = DEFAULT_STYLE
    colorize: bool = True
    max_lines: int = TEXT_PREVIEW_MAX_LINES
    dir_max_entries: int = DIR_PREVIEW_MAX_ENTRIES


def classify_path(path: Path) -> str:
    """Return the preview handler name for ``path``, following symlinks once."""
    try:
        info = path.stat()
    except OSError:
        return PREVIEW_MISSING
    if stat.S_ISDIR(info.st_mode):
        return PREVIEW_DIRECTORY
    if not stat.S_ISREG(info.st_mode):
        return PREVIEW_SPECIAL
    if is_document_path(path):
        return PREVIEW_DOCUMENT
    if is_image_path(path):
        return PREVIEW_IMAGE
    return PREVIEW_TEXT


def is_heavy_preview(entry: Entry) -> bool:
    """Return whether ``entry`` needs a decode that should run off the input loop."""
    if entry.is_dir:
        return False
    return is_document_path(entry.path) or is_image_path(entry.path)


def _text_preview(path: Path, options: PreviewOptions) -> PreviewPayload:
    excerpt = read_text_excerpt(path, max_lines=options.max_lines)
    if excerpt is None:
        return BinaryInfo(path=path, size=safe_file_size(path))
    numbered, truncated = excerpt
    highlighted = None
    if options.colorize:
        colored = highlight_lines([text for _, text in numbered], path, options.style)
        if colored is not None:
            highlighted = tuple(colored)
    return TextExcerpt(path=path, lines=tuple(numbered), truncated=truncated, highlighted=highlighted)


def build_preview(entry: Entry, options: PreviewOptions | None = None) -> PreviewPayload:
    """Build the preview payload for one highlighted entry."""
    if options is None:
        options = PreviewOptions()
    path = entry.path
    kind = classify_path(path)
    try:
        if kind == PREVIEW_MISSING:
            note = "broken symlink" if entry.is_symlink else "not found"
            return BinaryInfo(path=path, size=None, note=note)
        if kind == PREVIEW_DIRECTORY:
            return build_directory_summary(path, max_entries=options.dir_max_entries)
        if kind == PREVIEW_SPECIAL:
            return BinaryInfo(path=path, size=None, note="special file")
        if kind == PREVIEW_DOCUMENT:
            return extract_document_text(path, max_lines=options.max_lines)
        if kind == PREVIEW_IMAGE:
            return decode_image(path)
        return _text_preview(path, options)
    except QuickSwitchError as exc:
        logger.debug("preview downgraded for {}: {}", path, exc.message)
        return BinaryInfo(path=path, size=safe_file_size(path), note=exc.message)
    except OSError as exc:
        error = error_for_os_error(path, exc)
        logger.debug("preview read failed for {}: {}", path, error.message)
        return BinaryInfo(path=path, size=safe_file_size(path), note=error.message)


def preview_note(payload: PreviewPayload | None) -> str | None:
    """Return the degradation note carried by ``payload``, if any."""
    if isinstance(payload, BinaryInfo):
        return payload.note
    return None


__all__ = [
    "PREVIEW_DIRECTORY",
    "PREVIEW_DOCUMENT",
    "PREVIEW_IMAGE",
    "PREVIEW_TEXT",
    "PREVIEW_SPECIAL",
    "PREVIEW_MISSING",
    "PreviewOptions",
    "classify_path",
    "is_heavy_preview",
    "build_preview",
    "preview_note",
]
