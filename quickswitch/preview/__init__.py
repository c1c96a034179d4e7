"""Preview dispatcher package.

Builders for each payload kind, the dispatcher that picks one for the
highlighted entry, and the single-slot worker for slow decodes.
"""

from __future__ import annotations

from .directory import DIR_PREVIEW_MAX_ENTRIES, build_directory_summary
from .dispatch import (
    PREVIEW_DIRECTORY,
    PREVIEW_DOCUMENT,
    PREVIEW_IMAGE,
    PREVIEW_MISSING,
    PREVIEW_SPECIAL,
    PREVIEW_TEXT,
    PreviewOptions,
    build_preview,
    classify_path,
    is_heavy_preview,
    preview_note,
)
from .document import DOCUMENT_MAX_PAGES, extract_document_text
from .image import decode_image
from .payload import BinaryInfo, DirectorySummary, DocumentText, ImageRender, PreviewPayload, TextExcerpt
from .text import TEXT_PREVIEW_MAX_LINES, read_text_excerpt
from .worker import PreviewJobResult, PreviewJobScheduler

__all__ = [
    "PREVIEW_DIRECTORY",
    "PREVIEW_DOCUMENT",
    "PREVIEW_IMAGE",
    "PREVIEW_MISSING",
    "PREVIEW_SPECIAL",
    "PREVIEW_TEXT",
    "DIR_PREVIEW_MAX_ENTRIES",
    "DOCUMENT_MAX_PAGES",
    "TEXT_PREVIEW_MAX_LINES",
    "BinaryInfo",
    "DirectorySummary",
    "DocumentText",
    "ImageRender",
    "PreviewPayload",
    "TextExcerpt",
    "PreviewOptions",
    "PreviewJobResult",
    "PreviewJobScheduler",
    "build_directory_summary",
    "build_preview",
    "classify_path",
    "decode_image",
    "extract_document_text",
    "is_heavy_preview",
    "preview_note",
    "read_text_excerpt",
]
