"""PDF text extraction for document previews."""

from __future__ import annotations

from pathlib import Path

from pypdf import PdfReader

from ..errors import DecodeFailure
from .payload import DocumentText
from .text import TEXT_PREVIEW_MAX_LINES, sanitize_terminal_text

DOCUMENT_EXTENSIONS = frozenset({".pdf"})
DOCUMENT_MAX_PAGES = 10
DOCUMENT_MAX_BYTES = 32 * 1024 * 1024


def is_document_path(path: Path) -> bool:
    return path.suffix.lower() in DOCUMENT_EXTENSIONS


def extract_document_text(
    path: Path,
    max_lines: int = TEXT_PREVIEW_MAX_LINES,
    max_pages: int = DOCUMENT_MAX_PAGES,
) -> DocumentText:
    """Extract up to ``max_lines`` non-blank lines from the first pages of a PDF.

    Pages are read one at a time and extraction stops once the line cap is
    filled. Raises ``DecodeFailure`` when the document cannot be parsed.
    """
    size = path.stat().st_size
    if size > DOCUMENT_MAX_BYTES:
        raise DecodeFailure(path, "document too large to preview")

    lines: list[tuple[int, str]] = []
    truncated = False
    try:
        reader = PdfReader(path)
        page_count = len(reader.pages)
        for page_index, page in enumerate(reader.pages):
            if page_index >= max_pages:
                truncated = True
                break
            text = page.extract_text() or ""
            for raw_line in text.splitlines():
                line = raw_line.rstrip()
                if not line:
                    continue
                if len(lines) >= max_lines:
                    truncated = True
                    break
                lines.append((len(lines) + 1, sanitize_terminal_text(line)))
            if truncated:
                break
    except Exception as exc:
        raise DecodeFailure(path, f"document extraction failed ({exc.__class__.__name__})") from exc

    return DocumentText(path=path, lines=tuple(lines), page_count=page_count, truncated=truncated)


__all__ = [
    "DOCUMENT_EXTENSIONS",
    "DOCUMENT_MAX_PAGES",
    "DOCUMENT_MAX_BYTES",
    "is_document_path",
    "extract_document_text",
]
