"""Preview payload variants for the highlighted entry.

``PreviewPayload`` is a closed union; renderers switch on the concrete type.
Payloads are ephemeral and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DirectorySummary:
    """Direct children of a directory, capped with a remainder count."""

    path: Path
    names: tuple[str, ...]
    remainder: int = 0

    @property
    def truncated(self) -> bool:
        return self.remainder > 0


@dataclass(frozen=True)
class TextExcerpt:
    """Leading lines of a text file as ``(line_number, text)`` pairs.

    ``highlighted`` holds ANSI-colored copies of the same lines when syntax
    coloring was requested and succeeded.
    """

    path: Path
    lines: tuple[tuple[int, str], ...]
    truncated: bool = False
    highlighted: tuple[str, ...] | None = None


@dataclass(frozen=True)
class ImageRender:
    """Decoded RGB raster downscaled for half-block terminal rendering."""

    path: Path
    width: int
    height: int
    rgb: bytes
    source_width: int
    source_height: int
    image_format: str | None = None

    def pixel(self, x: int, y: int) -> tuple[int, int, int]:
        """Return the ``(r, g, b)`` triple at raster coordinate ``(x, y)``."""
        offset = (y * self.width + x) * 3
        return self.rgb[offset], self.rgb[offset + 1], self.rgb[offset + 2]


@dataclass(frozen=True)
class DocumentText:
    """Plain text extracted from a document, capped like text excerpts."""

    path: Path
    lines: tuple[tuple[int, str], ...]
    page_count: int
    truncated: bool = False


@dataclass(frozen=True)
class BinaryInfo:
    """Fallback payload: file size plus an optional degradation note."""

    path: Path
    size: int | None
    note: str | None = None


PreviewPayload = DirectorySummary | TextExcerpt | ImageRender | DocumentText | BinaryInfo


__all__ = [
    "DirectorySummary",
    "TextExcerpt",
    "ImageRender",
    "DocumentText",
    "BinaryInfo",
    "PreviewPayload",
]
