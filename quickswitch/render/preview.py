"""Projection of preview payloads onto preview-pane text rows."""

from __future__ import annotations

from ..preview.payload import (
    BinaryInfo,
    DirectorySummary,
    DocumentText,
    ImageRender,
    PreviewPayload,
    TextExcerpt,
)
from ..preview.text import sanitize_terminal_text
from .theme import DEFAULT_THEME, UITheme

HALF_BLOCK = "▀"


def format_size(size: int | None) -> str:
    """Format a byte count with binary units (``1.5 KiB``)."""
    if size is None:
        return "unknown size"
    if size < 1024:
        return f"{size} B"
    value = float(size)
    for unit in ("KiB", "MiB", "GiB", "TiB"):
        value /= 1024.0
        if value < 1024.0 or unit == "TiB":
            return f"{value:.1f} {unit}"
    return f"{size} B"


def _numbered(lines: tuple[tuple[int, str], ...], colored: tuple[str, ...] | None, theme: UITheme) -> list[str]:
    if not lines:
        return []
    gutter = len(str(lines[-1][0]))
    out: list[str] = []
    for idx, (number, text) in enumerate(lines):
        body = colored[idx] if colored is not None else text
        out.append(f"{theme.line_number}{number:>{gutter}} │{theme.reset} {body}")
    return out


def image_rows(image: ImageRender, width: int, rows: int) -> list[str]:
    """Render ``image`` as truecolor half-block rows fitting ``width x rows`` cells.

    Each cell shows two vertically stacked pixels: foreground is the upper
    pixel and background the lower one.
    """
    if width <= 0 or rows <= 0 or image.width <= 0 or image.height <= 0:
        return []
    scale = min(width / image.width, (rows * 2) / image.height, 1.0)
    target_w = max(1, int(image.width * scale))
    target_h = max(1, int(image.height * scale))

    out: list[str] = []
    for top in range(0, target_h, 2):
        cells: list[str] = []
        top_y = top * image.height // target_h
        has_bottom = top + 1 < target_h
        bottom_y = (top + 1) * image.height // target_h
        for x in range(target_w):
            source_x = x * image.width // target_w
            r, g, b = image.pixel(source_x, top_y)
            if has_bottom:
                br, bg, bb = image.pixel(source_x, bottom_y)
                cells.append(f"\033[38;2;{r};{g};{b};48;2;{br};{bg};{bb}m{HALF_BLOCK}")
            else:
                cells.append(f"\033[49;38;2;{r};{g};{b}m{HALF_BLOCK}")
        out.append("".join(cells) + "\033[0m")
    return out


def preview_lines(
    payload: PreviewPayload | None,
    width: int,
    rows: int,
    *,
    pending: bool = False,
    colorize: bool = True,
    theme: UITheme = DEFAULT_THEME,
) -> list[str]:
    """Return at most ``rows`` preview-pane lines for ``payload``."""
    if payload is None:
        if pending:
            return [f"{theme.note}Loading preview...{theme.reset}"]
        return []

    lines: list[str]
    if isinstance(payload, DirectorySummary):
        if not payload.names:
            lines = [f"{theme.note}(empty directory){theme.reset}"]
        else:
            lines = []
            for name in payload.names:
                label = sanitize_terminal_text(name, keep_line_breaks=False)
                lines.append(f"{theme.entry_dir}{label}{theme.reset}" if name.endswith("/") else label)
        if payload.truncated:
            lines.append(f"{theme.note}... +{payload.remainder} more{theme.reset}")
    elif isinstance(payload, TextExcerpt):
        colored = payload.highlighted if colorize else None
        lines = _numbered(payload.lines, colored, theme)
        if not lines:
            lines = [f"{theme.note}(empty file){theme.reset}"]
        if payload.truncated:
            lines.append(f"{theme.note}... (truncated){theme.reset}")
    elif isinstance(payload, DocumentText):
        pages = "page" if payload.page_count == 1 else "pages"
        lines = [f"{theme.note}PDF document, {payload.page_count} {pages}{theme.reset}"]
        if payload.lines:
            lines.extend(_numbered(payload.lines, None, theme))
        else:
            lines.append(f"{theme.note}(no extractable text){theme.reset}")
        if payload.truncated:
            lines.append(f"{theme.note}... (truncated){theme.reset}")
    elif isinstance(payload, ImageRender):
        label = payload.image_format or "image"
        header = f"{theme.note}{label} {payload.source_width}x{payload.source_height}{theme.reset}"
        if not colorize:
            return [header][:rows]
        lines = [header, *image_rows(payload, width, max(0, rows - 1))]
    elif isinstance(payload, BinaryInfo):
        if payload.note:
            note = sanitize_terminal_text(payload.note, keep_line_breaks=False)
            lines = [f"{theme.note}{note}{theme.reset}"]
            if payload.size is not None:
                lines.append(f"Size: {format_size(payload.size)}")
        else:
            lines = [f"Binary file, {format_size(payload.size)}"]
    else:
        lines = []
    return lines[:rows]


__all__ = [
    "HALF_BLOCK",
    "format_size",
    "image_rows",
    "preview_lines",
]
