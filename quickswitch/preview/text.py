"""Bounded text sniffing, excerpt reading, sanitization, and highlighting.

Reads only the byte window needed for the line cap.
Also neutralizes terminal control bytes to avoid unsafe preview side effects.
"""

from __future__ import annotations

import codecs
import re
from pathlib import Path
from typing import BinaryIO

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

TEXT_PREVIEW_MAX_LINES = 100
TEXT_PROBE_BYTES = 8_192
TEXT_PREVIEW_MAX_BYTES = 512 * 1024
TEXT_LINE_MAX_BYTES = 4_096
DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_ANY_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, TerminalFormatter] = {}


def sanitize_terminal_text(source: str, keep_line_breaks: bool = True) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.).

    With ``keep_line_breaks=False`` newline, carriage return and tab are escaped
    too, for single-row labels such as file names and paths.
    """
    pattern = _CONTROL_RE if keep_line_breaks else _ANY_CONTROL_RE
    if pattern.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if keep_line_breaks and ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def looks_like_text(sample: bytes) -> bool:
    """Return whether a file prefix looks like UTF-8 text.

    NUL bytes mean binary. A multi-byte sequence cut off by the probe window
    at the very end of ``sample`` is tolerated.
    """
    if b"\x00" in sample:
        return False
    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        decoder.decode(sample, final=False)
    except UnicodeDecodeError:
        return False
    return True


def read_line_window(
    handle: BinaryIO,
    max_lines: int = TEXT_PREVIEW_MAX_LINES,
    max_bytes: int = TEXT_PREVIEW_MAX_BYTES,
) -> tuple[list[bytes], bool]:
    """Read up to ``max_lines`` raw lines without exceeding ``max_bytes``.

    Returns ``(lines, truncated)`` where ``truncated`` reports that unread
    content remains. Overlong lines are cut at ``TEXT_LINE_MAX_BYTES`` and the
    rest of that line is skipped.
    """
    lines: list[bytes] = []
    budget = max_bytes
    while len(lines) < max_lines and budget > 0:
        raw = handle.readline(min(budget, TEXT_LINE_MAX_BYTES))
        if not raw:
            return lines, False
        budget -= len(raw)
        if len(raw) == TEXT_LINE_MAX_BYTES and not raw.endswith(b"\n"):
            budget = _skip_rest_of_line(handle, budget)
        lines.append(raw)
    return lines, bool(handle.read(1))


def _skip_rest_of_line(handle: BinaryIO, budget: int) -> int:
    """Consume the remainder of an overlong line and return the leftover budget."""
    while budget > 0:
        rest = handle.readline(min(budget, TEXT_LINE_MAX_BYTES))
        if not rest:
            break
        budget -= len(rest)
        if rest.endswith(b"\n"):
            break
    return budget


def decode_line(raw: bytes) -> str:
    """Decode one raw line into sanitized display text without terminators."""
    text = raw.decode("utf-8", errors="replace").rstrip("\r\n")
    if text.startswith("\ufeff"):
        text = text[1:]
    return sanitize_terminal_text(text).replace("\r", "\\x0d")


def read_text_excerpt(path: Path, max_lines: int = TEXT_PREVIEW_MAX_LINES) -> tuple[list[tuple[int, str]], bool] | None:
    """Return 1-based numbered lines for a text file, or ``None`` for binary.

    ``OSError`` from opening/reading propagates to the caller.
    """
    with path.open("rb") as handle:
        sample = handle.read(TEXT_PROBE_BYTES)
        if not looks_like_text(sample):
            return None
        handle.seek(0)
        raw_lines, truncated = read_line_window(handle, max_lines=max_lines)
    numbered = [(idx + 1, decode_line(raw)) for idx, raw in enumerate(raw_lines)]
    return numbered, truncated


def _normalize_style(style: str) -> str:
    """Validate requested style name, falling back to the default style."""
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    """Return cached Pygments terminal formatter for style name."""
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=_normalize_style(style))
        _FORMATTERS[style] = formatter
    return formatter


def highlight_lines(lines: list[str], path: Path, style: str = DEFAULT_STYLE) -> list[str] | None:
    """Colorize already-sanitized lines, keeping a 1:1 line mapping.

    Returns ``None`` when Pygments output does not map back onto the input
    lines, so callers can fall back to plain text.
    """
    if not lines:
        return []
    source = "\n".join(lines) + "\n"
    try:
        lexer = get_lexer_for_filename(path.name, source, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)
    rendered = highlight(source, lexer, _formatter_for_style(style))
    out = rendered.split("\n")
    if out and out[-1] == "":
        out.pop()
    if len(out) != len(lines):
        return None
    return out


__all__ = [
    "TEXT_PREVIEW_MAX_LINES",
    "TEXT_PROBE_BYTES",
    "TEXT_PREVIEW_MAX_BYTES",
    "TEXT_LINE_MAX_BYTES",
    "DEFAULT_STYLE",
    "sanitize_terminal_text",
    "looks_like_text",
    "read_line_window",
    "decode_line",
    "read_text_excerpt",
    "highlight_lines",
]
