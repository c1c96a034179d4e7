"""Rendering for the two-pane navigator view.

Defines render context data and composes full ANSI frames.
Composition is a pure projection of navigator state; only ``render_frame``
touches the terminal, with a single write per frame.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from ..entries.types import KIND_DIRECTORY, KIND_FILE, KIND_SYMLINK, Entry
from ..preview.payload import PreviewPayload
from ..preview.text import sanitize_terminal_text
from ..runtime.state import MODE_BROWSING, MODE_HISTORY, MODE_SEARCHING, NavigatorState
from .ansi import clip_ansi_line, display_width, pad_ansi_line
from .preview import preview_lines
from .theme import DEFAULT_THEME, UITheme, theme_for

MODE_LABELS = {
    MODE_BROWSING: "BROWSE",
    MODE_SEARCHING: "SEARCH",
    MODE_HISTORY: "HISTORY",
}
HELP_HINT = "│ / search  v history  Tab select  Esc quit"


@dataclass(frozen=True)
class RenderContext:
    mode: str
    base_mode: str
    query: str
    current_path: Path
    entries: list[Entry]
    selected_idx: int
    list_start: int
    total_count: int
    width: int
    height: int
    left_width: int
    preview: PreviewPayload | None = None
    preview_pending: bool = False
    status_message: str = ""
    colorize: bool = True
    truncated_listing: bool = False


def context_from_state(
    state: NavigatorState,
    width: int,
    height: int,
    left_width: int,
    colorize: bool = True,
) -> RenderContext:
    """Snapshot navigator state into an immutable render context."""
    return RenderContext(
        mode=state.mode,
        base_mode=state.base_mode,
        query=state.query,
        current_path=state.current_path,
        entries=state.displayed_entries,
        selected_idx=state.selected_idx,
        list_start=state.list_start,
        total_count=len(state.source_entries),
        width=width,
        height=height,
        left_width=left_width,
        preview=state.preview,
        preview_pending=state.preview_pending,
        status_message=state.status_message,
        colorize=colorize,
        truncated_listing=state.entry_set.truncated,
    )


def compute_left_width(total_width: int) -> int:
    if total_width <= 60:
        return max(16, total_width // 2)
    return max(20, min(48, total_width * 2 // 5))


def clamp_left_width(total_width: int, desired_left: int) -> int:
    max_possible = max(1, total_width - 2)
    min_left = max(12, min(20, total_width - 12))
    max_left = max(min_left, total_width - 12)
    max_left = min(max_left, max_possible)
    min_left = min(min_left, max_left)
    return max(min_left, min(desired_left, max_left))


def list_rows(height: int, query_row: bool) -> int:
    """Return how many entry rows fit in the list pane."""
    content_rows = max(1, height - 1)
    return max(1, content_rows - (1 if query_row else 0))


def scroll_list_start(selected_idx: int, list_start: int, visible_rows: int, total: int) -> int:
    """Return a list offset that keeps ``selected_idx`` visible."""
    if selected_idx < list_start:
        list_start = selected_idx
    elif selected_idx >= list_start + visible_rows:
        list_start = selected_idx - visible_rows + 1
    return max(0, min(list_start, max(0, total - visible_rows)))


def safe_label(text: str) -> str:
    """Escape control characters, line breaks included, in a one-row label."""
    return sanitize_terminal_text(text, keep_line_breaks=False)


def selected_with_ansi(text: str) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return text

    # Keep reverse video active even when the text contains internal resets.
    return "\033[7m" + text.replace("\033[0m", "\033[0;7m") + "\033[0m"


def highlight_substring(text: str, query: str, theme: UITheme) -> str:
    """Highlight the first case-insensitive occurrence of ``query`` in ``text``."""
    if not query or not theme.match:
        return text
    folded_text = text.casefold()
    folded_query = query.casefold()
    idx = folded_text.find(folded_query)
    if idx < 0 or len(folded_text) != len(text):
        return text
    end = idx + len(folded_query)
    return text[:idx] + theme.match + text[idx:end] + theme.match_end + text[end:]


def format_entry(entry: Entry, query: str = "", theme: UITheme = DEFAULT_THEME) -> str:
    """Render one list row: name with kind suffix and kind color."""
    color = {
        KIND_DIRECTORY: theme.entry_dir,
        KIND_SYMLINK: theme.entry_symlink,
        KIND_FILE: theme.entry_file,
    }.get(entry.kind, theme.entry_other)
    name = highlight_substring(safe_label(entry.name), query, theme)
    suffix = entry.display_name[len(entry.name):]
    return f" {color}{name}{suffix}{theme.reset}"


def build_status_line(left_text: str, width: int, right_text: str = HELP_HINT) -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def _query_row(context: RenderContext, theme: UITheme) -> str:
    if context.mode == MODE_SEARCHING:
        text = f"{theme.query}/ {safe_label(context.query)}_{theme.reset}"
        text += f"{theme.hint}  {len(context.entries)}/{context.total_count}{theme.reset}"
        return selected_with_ansi(text)
    return f"{theme.query}/ {safe_label(context.query)}{theme.reset}{theme.hint}  {len(context.entries)} matches{theme.reset}"


def _status_text(context: RenderContext) -> str:
    if context.status_message:
        return f" {safe_label(context.status_message)}"
    label = MODE_LABELS.get(context.mode, context.mode.upper())
    if context.base_mode == MODE_HISTORY:
        location = "recent directories"
    else:
        location = safe_label(str(context.current_path))
        if context.truncated_listing:
            location += " (listing truncated)"
    position = f"{context.selected_idx + 1}/{len(context.entries)}" if context.entries else "0/0"
    return f" {label}  {location}  [{position}]"


def compose_frame(context: RenderContext) -> str:
    """Compose the full frame text for ``context`` without side effects."""
    theme = theme_for(context.colorize)
    width = max(2, context.width)
    content_rows = max(1, context.height - 1)
    left_width = clamp_left_width(width, context.left_width)
    right_width = max(1, width - left_width - 2)

    show_query_row = context.mode == MODE_SEARCHING or bool(context.query)
    row_offset = 1 if show_query_row else 0
    right_lines = preview_lines(
        context.preview,
        right_width,
        content_rows,
        pending=context.preview_pending,
        colorize=context.colorize,
        theme=theme,
    )

    out: list[str] = ["\033[H\033[J"]
    for row in range(content_rows):
        if show_query_row and row == 0:
            left_text = _query_row(context, theme)
        else:
            entry_idx = context.list_start + row - row_offset
            if 0 <= entry_idx < len(context.entries):
                left_text = format_entry(context.entries[entry_idx], context.query, theme)
                if entry_idx == context.selected_idx:
                    left_text = selected_with_ansi(pad_ansi_line(left_text, left_width))
            elif row == row_offset and not context.entries:
                empty = "(no matches)" if context.query else "(empty)"
                left_text = f"{theme.hint} {empty}{theme.reset}"
            else:
                left_text = ""
        out.append(pad_ansi_line(left_text, left_width))
        if theme.divider:
            out.append(f"{theme.divider}│{theme.reset}")
        else:
            out.append("│")
        if row < len(right_lines):
            right_text = clip_ansi_line(right_lines[row], right_width)
            out.append(right_text)
            if "\033" in right_text:
                out.append("\033[0m")
        out.append("\r\n")

    status = build_status_line(_status_text(context), width)
    out.append("\033[7m")
    out.append(status)
    out.append("\033[0m")
    return "".join(out)


def render_frame(context: RenderContext) -> None:
    """Write one composed frame to stdout."""
    frame = compose_frame(context)
    os.write(sys.stdout.fileno(), frame.encode("utf-8", errors="replace"))


__all__ = [
    "RenderContext",
    "context_from_state",
    "compute_left_width",
    "clamp_left_width",
    "list_rows",
    "scroll_list_start",
    "safe_label",
    "selected_with_ansi",
    "highlight_substring",
    "format_entry",
    "build_status_line",
    "compose_frame",
    "render_frame",
    "display_width",
]
