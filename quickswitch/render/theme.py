"""ANSI palettes for the list pane, preview pane, and status chrome.

Syntax highlighting style for text previews is a separate Pygments setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reset: str
    entry_dir: str
    entry_symlink: str
    entry_file: str
    entry_other: str
    match: str
    match_end: str
    query: str
    hint: str
    line_number: str
    note: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reset="\033[0m",
    entry_dir="\033[1;34m",
    entry_symlink="\033[38;5;44m",
    entry_file="\033[38;5;252m",
    entry_other="\033[38;5;214m",
    match="\033[7;1m",
    match_end="\033[27;22m",
    query="\033[1;38;5;81m",
    hint="\033[2;38;5;250m",
    line_number="\033[38;5;242m",
    note="\033[2;38;5;250m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reset="",
    entry_dir="",
    entry_symlink="",
    entry_file="",
    entry_other="",
    match="",
    match_end="",
    query="",
    hint="",
    line_number="",
    note="",
)


def theme_for(colorize: bool) -> UITheme:
    return DEFAULT_THEME if colorize else PLAIN_THEME


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "theme_for",
]
