"""Persistent data-directory and JSON config helpers.

Resolves where history lives and reads optional user preferences.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_data_dir

APP_NAME = "quickswitch"
DATA_DIR_ENV = "_QUICKSWITCH_DATA_DIR"
CONFIG_FILENAME = "config.json"
HISTORY_FILENAME = "history.jsonl"

SORT_RECENT = "recent"
SORT_FREQUENCY = "frequency"
SORT_ALPHABETICAL = "alphabetical"
SORT_MODES = (SORT_RECENT, SORT_FREQUENCY, SORT_ALPHABETICAL)

DEFAULT_MAX_HISTORY_ENTRIES = 100


@dataclass(frozen=True)
class HistoryConfig:
    """History cap, display ordering, and missing-directory visibility."""

    max_entries: int = DEFAULT_MAX_HISTORY_ENTRIES
    sort_mode: str = SORT_RECENT
    hide_missing: bool = True


def data_dir() -> Path:
    """Return the per-user data directory, honoring ``_QUICKSWITCH_DATA_DIR``."""
    override = os.environ.get(DATA_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return Path(user_data_dir(APP_NAME, appauthor=False))


def history_path() -> Path:
    return data_dir() / HISTORY_FILENAME


def config_path() -> Path:
    return data_dir() / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(config_path().read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def load_history_config() -> HistoryConfig:
    """Build ``HistoryConfig`` from the ``history`` section of the config file.

    Values of the wrong type or out of range fall back to defaults.
    """
    section = load_config().get("history")
    if not isinstance(section, dict):
        return HistoryConfig()

    max_entries = section.get("max_entries")
    if isinstance(max_entries, bool) or not isinstance(max_entries, int) or max_entries <= 0:
        max_entries = DEFAULT_MAX_HISTORY_ENTRIES

    sort_mode = section.get("sort_mode")
    if sort_mode not in SORT_MODES:
        sort_mode = SORT_RECENT

    hide_missing = section.get("hide_missing")
    if not isinstance(hide_missing, bool):
        hide_missing = True

    return HistoryConfig(max_entries=max_entries, sort_mode=sort_mode, hide_missing=hide_missing)


__all__ = [
    "APP_NAME",
    "DATA_DIR_ENV",
    "CONFIG_FILENAME",
    "HISTORY_FILENAME",
    "SORT_RECENT",
    "SORT_FREQUENCY",
    "SORT_ALPHABETICAL",
    "SORT_MODES",
    "DEFAULT_MAX_HISTORY_ENTRIES",
    "HistoryConfig",
    "data_dir",
    "history_path",
    "config_path",
    "load_config",
    "load_history_config",
]
