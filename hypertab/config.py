"""Persistent JSON config helpers.

Stores the page-scroll percentage and the document cache timeout.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "hypertab"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_PAGE_SCROLL_PERCENT = 75
DEFAULT_CACHE_TIMEOUT = 1800


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _load_int(key: str, default: int, low: int, high: int | None = None) -> int:
    """Read an integer config value, falling back when invalid or out of range.

    Booleans are rejected even though they are ``int`` subclasses.
    """
    value = load_config().get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    if value < low or (high is not None and value > high):
        return default
    return value


def load_page_scroll_percent() -> int:
    """Return how much of the terminal height one page scroll moves, in percent."""
    return _load_int("page_scroll_percent", DEFAULT_PAGE_SCROLL_PERCENT, 1, 100)


def save_page_scroll_percent(percent: int) -> None:
    """Persist the page-scroll percentage, clamped to ``[1, 100]``."""
    config = load_config()
    config["page_scroll_percent"] = max(1, min(100, int(percent)))
    save_config(config)


def load_cache_timeout() -> int:
    """Return the cache staleness timeout in seconds; ``0`` disables it."""
    return _load_int("cache_timeout", DEFAULT_CACHE_TIMEOUT, 0)


def save_cache_timeout(seconds: int) -> None:
    """Persist the cache timeout, clamping negative values to ``0``."""
    config = load_config()
    config["cache_timeout"] = max(0, int(seconds))
    save_config(config)
