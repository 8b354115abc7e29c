"""Document records shared between tabs and the document cache.

A ``Document`` bundles one fetched/rendered resource with the view-state
(scroll offset, selection) a tab leaves behind when it navigates away.
Tabs and the cache hold the same object, so view-state edits are shared.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum, IntEnum

PLACEHOLDER_SCHEME = "about:"


class Mediatype(str, Enum):
    """Renderer family for a document, independent of the reported type."""

    GEMINI = "text/gemini"
    PLAIN = "text/plain"
    ANSI = "text/x-ansi"


class NavigationMode(IntEnum):
    OFF = 0
    LINK_SELECT = 1
    # Reserved for in-page search; nothing enters it yet.
    SEARCH = 2


@dataclass(eq=False)
class Document:
    """One rendered resource plus the view-state stored with it.

    ``max_pre_cols`` of ``-1`` means preformatted lines are unbounded, so
    horizontal scrolling is always allowed. ``column`` includes left-margin
    size changes and does not map exactly onto a terminal cell. A ``made_at``
    of ``None`` or zero means the document never goes stale.
    """

    url: str = ""
    mediatype: Mediatype = Mediatype.PLAIN
    raw_mediatype: str = ""
    raw: str = ""
    content: str = ""
    max_pre_cols: int = -1
    links: list[str] = field(default_factory=list)
    row: int = 0
    column: int = 0
    term_width: int = 0
    selected: str = ""
    selected_id: str = ""
    mode: NavigationMode = NavigationMode.OFF
    made_at: float | None = None

    def size(self) -> int:
        """Return an approximate size in characters, for cache accounting."""
        n = len(self.raw) + len(self.content) + len(self.url) + len(self.selected) + len(self.selected_id)
        for link in self.links:
            n += len(link)
        return n

    def is_placeholder(self) -> bool:
        """Return whether this document is a synthetic ``about:`` page."""
        return self.url.startswith(PLACEHOLDER_SCHEME)

    def is_stale(self, max_age: float, now: float | None = None) -> bool:
        """Return whether the document is older than ``max_age`` seconds.

        A ``made_at`` of ``None`` or zero and a non-positive ``max_age`` both
        mean never stale.
        """
        if not self.made_at or max_age <= 0:
            return False
        if now is None:
            now = time.time()
        return now - self.made_at > max_age

    def needs_reflow(self, width: int) -> bool:
        """Return whether ``content`` was produced for a different width."""
        return self.term_width != width

    def link_index(self, selection_id: str) -> int | None:
        """Return the link index named by ``selection_id``, if it is one."""
        try:
            index = int(selection_id)
        except ValueError:
            return None
        if 0 <= index < len(self.links):
            return index
        return None


__all__ = ["Document", "Mediatype", "NavigationMode", "PLACEHOLDER_SCHEME"]
