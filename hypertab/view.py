"""Widget capabilities the session core drives, plus in-memory versions.

The terminal front end supplies real widgets; ``TextView`` and ``BottomBar``
keep the same state in memory for headless sessions and tests.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from .document import Document


class Viewport(Protocol):
    """Scrollable text area with highlightable regions."""

    def get_scroll_offset(self) -> tuple[int, int]: ...

    def scroll_to(self, row: int, column: int) -> None: ...

    def highlight(self, *region_ids: str) -> None: ...

    def get_highlights(self) -> list[str]: ...

    def scroll_to_highlight(self) -> None: ...

    def request_draw(self) -> None: ...


class StatusBar(Protocol):
    """Single-line bar with a label and an editable text body."""

    def get_label(self) -> str: ...

    def set_label(self, label: str) -> None: ...

    def get_text(self) -> str: ...

    def set_text(self, text: str) -> None: ...


class Navigator(Protocol):
    """Resolves ``link`` against ``base_url`` and starts loading it."""

    def follow_link(self, tab_index: int, base_url: str, link: str) -> None: ...


@dataclass(frozen=True)
class RenderResult:
    """Output of one render pass at a given width."""

    content: str
    max_pre_cols: int = -1


Renderer = Callable[[Document, int], RenderResult]


@dataclass
class TextView:
    """In-memory viewport tracking offset, highlights, and region rows."""

    row: int = 0
    column: int = 0
    highlights: list[str] = field(default_factory=list)
    region_rows: dict[str, int] = field(default_factory=dict)
    draw_requests: int = 0

    def get_scroll_offset(self) -> tuple[int, int]:
        """Return the current ``(row, column)`` offset."""
        return self.row, self.column

    def scroll_to(self, row: int, column: int) -> None:
        """Move the viewport, clamping negative offsets to the top-left."""
        self.row = max(0, row)
        self.column = max(0, column)

    def highlight(self, *region_ids: str) -> None:
        """Replace highlighted regions; empty ids clear the highlight."""
        self.highlights = [region_id for region_id in region_ids if region_id]

    def get_highlights(self) -> list[str]:
        """Return a copy of the highlighted region ids."""
        return list(self.highlights)

    def scroll_to_highlight(self) -> None:
        """Bring the first highlighted region into view when its row is known."""
        if not self.highlights:
            return
        target = self.region_rows.get(self.highlights[0])
        if target is not None:
            self.scroll_to(target, self.column)

    def request_draw(self) -> None:
        """Count a redraw request."""
        self.draw_requests += 1


@dataclass
class BottomBar:
    """In-memory status bar: a label followed by free text."""

    label: str = ""
    text: str = ""

    def get_label(self) -> str:
        return self.label

    def set_label(self, label: str) -> None:
        self.label = label

    def get_text(self) -> str:
        return self.text

    def set_text(self, text: str) -> None:
        self.text = text


__all__ = [
    "BottomBar",
    "Navigator",
    "RenderResult",
    "Renderer",
    "StatusBar",
    "TextView",
    "Viewport",
]
