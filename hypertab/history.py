"""Per-tab navigation history with a back/forward cursor.

Pushing a URL while the cursor sits behind the newest entry drops the
forward branch first, like a conventional browser.
"""

from __future__ import annotations


class History:
    """Visited URLs plus the index of the one currently displayed."""

    def __init__(self) -> None:
        self.urls: list[str] = []
        self.pos = -1

    def __len__(self) -> int:
        """Return the number of recorded URLs."""
        return len(self.urls)

    @property
    def current(self) -> str | None:
        """Return the URL under the cursor, or ``None`` when empty."""
        if not self.urls:
            return None
        return self.urls[self.pos]

    def can_go_back(self) -> bool:
        """Return whether an earlier entry exists."""
        return self.pos > 0

    def can_go_forward(self) -> bool:
        """Return whether a later entry exists."""
        return self.pos < len(self.urls) - 1

    def push(self, url: str) -> None:
        """Append ``url`` as the newest entry, discarding any forward branch."""
        if self.pos < len(self.urls) - 1:
            del self.urls[self.pos + 1 :]
        self.urls.append(url)
        self.pos = len(self.urls) - 1

    def back(self) -> str | None:
        """Step the cursor back and return the new URL, or ``None`` at the start."""
        if not self.can_go_back():
            return None
        self.pos -= 1
        return self.urls[self.pos]

    def forward(self) -> str | None:
        """Step the cursor forward and return the new URL, or ``None`` at the end."""
        if not self.can_go_forward():
            return None
        self.pos += 1
        return self.urls[self.pos]


__all__ = ["History"]
