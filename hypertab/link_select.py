"""Keyboard-driven link highlighting state machine.

The selector is either off or selecting one link index. It only decides
transitions; the owning tab applies highlight, status-bar and navigation
effects for the returned ``LinkTransition``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .keys import LinkKey, link_key

logger = logging.getLogger(__name__)


class LinkAction(Enum):
    NONE = "none"
    HIGHLIGHT = "highlight"
    CLEAR = "clear"
    FOLLOW = "follow"


@dataclass(frozen=True)
class LinkTransition:
    """Effect requested by one key press; ``index`` names the link involved."""

    action: LinkAction
    index: int | None = None


_NO_TRANSITION = LinkTransition(LinkAction.NONE)


def parse_selection_id(selection_id: str) -> int:
    """Return the link index encoded in ``selection_id``.

    Malformed ids fall back to ``0`` and are logged, since a valid session
    only ever highlights numeric link regions while selecting.
    """
    try:
        return int(selection_id)
    except ValueError:
        logger.warning("Malformed link highlight id %r; using link 0", selection_id)
        return 0


class LinkSelector:
    """Tracks which link, if any, is keyboard-highlighted."""

    def __init__(self) -> None:
        self.index: int | None = None

    @property
    def active(self) -> bool:
        """Return whether a link is highlighted."""
        return self.index is not None

    def reset(self) -> None:
        """Return to the off state."""
        self.index = None

    def resume(self, selection_id: str, link_count: int) -> LinkTransition:
        """Re-enter selection at a previously stored highlight id."""
        if link_count <= 0:
            self.index = None
            return _NO_TRANSITION
        index = parse_selection_id(selection_id)
        if not 0 <= index < link_count:
            index = 0
        self.index = index
        return LinkTransition(LinkAction.HIGHLIGHT, index)

    def handle(self, key: str | LinkKey, link_count: int) -> LinkTransition:
        """Advance the state machine for one key press."""
        key = link_key(key)
        if key is LinkKey.ESC:
            self.index = None
            return LinkTransition(LinkAction.CLEAR)

        if self.index is None:
            if key is LinkKey.ENTER and link_count > 0:
                self.index = 0
                return LinkTransition(LinkAction.HIGHLIGHT, 0)
            return _NO_TRANSITION

        if link_count <= 0:
            # Links vanished under an active selection.
            self.index = None
            return LinkTransition(LinkAction.CLEAR)

        index = min(self.index, link_count - 1)
        if key is LinkKey.ENTER:
            self.index = None
            return LinkTransition(LinkAction.FOLLOW, index)
        if key is LinkKey.TAB:
            index = (index + 1) % link_count
        elif key is LinkKey.BACKTAB:
            index = (index - 1 + link_count) % link_count
        else:
            return _NO_TRANSITION
        self.index = index
        return LinkTransition(LinkAction.HIGHLIGHT, index)


__all__ = [
    "LinkAction",
    "LinkSelector",
    "LinkTransition",
    "parse_selection_id",
]
