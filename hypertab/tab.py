"""Per-tab browsing state and the bookkeeping done at navigation boundaries.

A tab owns one displayed ``Document``, its ``History`` and ``LinkSelector``,
plus a snapshot of the shared status bar. The session calls the save/apply
helpers whenever the active tab or the displayed document changes.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from .document import Document, NavigationMode
from .history import History
from .keys import LinkKey
from .link_select import LinkAction, LinkSelector, LinkTransition
from .view import Renderer, StatusBar, TextView, Viewport

logger = logging.getLogger(__name__)

LINK_LABEL = "Link: "

FollowLink = Callable[[str, str], None]


class Tab:
    """One browsing context: document, history, link selection, bar snapshot."""

    def __init__(self, view: Viewport | None = None) -> None:
        self.document = Document()
        self.view: Viewport = view if view is not None else TextView()
        self.mode = NavigationMode.OFF
        self.history = History()
        self.links = LinkSelector()
        self.bar_label = ""
        self.bar_text = ""
        # Held while a reflow job renders; only one job per tab at once.
        self._reflow_lock = threading.Lock()
        # Guards the latest requested width and the running flag.
        self._reflow_state = threading.Lock()
        self._reflow_width = 0
        self._reflow_running = False

    def has_content(self) -> bool:
        """Return whether the tab shows a real page rather than a placeholder."""
        document = self.document
        if document is None or self.view is None:
            return False
        if not document.url or document.is_placeholder():
            return False
        return bool(document.content)

    def add_to_history(self, url: str) -> None:
        """Record a visit to ``url`` in this tab's history."""
        self.history.push(url)

    # ------------------------------------------------------------------
    # Scroll bookkeeping
    # ------------------------------------------------------------------
    def save_scroll(self) -> None:
        """Copy the live viewport offset into the document.

        Call before leaving a document; the cache shares the object, so the
        position is there on the next visit.
        """
        row, column = self.view.get_scroll_offset()
        self.document.row = row
        self.document.column = column

    def apply_scroll(self) -> None:
        """Restore the document's stored offset; only for back/forward revisits."""
        self.view.scroll_to(self.document.row, self.document.column)

    def page_step(self, term_height: int, percent: int = 75) -> int:
        """Return the rows moved by one page: ``percent`` of the height, rounded down."""
        return max(0, term_height) * percent // 100

    def page_up(self, term_height: int, percent: int = 75) -> None:
        """Scroll up one page step; the viewport clamps at the top."""
        row, column = self.view.get_scroll_offset()
        self.view.scroll_to(row - self.page_step(term_height, percent), column)

    def page_down(self, term_height: int, percent: int = 75) -> None:
        """Scroll down one page step."""
        row, column = self.view.get_scroll_offset()
        self.view.scroll_to(row + self.page_step(term_height, percent), column)

    # ------------------------------------------------------------------
    # Status bar snapshot
    # ------------------------------------------------------------------
    def save_bottom_bar(self, bar: StatusBar) -> None:
        """Snapshot the shared bar into this tab."""
        self.bar_label = bar.get_label()
        self.bar_text = bar.get_text()

    def apply_bottom_bar(self, bar: StatusBar) -> None:
        """Write this tab's bar snapshot back to the shared bar."""
        bar.set_label(self.bar_label)
        bar.set_text(self.bar_text)

    # ------------------------------------------------------------------
    # Documents and link selection
    # ------------------------------------------------------------------
    def set_document(self, document: Document, *, restore_scroll: bool = False) -> None:
        """Display ``document``, either at its stored offset or at the top."""
        self.links.reset()
        self.mode = NavigationMode.OFF
        self.document = document
        self.view.highlight()
        if restore_scroll:
            self.apply_scroll()
        else:
            self.view.scroll_to(0, 0)
        self.view.request_draw()

    def _set_mode(self, mode: NavigationMode) -> None:
        self.mode = mode
        self.document.mode = mode

    def _apply_transition(
        self,
        transition: LinkTransition,
        bar: StatusBar,
        follow: FollowLink | None,
    ) -> None:
        document = self.document
        action = transition.action
        if action is LinkAction.HIGHLIGHT:
            index = transition.index or 0
            target = document.links[index]
            self.view.highlight(str(index))
            self.view.scroll_to_highlight()
            bar.set_label(LINK_LABEL)
            bar.set_text(target)
            document.selected = target
            document.selected_id = str(index)
            self._set_mode(NavigationMode.LINK_SELECT)
        elif action is LinkAction.CLEAR:
            self.view.highlight()
            bar.set_label("")
            bar.set_text(document.url)
            document.selected = ""
            document.selected_id = ""
            self._set_mode(NavigationMode.OFF)
        elif action is LinkAction.FOLLOW:
            index = transition.index or 0
            bar.set_label("")
            self._set_mode(NavigationMode.OFF)
            if follow is not None:
                follow(document.url, document.links[index])

    def handle_key(
        self,
        key: str | LinkKey,
        bar: StatusBar,
        follow: FollowLink | None = None,
    ) -> LinkTransition:
        """Feed one key to the link selector and apply the resulting effects.

        The bar snapshot is refreshed afterwards even if ``follow`` raises.
        """
        try:
            transition = self.links.handle(key, len(self.document.links))
            self._apply_transition(transition, bar, follow)
            return transition
        finally:
            self.save_bottom_bar(bar)

    def resume_link_select(self, bar: StatusBar) -> LinkTransition:
        """Re-highlight the link stored on a document left in link-select mode."""
        document = self.document
        if document.mode is not NavigationMode.LINK_SELECT or not document.selected_id:
            return LinkTransition(LinkAction.NONE)
        transition = self.links.resume(document.selected_id, len(document.links))
        if transition.action is LinkAction.NONE:
            self._set_mode(NavigationMode.OFF)
        else:
            self._apply_transition(transition, bar, None)
        self.save_bottom_bar(bar)
        return transition

    # ------------------------------------------------------------------
    # Reflow
    # ------------------------------------------------------------------
    @property
    def reflowing(self) -> bool:
        """Return whether a reflow job is running for this tab."""
        with self._reflow_state:
            return self._reflow_running

    def reflow(self, width: int, renderer: Renderer) -> bool:
        """Re-render the current document for ``width`` if it was laid out for another.

        A call made while another reflow runs only records ``width``; the
        running job picks up the newest width before it stops, drops any
        result rendered for a superseded width and renders again. Returns
        ``True`` when this call applied new content.
        """
        with self._reflow_state:
            self._reflow_width = width
            if self._reflow_running:
                logger.debug("Reflow to width %d deferred to running job", width)
                return False
            self._reflow_running = True

        applied = False
        try:
            with self._reflow_lock:
                while True:
                    with self._reflow_state:
                        target = self._reflow_width
                        document = self.document
                        if not self.has_content() or not document.needs_reflow(target):
                            self._reflow_running = False
                            return applied

                    result = renderer(document, target)
                    with self._reflow_state:
                        if self.document is not document:
                            logger.debug("Discarding reflow of %s: document replaced", document.url)
                            continue
                        if self._reflow_width != target:
                            logger.debug("Discarding reflow of %s at width %d: superseded", document.url, target)
                            continue
                        document.content = result.content
                        document.max_pre_cols = result.max_pre_cols
                        document.term_width = target
                    self.view.request_draw()
                    applied = True
        except BaseException:
            with self._reflow_state:
                self._reflow_running = False
            raise


__all__ = ["FollowLink", "LINK_LABEL", "Tab"]
