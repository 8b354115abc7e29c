"""Browser session: the tab collection and everything tabs share.

``Session`` owns the tabs, the active index, the single status bar, the
terminal size, the document cache and the navigator used to load links.
Front ends route key events and navigation results through it, so tab
switches and history moves always save and restore state in the same order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from . import config
from .cache import DocumentCache
from .document import Document
from .keys import LinkKey
from .link_select import LinkAction, LinkTransition
from .tab import Tab
from .view import BottomBar, Navigator, Renderer, StatusBar, TextView, Viewport

logger = logging.getLogger(__name__)

_NO_TRANSITION = LinkTransition(LinkAction.NONE)


class Session:
    def __init__(
        self,
        navigator: Navigator | None = None,
        *,
        bar: StatusBar | None = None,
        cache: DocumentCache | None = None,
        renderer: Renderer | None = None,
        view_factory: Callable[[], Viewport] = TextView,
        term_width: int = 80,
        term_height: int = 24,
        page_scroll_percent: int | None = None,
    ) -> None:
        """Create a session with no tabs.

        ``cache`` and ``page_scroll_percent`` default to values from the
        persisted config. ``renderer`` is optional; without it documents are
        never reflowed on resize.
        """
        self.navigator = navigator
        self.bar: StatusBar = bar if bar is not None else BottomBar()
        self.cache = cache if cache is not None else DocumentCache(timeout=config.load_cache_timeout())
        self.renderer = renderer
        self._view_factory = view_factory
        self.term_width = term_width
        self.term_height = term_height
        if page_scroll_percent is None:
            page_scroll_percent = config.load_page_scroll_percent()
        self.page_scroll_percent = page_scroll_percent
        self.tabs: list[Tab] = []
        self.current = -1
        # Tabs reloading a history entry: tab -> (url, cursor steps since the last shown document).
        self._history_reloads: dict[Tab, tuple[str, int]] = {}

    def __len__(self) -> int:
        """Return the number of open tabs."""
        return len(self.tabs)

    @property
    def active_tab(self) -> Tab | None:
        """Return the focused tab, or ``None`` when no tab is open."""
        if not 0 <= self.current < len(self.tabs):
            return None
        return self.tabs[self.current]

    # ------------------------------------------------------------------
    # Tab lifecycle
    # ------------------------------------------------------------------
    def _tab_at(self, index: int) -> Tab:
        """Return tab ``index``; negative indexes are rejected, not wrapped."""
        if not 0 <= index < len(self.tabs):
            raise IndexError(f"tab index out of range: {index}")
        return self.tabs[index]

    def _leave_active(self) -> None:
        """Save scroll and bar state of the tab losing focus."""
        tab = self.active_tab
        if tab is None:
            return
        if tab.has_content():
            tab.save_scroll()
        tab.save_bottom_bar(self.bar)

    def _enter_active(self) -> None:
        """Restore bar and scroll state of the tab gaining focus."""
        tab = self.active_tab
        if tab is None:
            self.bar.set_label("")
            self.bar.set_text("")
            return
        if tab.has_content():
            self.reflow_active()
            tab.apply_scroll()
        tab.apply_bottom_bar(self.bar)

    def new_tab(self, document: Document | None = None) -> int:
        """Open a tab, make it active and return its index.

        ``document`` is usually a placeholder page such as ``about:newtab``.
        """
        self._leave_active()
        tab = Tab(self._view_factory())
        if document is not None:
            tab.set_document(document)
        tab.bar_text = tab.document.url
        self.tabs.append(tab)
        self.current = len(self.tabs) - 1
        self._enter_active()
        logger.debug("Opened tab %d", self.current)
        return self.current

    def close_tab(self, index: int) -> Tab:
        """Close the tab at ``index``; focus moves to its right neighbour if it was active."""
        tab = self._tab_at(index)
        was_active = index == self.current
        del self.tabs[index]
        self._history_reloads.pop(tab, None)
        if index < self.current:
            self.current -= 1
        elif was_active:
            self.current = min(index, len(self.tabs) - 1)
            self._enter_active()
        logger.debug("Closed tab %d", index)
        return tab

    def switch_tab(self, index: int) -> Tab:
        """Make tab ``index`` active, saving the outgoing tab first."""
        tab = self._tab_at(index)
        if index == self.current:
            return tab
        self._leave_active()
        self.current = index
        self._enter_active()
        return tab

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def handle_key(self, key: str | LinkKey) -> LinkTransition:
        """Route one key event to the active tab."""
        tab = self.active_tab
        if tab is None:
            return _NO_TRANSITION
        if not tab.links.active and key in ("PAGE_UP", "PAGE_DOWN"):
            if key == "PAGE_UP":
                self.page_up()
            else:
                self.page_down()
            return _NO_TRANSITION
        tab_index = self.current

        def follow(base_url: str, link: str) -> None:
            self.follow_link(tab_index, base_url, link)

        return tab.handle_key(key, self.bar, follow)

    def page_up(self) -> None:
        """Scroll the active tab up by the configured page step."""
        tab = self.active_tab
        if tab is not None:
            tab.page_up(self.term_height, self.page_scroll_percent)

    def page_down(self) -> None:
        """Scroll the active tab down by the configured page step."""
        tab = self.active_tab
        if tab is not None:
            tab.page_down(self.term_height, self.page_scroll_percent)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def follow_link(self, tab_index: int, base_url: str, link: str) -> None:
        """Ask the navigator to load ``link`` relative to ``base_url`` in a tab."""
        tab = self._tab_at(tab_index)
        if tab.has_content():
            tab.save_scroll()
        if self.navigator is None:
            logger.warning("No navigator attached; dropping link %s", link)
            return
        logger.debug("Tab %d following %s from %s", tab_index, link, base_url)
        self.navigator.follow_link(tab_index, base_url, link)

    def load_document(self, tab_index: int, document: Document, *, from_history: bool = False) -> Tab:
        """Adopt a navigation result as the current document of a tab.

        Fresh navigations are pushed onto the tab history and start at the
        top. ``from_history`` results keep the history cursor and restore the
        stored scroll offset and link selection.
        """
        tab = self._tab_at(tab_index)
        pending = self._history_reloads.pop(tab, None)
        if pending is not None and pending[0] == document.url:
            from_history = True
        if tab.has_content() and tab.document is not document:
            tab.save_scroll()
        if not from_history and document.url and not document.is_placeholder():
            tab.add_to_history(document.url)
        tab.set_document(document, restore_scroll=from_history)
        self.cache.add(document)
        if self.renderer is not None:
            tab.reflow(self.term_width, self.renderer)

        if tab_index == self.current:
            self.bar.set_label("")
            self.bar.set_text(document.url)
            tab.save_bottom_bar(self.bar)
            if from_history:
                tab.resume_link_select(self.bar)
        else:
            tab.bar_label = ""
            tab.bar_text = document.url
        logger.debug("Tab %d displaying %s", tab_index, document.url)
        return tab

    def navigation_failed(self, tab_index: int, url: str, reason: str = "") -> None:
        """Keep showing the previous document after a failed load.

        A failed history reload of ``url`` moves the cursor back to where the
        move started; failures for other URLs leave a pending reload alone.
        """
        tab = self._tab_at(tab_index)
        logger.warning("Loading %s in tab %d failed: %s", url, tab_index, reason or "unknown error")
        pending = self._history_reloads.get(tab)
        if pending is not None and pending[0] == url:
            del self._history_reloads[tab]
            tab.history.pos -= pending[1]
        if tab_index == self.current:
            self.bar.set_label("")
            self.bar.set_text(tab.document.url)
            tab.save_bottom_bar(self.bar)
        else:
            tab.bar_label = ""
            tab.bar_text = tab.document.url

    def go_back(self) -> bool:
        """Show the previous history entry; ``False`` when there is none."""
        return self._history_step(-1)

    def go_forward(self) -> bool:
        """Show the next history entry; ``False`` when there is none."""
        return self._history_step(1)

    def _history_step(self, step: int) -> bool:
        tab = self.active_tab
        if tab is None:
            return False
        history = tab.history
        if tab.has_content():
            tab.save_scroll()
        url = history.back() if step < 0 else history.forward()
        if url is None:
            logger.debug("No history available in tab %d", self.current)
            return False

        document = self.cache.get(url)
        if document is not None:
            self.load_document(self.current, document, from_history=True)
            return True
        # Not cached, or stale: fetch again without touching history.
        if self.navigator is None:
            logger.warning("No navigator attached; cannot reload %s", url)
            history.pos -= step
            return False
        # Steps taken while a reload is in flight accumulate.
        pending = self._history_reloads.get(tab)
        if pending is not None:
            step += pending[1]
        self._history_reloads[tab] = (url, step)
        self.navigator.follow_link(self.current, url, url)
        return True

    # ------------------------------------------------------------------
    # Terminal size
    # ------------------------------------------------------------------
    def resize(self, width: int, height: int) -> bool:
        """Record a new terminal size and reflow the active tab if needed."""
        self.term_width = width
        self.term_height = height
        return self.reflow_active()

    def reflow_active(self, renderer: Renderer | None = None) -> bool:
        """Reflow the active tab for the current width; ``False`` when nothing was applied."""
        tab = self.active_tab
        renderer = renderer if renderer is not None else self.renderer
        if tab is None or renderer is None:
            return False
        return tab.reflow(self.term_width, renderer)


__all__ = ["Session"]
