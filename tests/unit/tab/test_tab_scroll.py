"""Tests for tab scroll, paging, status-bar snapshots and content gating.

Scroll offsets live on the shared document so revisits resume in place.
The status bar is shared by all tabs, so each tab keeps its own snapshot.
"""

from __future__ import annotations

import unittest

from hypertab.cache import DocumentCache
from hypertab.document import Document
from hypertab.tab import Tab
from hypertab.view import BottomBar, TextView


def _page(url: str = "gemini://example.org/", content: str = "body\n") -> Document:
    return Document(url=url, content=content, raw=content)


class TabScrollTests(unittest.TestCase):
    def test_save_then_apply_restores_exact_offset(self) -> None:
        tab = Tab(TextView())
        tab.set_document(_page())
        tab.view.scroll_to(17, 4)
        tab.save_scroll()

        tab.document.selected = "unrelated"
        tab.view.scroll_to(0, 0)
        tab.apply_scroll()

        self.assertEqual(tab.view.get_scroll_offset(), (17, 4))

    def test_saved_scroll_is_visible_through_cache(self) -> None:
        cache = DocumentCache()
        document = _page()
        cache.add(document)
        tab = Tab()
        tab.set_document(document)
        tab.view.scroll_to(9, 2)

        tab.save_scroll()

        cached = cache.get(document.url)
        self.assertEqual((cached.row, cached.column), (9, 2))

    def test_set_document_starts_fresh_page_at_top(self) -> None:
        tab = Tab()
        tab.view.scroll_to(30, 5)
        tab.set_document(_page(), restore_scroll=False)
        self.assertEqual(tab.view.get_scroll_offset(), (0, 0))

    def test_set_document_can_restore_stored_offset(self) -> None:
        tab = Tab()
        document = _page()
        document.row = 12
        document.column = 1
        tab.set_document(document, restore_scroll=True)
        self.assertEqual(tab.view.get_scroll_offset(), (12, 1))

    def test_page_down_moves_three_quarters_of_height(self) -> None:
        tab = Tab()
        tab.set_document(_page())
        tab.view.scroll_to(5, 3)
        tab.page_down(40)
        self.assertEqual(tab.view.get_scroll_offset(), (35, 3))

    def test_page_up_rounds_step_down_and_keeps_column(self) -> None:
        tab = Tab()
        tab.set_document(_page())
        tab.view.scroll_to(50, 2)
        tab.page_up(25)
        self.assertEqual(tab.view.get_scroll_offset(), (32, 2))

    def test_page_up_near_top_clamps_to_first_row(self) -> None:
        tab = Tab()
        tab.view.scroll_to(3, 0)
        tab.page_up(24)
        self.assertEqual(tab.view.get_scroll_offset(), (0, 0))

    def test_page_step_uses_configured_percent(self) -> None:
        tab = Tab()
        self.assertEqual(tab.page_step(40, 50), 20)
        self.assertEqual(tab.page_step(10), 7)


class TabBottomBarTests(unittest.TestCase):
    def test_bar_snapshot_round_trip(self) -> None:
        bar = BottomBar(label="Link: ", text="gemini://a/")
        tab = Tab()
        tab.save_bottom_bar(bar)

        bar.set_label("")
        bar.set_text("other tab")
        tab.apply_bottom_bar(bar)

        self.assertEqual((bar.get_label(), bar.get_text()), ("Link: ", "gemini://a/"))


class TabContentTests(unittest.TestCase):
    def test_new_tab_has_no_content(self) -> None:
        self.assertFalse(Tab().has_content())

    def test_empty_url_has_no_content(self) -> None:
        tab = Tab()
        tab.set_document(Document(url="", content="text"))
        self.assertFalse(tab.has_content())

    def test_placeholder_url_has_no_content_even_with_text(self) -> None:
        tab = Tab()
        tab.set_document(Document(url="about:newtab", content="welcome"))
        self.assertFalse(tab.has_content())

    def test_empty_content_has_no_content(self) -> None:
        tab = Tab()
        tab.set_document(Document(url="gemini://a/", content=""))
        self.assertFalse(tab.has_content())

    def test_real_page_has_content(self) -> None:
        tab = Tab()
        tab.set_document(_page())
        self.assertTrue(tab.has_content())

    def test_add_to_history_pushes_url(self) -> None:
        tab = Tab()
        tab.add_to_history("gemini://a/")
        tab.add_to_history("gemini://b/")
        self.assertEqual(tab.history.urls, ["gemini://a/", "gemini://b/"])
        self.assertEqual(tab.history.pos, 1)


if __name__ == "__main__":
    unittest.main()
