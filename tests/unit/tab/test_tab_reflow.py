"""Tests for the per-tab reflow guard.

Only one reflow runs per tab; a width change arriving mid-reflow makes
the running job drop its result and render again for the newest width.
"""

from __future__ import annotations

import threading
import unittest

from hypertab.document import Document
from hypertab.tab import Tab
from hypertab.view import RenderResult


def _tab(term_width: int = 80) -> Tab:
    tab = Tab()
    tab.set_document(Document(url="gemini://a/", raw="# hi", content="old", term_width=term_width))
    return tab


class TabReflowTests(unittest.TestCase):
    def test_reflow_applies_render_for_new_width(self) -> None:
        tab = _tab()
        calls: list[int] = []

        def renderer(document: Document, width: int) -> RenderResult:
            calls.append(width)
            return RenderResult(content=f"{document.raw}@{width}", max_pre_cols=12)

        self.assertTrue(tab.reflow(100, renderer))
        self.assertEqual(calls, [100])
        self.assertEqual(tab.document.content, "# hi@100")
        self.assertEqual(tab.document.max_pre_cols, 12)
        self.assertEqual(tab.document.term_width, 100)
        self.assertFalse(tab.reflowing)

    def test_reflow_skips_when_width_matches(self) -> None:
        tab = _tab(80)
        calls: list[int] = []
        self.assertFalse(tab.reflow(80, lambda _doc, width: calls.append(width) or RenderResult("x")))
        self.assertEqual(calls, [])

    def test_reflow_skips_placeholder_pages(self) -> None:
        tab = Tab()
        tab.set_document(Document(url="about:newtab", content="welcome"))
        self.assertFalse(tab.reflow(120, lambda _doc, _width: RenderResult("never")))
        self.assertEqual(tab.document.content, "welcome")

    def test_resize_during_reflow_supersedes_stale_result(self) -> None:
        tab = _tab()
        calls: list[int] = []
        nested: list[bool] = []

        def renderer(document: Document, width: int) -> RenderResult:
            calls.append(width)
            if width == 100:
                self.assertTrue(tab.reflowing)
                nested.append(tab.reflow(120, renderer))
            return RenderResult(content=f"w{width}")

        self.assertTrue(tab.reflow(100, renderer))

        self.assertEqual(nested, [False])
        self.assertEqual(calls, [100, 120])
        self.assertEqual(tab.document.content, "w120")
        self.assertEqual(tab.document.term_width, 120)

    def test_result_dropped_when_document_replaced_mid_reflow(self) -> None:
        tab = _tab()
        replacement = Document(url="gemini://b/", content="fresh", term_width=100)

        def renderer(document: Document, width: int) -> RenderResult:
            tab.set_document(replacement)
            return RenderResult(content="late")

        self.assertFalse(tab.reflow(100, renderer))
        self.assertEqual(replacement.content, "fresh")
        self.assertFalse(tab.reflowing)

    def test_replacement_document_is_reflowed_for_latest_width(self) -> None:
        tab = _tab()
        replacement = Document(url="gemini://b/", raw="b", content="fresh", term_width=80)
        rendered: list[str] = []

        def renderer(document: Document, width: int) -> RenderResult:
            rendered.append(document.url)
            if document.url == "gemini://a/":
                tab.set_document(replacement)
            return RenderResult(content=f"{document.raw}@{width}")

        self.assertTrue(tab.reflow(100, renderer))
        self.assertEqual(rendered, ["gemini://a/", "gemini://b/"])
        self.assertEqual(replacement.content, "b@100")
        self.assertEqual(replacement.term_width, 100)

    def test_request_from_other_thread_during_final_check_is_not_lost(self) -> None:
        tab = _tab()
        document = tab.document
        original_needs_reflow = document.needs_reflow
        results: list[bool] = []
        threads: list[threading.Thread] = []

        def renderer(doc: Document, width: int) -> RenderResult:
            return RenderResult(content=f"w{width}")

        def needs_reflow(width: int) -> bool:
            answer = original_needs_reflow(width)
            if not answer and not threads:
                # The running job is about to stop; a resize lands now.
                worker = threading.Thread(target=lambda: results.append(tab.reflow(120, renderer)))
                threads.append(worker)
                worker.start()
            return answer

        document.needs_reflow = needs_reflow
        self.assertTrue(tab.reflow(100, renderer))
        threads[0].join(timeout=5)

        self.assertFalse(threads[0].is_alive())
        self.assertEqual(results, [True])
        self.assertEqual(document.content, "w120")
        self.assertEqual(document.term_width, 120)
        self.assertFalse(tab.reflowing)

    def test_request_from_other_thread_while_rendering_is_picked_up(self) -> None:
        tab = _tab()
        started = threading.Event()
        release = threading.Event()
        calls: list[int] = []

        def renderer(document: Document, width: int) -> RenderResult:
            calls.append(width)
            if width == 100:
                started.set()
                release.wait(timeout=5)
            return RenderResult(content=f"w{width}")

        worker_results: list[bool] = []
        worker = threading.Thread(target=lambda: worker_results.append(tab.reflow(100, renderer)))
        worker.start()
        self.assertTrue(started.wait(timeout=5))

        self.assertFalse(tab.reflow(120, renderer))
        release.set()
        worker.join(timeout=5)

        self.assertEqual(worker_results, [True])
        self.assertEqual(calls, [100, 120])
        self.assertEqual(tab.document.content, "w120")
        self.assertFalse(tab.reflowing)

    def test_lock_released_when_renderer_raises(self) -> None:
        tab = _tab()

        def renderer(_document: Document, _width: int) -> RenderResult:
            raise ValueError("bad markup")

        with self.assertRaises(ValueError):
            tab.reflow(100, renderer)
        self.assertFalse(tab.reflowing)
        self.assertTrue(tab.reflow(100, lambda _doc, width: RenderResult(f"ok{width}")))

    def test_reflow_requests_redraw(self) -> None:
        tab = _tab()
        before = tab.view.draw_requests
        tab.reflow(90, lambda _doc, _width: RenderResult("x"))
        self.assertEqual(tab.view.draw_requests, before + 1)


if __name__ == "__main__":
    unittest.main()
