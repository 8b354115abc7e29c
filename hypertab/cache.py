"""URL-keyed store of shared ``Document`` objects.

The cache keeps the very objects tabs display, so scroll and selection
changes made through a tab are what the cache hands back on revisit. It
tracks size and staleness only; deciding what to evict is left to callers.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .document import Document

logger = logging.getLogger(__name__)


class DocumentCache:
    def __init__(self, timeout: float = 0) -> None:
        """Create an empty cache; ``timeout`` seconds marks documents stale."""
        self.timeout = timeout
        self._documents: dict[str, Document] = {}

    def __len__(self) -> int:
        """Return the number of cached documents."""
        return len(self._documents)

    def __contains__(self, url: object) -> bool:
        """Return whether a document is cached under ``url``."""
        return url in self._documents

    def __iter__(self) -> Iterator[Document]:
        """Iterate over a snapshot of the cached documents."""
        return iter(list(self._documents.values()))

    def add(self, document: Document) -> None:
        """Store ``document`` under its URL, replacing any previous entry.

        Documents without a URL or with a placeholder URL are not cached.
        ``made_at`` is left as given; an unset timestamp never goes stale.
        """
        if not document.url or document.is_placeholder():
            return
        self._documents[document.url] = document
        logger.debug("Cached %s (%d chars)", document.url, document.size())

    def get(self, url: str, now: float | None = None) -> Document | None:
        """Return the shared document for ``url`` unless missing or stale."""
        document = self._documents.get(url)
        if document is None:
            return None
        if self.is_stale(document, now):
            logger.debug("Cached %s is stale", url)
            return None
        return document

    def remove(self, url: str) -> Document | None:
        """Drop and return the entry for ``url``, if any."""
        return self._documents.pop(url, None)

    def clear(self) -> None:
        """Drop every entry."""
        self._documents.clear()

    def size(self) -> int:
        """Return the summed approximate size of every cached document."""
        return sum(document.size() for document in self._documents.values())

    def is_stale(self, document: Document, now: float | None = None) -> bool:
        """Return whether ``document`` is older than the cache timeout."""
        return document.is_stale(self.timeout, now)


__all__ = ["DocumentCache"]
