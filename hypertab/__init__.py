"""Public package surface for hypertab.

Exports the session model types and ``main`` for programmatic CLI use.
Front ends drive everything through ``Session``.
"""

from __future__ import annotations

from .cache import DocumentCache
from .document import Document, Mediatype, NavigationMode
from .history import History
from .link_select import LinkAction, LinkSelector, LinkTransition
from .session import Session
from .tab import Tab


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "Document",
    "DocumentCache",
    "History",
    "LinkAction",
    "LinkSelector",
    "LinkTransition",
    "Mediatype",
    "NavigationMode",
    "Session",
    "Tab",
    "main",
]
