"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens,
then narrows those tokens to the small alphabet link selection understands.
"""

from __future__ import annotations

import os
import select
from enum import Enum

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []


class LinkKey(Enum):
    """Keys the link selector reacts to; everything else is ``OTHER``."""

    ENTER = "enter"
    ESC = "esc"
    TAB = "tab"
    BACKTAB = "backtab"
    OTHER = "other"


_LINK_KEYS = {
    "ENTER": LinkKey.ENTER,
    "ENTER_CR": LinkKey.ENTER,
    "ENTER_LF": LinkKey.ENTER,
    "ESC": LinkKey.ESC,
    "TAB": LinkKey.TAB,
    "SHIFT_TAB": LinkKey.BACKTAB,
}


def link_key(token: str | LinkKey) -> LinkKey:
    """Map a key token from ``read_key`` onto the link-selection alphabet."""
    if isinstance(token, LinkKey):
        return token
    return _LINK_KEYS.get(token, LinkKey.OTHER)


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key from ``fd`` and return its token name or character."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch == b"\t":
        return "TAB"
    if ch in {b"\x08", b"\x7f"}:
        return "BACKSPACE"
    if ch == b"\r":
        return "ENTER_CR"
    if ch == b"\n":
        return "ENTER_LF"

    if ch != b"\x1b":
        return ch.decode("utf-8", errors="replace")

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq != b"[":
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"A":
        return "UP"
    if seq == b"B":
        return "DOWN"
    if seq == b"C":
        return "RIGHT"
    if seq == b"D":
        return "LEFT"
    if seq == b"Z":
        return "SHIFT_TAB"
    if seq == b"5" or seq == b"6":
        if _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS) != b"~":
            return "ESC"
        return "PAGE_UP" if seq == b"5" else "PAGE_DOWN"
    return "ESC"


__all__ = ["ESC_SEQUENCE_TIMEOUT_MS", "LinkKey", "link_key", "read_key"]
