"""Command-line front door for hypertab settings.

Shows and updates the persisted session settings: page-scroll percentage
and document cache timeout.
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import config
from .log import setup_logging

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _nonnegative_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    """Build the ``hypertab`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="hypertab",
        description="Show or change hypertab session settings.",
    )
    parser.add_argument(
        "--page-scroll-percent",
        type=_positive_int,
        default=None,
        help="Share of the terminal height moved by page up/down (1-100).",
    )
    parser.add_argument(
        "--cache-timeout",
        type=_nonnegative_int,
        default=None,
        help="Seconds before a cached document is refetched (0 keeps it forever).",
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug output to the hypertab log file.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Apply any requested setting changes, then print the effective settings."""
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    if args.page_scroll_percent is not None:
        if args.page_scroll_percent > 100:
            raise SystemExit("--page-scroll-percent must be between 1 and 100")
        config.save_page_scroll_percent(args.page_scroll_percent)
        logger.info("page_scroll_percent set to %d", args.page_scroll_percent)
    if args.cache_timeout is not None:
        config.save_cache_timeout(args.cache_timeout)
        logger.info("cache_timeout set to %d", args.cache_timeout)

    sys.stdout.write(f"config: {config.CONFIG_PATH}\n")
    sys.stdout.write(f"page_scroll_percent: {config.load_page_scroll_percent()}\n")
    sys.stdout.write(f"cache_timeout: {config.load_cache_timeout()}\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
