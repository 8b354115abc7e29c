"""Logging setup for hypertab sessions.

The terminal belongs to the UI, so records go to a rotating file under the
platform log directory instead of the console.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FILENAME = "hypertab.log"
_LOG_PATH: Path | None = None


def setup_logging(
    level: int = logging.INFO,
    *,
    log_dir: Path | str | None = None,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
    force: bool = False,
) -> Path | None:
    """Attach a rotating file handler to the ``hypertab`` logger.

    Returns the log path, or ``None`` when the directory cannot be created;
    logging problems never stop a session.
    """
    global _LOG_PATH
    if _LOG_PATH is not None and not force:
        return _LOG_PATH

    target_dir = Path(log_dir) if log_dir is not None else Path(user_log_dir(APP_NAME, appauthor=False))
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            target_dir / LOG_FILENAME,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
    except OSError:
        return None

    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger = logging.getLogger(APP_NAME)
    if force:
        for existing in list(logger.handlers):
            logger.removeHandler(existing)
            existing.close()
    logger.addHandler(handler)
    logger.setLevel(level)
    _LOG_PATH = target_dir / LOG_FILENAME
    return _LOG_PATH


__all__ = ["LOG_FILENAME", "setup_logging"]
