"""Logging configuration for the ``budget_tracker`` package.

The app lifespan calls ``configure_logging()`` with the ``LOG_LEVEL`` and
``LOG_FORMAT`` settings. It owns exactly one ``StreamHandler`` on the package
logger; calling it again re-targets that handler rather than stacking a new
one. Modules only ever call ``get_logger("budget_tracker.<module>")``.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

from .core.config import settings

_PKG_LOGGER_NAME = "budget_tracker"
_HANDLER_NAME = "budget_tracker.stream"


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    return logging.INFO


def _own_handler(logger: logging.Logger) -> logging.StreamHandler | None:
    for h in logger.handlers:
        if h.get_name() == _HANDLER_NAME:
            return h  # type: ignore[return-value]
    return None


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Point the package logger at ``stream`` (stderr by default).

    ``level`` and ``fmt`` default to the ``LOG_LEVEL``/``LOG_FORMAT``
    settings; an unrecognised level name falls back to ``INFO``.
    """
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    numeric = _parse_level(level if level is not None else settings.LOG_LEVEL)

    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = _own_handler(logger)
    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.set_name(_HANDLER_NAME)
        logger.addHandler(handler)
    elif stream is not None:
        handler.setStream(stream)

    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter(fmt or settings.LOG_FORMAT))
    logger.setLevel(numeric)
    # uvicorn configures the root logger too
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name, silent until ``configure_logging`` runs."""
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
