"""Logging helpers for the pdf2array package."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Iterator, Union

PACKAGE_LOGGER = "pdf2array"
LOG_LEVEL_ENV = "PDF2ARRAY_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger that lives under the package logger."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING")
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        return resolved
    return int(level)


def configure_logging(level: Union[int, str, None] = None) -> logging.Logger:
    """Attach a stream handler to the package logger.

    When ``level`` is None the level is read from ``PDF2ARRAY_LOG_LEVEL``
    and defaults to WARNING. Calling this more than once only updates the
    level.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(_resolve_level(level))

    if not any(getattr(h, "_pdf2array", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._pdf2array = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger


@contextmanager
def verbose_logging(enabled: bool) -> Iterator[None]:
    """Temporarily switch the package logger to DEBUG."""
    if not enabled:
        yield
        return

    logger = logging.getLogger(PACKAGE_LOGGER)
    previous = logger.level
    logger.setLevel(logging.DEBUG)
    try:
        yield
    finally:
        logger.setLevel(previous)


__all__ = ["configure_logging", "get_logger", "verbose_logging"]
