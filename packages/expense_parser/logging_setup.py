"""Logging for the ``expense_parser`` package.

Parser stages log through ``get_logger(__name__)`` with ``event:name key=value``
messages and never attach handlers of their own. Until an entrypoint calls
``configure_logging()`` the package logger holds only a ``NullHandler``, so
records propagate to whatever the host application has set up (pytest's
``caplog`` included).
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

PACKAGE_LOGGER = "expense_parser"
LEVEL_ENV = "EXPENSE_PARSER_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _ParserHandler(logging.StreamHandler):
    """Stream handler installed by ``configure_logging``; found again by type."""


def resolve_level(level: int | str | None = None) -> int:
    """Turn an int, a level name or a digit string into a logging level.

    ``None`` reads ``EXPENSE_PARSER_LOG_LEVEL``. Anything unrecognized is
    ``logging.INFO``.
    """

    raw = os.getenv(LEVEL_ENV, "") if level is None else level
    if isinstance(raw, int):
        return raw
    name = raw.strip().upper()
    if name.isdigit():
        return int(name)
    return logging.getLevelNamesMapping().get(name, logging.INFO)


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str = DEFAULT_FORMAT,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Install one stderr handler on the package logger and return that logger.

    Repeated calls leave the existing handler in place.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    if any(isinstance(h, _ParserHandler) for h in logger.handlers):
        return logger

    for h in [h for h in logger.handlers if isinstance(h, logging.NullHandler)]:
        logger.removeHandler(h)

    handler = _ParserHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.setLevel(resolve_level(level))
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    package = logging.getLogger(PACKAGE_LOGGER)
    if not package.handlers:
        package.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "resolve_level"]
