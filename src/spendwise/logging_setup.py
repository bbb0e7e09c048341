"""Logging configuration for spendwise.

``configure_logging`` is called once by the CLI and attaches a single
``StreamHandler`` to the ``spendwise`` package logger. Library modules only
call ``get_logger(__name__)`` and never attach handlers themselves.
"""

import logging
import os
import sys
from typing import IO

PACKAGE_LOGGER = "spendwise"
LOG_LEVEL_ENV = "SPENDWISE_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_configured = False


def parse_level(level: int | str | None, default: int = logging.INFO) -> int:
    """Resolve a level given as int, name or numeric string.

    Falls back to the SPENDWISE_LOG_LEVEL environment variable when ``level``
    is None, and to ``default`` when neither is usable.
    """
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
        return default

    env_val = os.getenv(LOG_LEVEL_ENV)
    if env_val:
        return parse_level(env_val, default)
    return default


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
    default: int = logging.INFO,
) -> None:
    """Attach a stream handler to the package logger (only the first call counts)."""
    global _configured
    if _configured:
        return

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    resolved = parse_level(level, default)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _configured = True


def reset_logging() -> None:
    """Remove configured handlers (mainly for testing)."""
    global _configured
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    _configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger, keeping the package quiet until logging is configured."""
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    if not _configured and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
