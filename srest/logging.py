"""
SREST Logging Utilities

Every srest module logs through ``logging.getLogger(__name__)``, so all of
them hang under the "srest" package logger. Server() configures that logger
from ``config.LOG_LEVEL``; applications can also grab their own:

    from srest.logging import get_logger

    logger = get_logger("myapp", "DEBUG")
    logger.info("Application started")
"""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "srest"
DEFAULT_FORMAT = "[%(asctime)s] %(levelname)-8s | %(name)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level


def get_logger(name: str = PACKAGE_LOGGER, level: Optional[str] = None) -> logging.Logger:
    """
    Get a logger writing to stdout.

    The stdout handler is attached once per logger. ``level`` is applied on
    every call so a later Server with another config can change it.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL), or None
            to leave the current level alone

    Returns:
        Configured logging.Logger instance

    Raises:
        ValueError: ``level`` is not a known level name
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT))
        logger.addHandler(handler)

    if level is not None:
        logger.setLevel(_level(level))

    return logger


def configure_logging(config) -> logging.Logger:
    """Apply ``config.LOG_LEVEL`` to the srest package logger."""
    return get_logger(PACKAGE_LOGGER, config.LOG_LEVEL)


__all__ = [
    "get_logger",
    "configure_logging",
]
