"""
simpledb/utils/logger.py
------------------------
Centralized logging configuration.
All modules should use `get_logger(__name__)` to obtain a logger instance.

Records go to the host application's handlers through the ``simpledb``
logger. Set ``LOG_STDOUT=1`` to also print them to stdout in the format below.
"""

import logging
import sys

from simpledb.config import LOG_LEVEL, LOG_STDOUT

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_PACKAGE_LOGGER = "simpledb"
_initialized = False


def _build_handler(to_stdout: bool) -> logging.Handler:
    """Stdout handler when enabled, otherwise a NullHandler."""
    if not to_stdout:
        return logging.NullHandler()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    return handler


def _init_logging() -> None:
    """Configure the package logger once."""
    global _initialized
    if _initialized:
        return
    package = logging.getLogger(_PACKAGE_LOGGER)
    package.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    package.addHandler(_build_handler(LOG_STDOUT))
    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A configured logging.Logger.
    """
    _init_logging()
    return logging.getLogger(name)
