"""
##################################
Logging (:mod:`rootest.logconfig`)
##################################

.. currentmodule:: rootest.logconfig

This module provides helper functions to configure logging for the library.

By default, rootest is silent (a :class:`logging.NullHandler` is attached to the
``rootest`` logger). Estimators report the outcome of every estimation at the
``DEBUG`` level.

.. autosummary::
    :toctree: generated/

    configure_from_env
    disable_logging
    enable_console_logging
    set_level

"""

import logging
import os
from typing import Literal

LOGGER_NAME = "rootest"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

type LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _get_level(level: str | int) -> int:
    if isinstance(level, int):
        return level

    return getattr(logging, level.upper(), logging.INFO)


def _get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def _clear_handlers() -> None:
    logger = _get_logger()

    for handler in logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()


def enable_console_logging(
    level: LogLevel | int = "INFO",
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> logging.StreamHandler:
    """Enable console (stderr) logging.

    Parameters
    ----------
    level : Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | int
    format : str
        Log message format string.
    date_format : str
        Date format string for ``%(asctime)s``.

    Returns
    -------
    logging.StreamHandler
    """
    logger = _get_logger()
    logger.setLevel(_get_level(level))

    handler = logging.StreamHandler()
    handler.setLevel(_get_level(level))
    handler.setFormatter(logging.Formatter(format, date_format))

    logger.addHandler(handler)
    return handler


def set_level(level: LogLevel | int) -> None:
    """Set the level of the ``rootest`` logger and of all its handlers."""
    logger = _get_logger()
    logger.setLevel(_get_level(level))

    for handler in logger.handlers:
        handler.setLevel(_get_level(level))


def disable_logging() -> None:
    """Remove all handlers but the null handler."""
    _clear_handlers()
    _get_logger().setLevel(logging.WARNING)


def configure_from_env() -> None:
    """Configure logging from the ``ROOTEST_LOGGING`` environment variable.

    If the variable holds a level name, console logging is enabled at that level;
    otherwise, nothing happens.
    """
    level = os.environ.get("ROOTEST_LOGGING", "").upper()

    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        return

    _clear_handlers()
    enable_console_logging(level)
