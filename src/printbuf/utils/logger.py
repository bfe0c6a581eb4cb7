"""Logging helpers for printbuf.

Every module logs through ``get_logger(__name__)``, so all records land
under the ``printbuf`` logger. Growth and failure details go to DEBUG;
misuse that the buffer recovers from (unbalanced indent or atomic
counters, tabs past the last tabstop) goes to WARNING.

The package logger carries a NullHandler, so an application that never
configures logging does not get warnings printed to stderr.

Example:
    >>> from printbuf.utils.logger import get_logger, set_log_level
    >>> set_log_level("DEBUG")
    >>> get_logger(__name__).debug("grew buffer %d -> %d bytes", 0, 16)
"""

from __future__ import annotations

import logging

PACKAGE_LOGGER = "printbuf"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``printbuf``.

    Names outside the package are prefixed: ``"mymodule"`` becomes
    ``"printbuf.mymodule"``.
    """
    if not (name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + ".")):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def set_log_level(level: int | str) -> None:
    """Set the level of the package logger only; the root logger is untouched.

    Args:
        level: A logging level number or name ("DEBUG", "warning", ...)

    Raises:
        ValueError: unknown level name
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"unknown log level: {level!r}")
        level = resolved
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
