"""Utility modules for printbuf.

Provides:
- logger: get_logger and set_log_level for the package logger
"""

from printbuf.utils.logger import get_logger, set_log_level

__all__ = [
    "get_logger",
    "set_log_level",
]
