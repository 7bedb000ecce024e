"""
Centralized logging configuration.
All modules should use `get_logger(__name__)` to obtain a logger instance;
the application calls `configure_logging(settings)` once at start-up.
"""

import logging
import sys
from typing import Optional

from components.core.config import Settings

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_handler: Optional[logging.Handler] = None


def configure_logging(settings: Settings) -> None:
    """Install the stdout handler once and apply ``settings.LOG_LEVEL`` to the root logger."""
    global _handler
    root = logging.getLogger()
    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
        root.addHandler(_handler)
    root.setLevel(settings.LOG_LEVEL.upper())


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A logging.Logger that writes through the root configuration.
    """
    return logging.getLogger(name)
