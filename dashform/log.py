"""
Dashform Log Module

Console logging setup for the dashform logger hierarchy.

Modules log through ``logging.getLogger(__name__)``; this module only
decides where those records go.
"""

import logging
import sys
from typing import Any


_logger = logging.getLogger("dashform")


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """
    Attach a console handler to the dashform logger.

    Safe to call more than once; the handler is only installed the first time.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR) or logging constant

    Returns:
        The configured "dashform" logger
    """
    if not _logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - [dashform] %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        _logger.addHandler(handler)
    set_level(level)
    return _logger


def set_level(level: str | int):
    """
    Set log level.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR) or logging constant
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    _logger.setLevel(level)


def format_metadata(metadata: dict[str, Any] | None) -> str:
    """Format metadata as a " [k=v, ...]" log suffix."""
    if not metadata:
        return ""
    parts = [f"{k}={v}" for k, v in metadata.items()]
    return f" [{', '.join(parts)}]"
