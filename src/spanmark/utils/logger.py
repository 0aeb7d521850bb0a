"""Minimal logging utilities for Spanmark.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from spanmark.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Scanning %d characters", 42)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "spanmark." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'spanmark.mymodule'
    """
    if not (name == "spanmark" or name.startswith("spanmark.")):
        name = f"spanmark.{name}"
    return logging.getLogger(name)
