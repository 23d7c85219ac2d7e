"""Minimal logging utilities for markrun.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from markrun.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Rendering document")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "markrun." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'markrun.mymodule'
    """
    if not (name == "markrun" or name.startswith("markrun.")):
        name = f"markrun.{name}"
    return logging.getLogger(name)
