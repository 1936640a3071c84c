"""Minimal logging utilities for clex.

Provides a get_logger function that wraps the standard library logging.

Example:
    >>> from clex.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("matched %d spans", 12)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the "clex." namespace.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("mymodule").name
        'clex.mymodule'
    """
    if not (name == "clex" or name.startswith("clex.")):
        name = f"clex.{name}"
    return logging.getLogger(name)
