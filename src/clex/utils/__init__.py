"""Utility modules for clex.

Provides:
- logger: get_logger for namespaced logging
"""

from clex.utils.logger import get_logger

__all__ = ["get_logger"]
