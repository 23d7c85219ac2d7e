"""Utility modules for markrun.

Provides:
- logger: get_logger for logging
"""

from markrun.utils.logger import get_logger

__all__ = ["get_logger"]
