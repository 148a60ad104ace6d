"""
Utility modules for modelSelector.

This module contains various utility functions and classes.
"""

from .logger import get_logger, setup_logging
from .helpers import *

__all__ = [
    "get_logger",
    "setup_logging",
]
