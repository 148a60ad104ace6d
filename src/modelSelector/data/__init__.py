"""
Data handling modules for modelSelector.
"""

from .loader import DataLoader
from .validator import DataValidator

__all__ = [
    "DataLoader",
    "DataValidator",
]
