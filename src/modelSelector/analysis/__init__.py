"""
Companion analyses for modelSelector.
"""

from .pca import NutrientPCA, PCAResult

__all__ = [
    "NutrientPCA",
    "PCAResult",
]
