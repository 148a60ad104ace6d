"""
Model implementations for modelSelector.
"""

from .logistic_regression import LogisticRegressionClassifier

__all__ = [
    "LogisticRegressionClassifier",
]
