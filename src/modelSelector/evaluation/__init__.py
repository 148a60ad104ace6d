"""
Evaluation modules for modelSelector.

This module contains evaluation metrics, visualization, and reporting utilities.
"""

from .metrics import MetricsCalculator
from .visualizer import ResultsVisualizer
from .reporter import ResultsReporter

__all__ = [
    "MetricsCalculator",
    "ResultsVisualizer",
    "ResultsReporter",
]
