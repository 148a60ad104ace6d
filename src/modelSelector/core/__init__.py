"""
Core functionality for modelSelector.

This module contains the fold partitioner, the fit-and-score engine, the
cross-validation orchestrator, the AICc ranker and the final model selector.
"""

from .exceptions import ModelSelectorError, FittingError
from .base import ModelSpecification, Dataset, CVConfig, BaseModel, BaseEvaluator
from .fold_partitioner import FoldAssignment, assign_folds
from .engine import FittedClassifier, fit, predict, score
from .cross_validation import CrossValidator, CrossValidationResult, cross_validate
from .ranker import aicc, rank, ranking_table
from .final_model_selector import FinalModel, FinalModelSelector, select_and_finalize

__all__ = [
    "ModelSelectorError",
    "FittingError",
    "ModelSpecification",
    "Dataset",
    "CVConfig",
    "BaseModel",
    "BaseEvaluator",
    "FoldAssignment",
    "assign_folds",
    "FittedClassifier",
    "fit",
    "predict",
    "score",
    "CrossValidator",
    "CrossValidationResult",
    "cross_validate",
    "aicc",
    "rank",
    "ranking_table",
    "FinalModel",
    "FinalModelSelector",
    "select_and_finalize",
]
