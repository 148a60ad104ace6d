"""
modelSelector v1.0

Logistic regression model comparison by cross-validated accuracy and AICc,
with a nutrient PCA companion analysis.
"""

__version__ = "1.0.0"

# Core imports
from .core.base import (
    ModelSpecification, Dataset, Prediction, AccuracyRecord, RankingRecord,
    CVConfig, BaseModel, BaseEvaluator
)
from .core.exceptions import (
    ModelSelectorError, InvalidPartitionError, FittingError, SeparationError,
    DegenerateTrainingSetError, EmptyEvaluationSetError, InsufficientSampleSizeError,
    LoadError, ModelSelectionConflictError
)
from .core.fold_partitioner import FoldAssignment, assign_folds
from .core.engine import FittedClassifier, fit, predict, score
from .core.cross_validation import CrossValidator, CrossValidationResult, cross_validate
from .core.ranker import aicc, rank, ranking_table
from .core.final_model_selector import FinalModel, FinalModelSelector, select_and_finalize

# Data handling
from .data.loader import DataLoader
from .data.validator import DataValidator

# Models
from .models.logistic_regression import LogisticRegressionClassifier

# Analysis
from .analysis.pca import NutrientPCA, PCAResult

# Evaluation
from .evaluation.metrics import MetricsCalculator
from .evaluation.visualizer import ResultsVisualizer
from .evaluation.reporter import ResultsReporter

__all__ = [
    # Core
    "ModelSpecification",
    "Dataset",
    "Prediction",
    "AccuracyRecord",
    "RankingRecord",
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

    # Errors
    "ModelSelectorError",
    "InvalidPartitionError",
    "FittingError",
    "SeparationError",
    "DegenerateTrainingSetError",
    "EmptyEvaluationSetError",
    "InsufficientSampleSizeError",
    "LoadError",
    "ModelSelectionConflictError",

    # Data
    "DataLoader",
    "DataValidator",

    # Models
    "LogisticRegressionClassifier",

    # Analysis
    "NutrientPCA",
    "PCAResult",

    # Evaluation
    "MetricsCalculator",
    "ResultsVisualizer",
    "ResultsReporter",
]
