"""
Base classes and value types for modelSelector.

This module defines the data model shared by every component: model
specifications, datasets, predictions and the records produced by
cross-validation and information-criterion ranking.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple
import pandas as pd
import numpy as np
from dataclasses import dataclass


@dataclass(frozen=True)
class ModelSpecification:
    """A named response variable and an ordered set of predictors."""
    label: str
    response: str
    predictors: Tuple[str, ...]

    def __post_init__(self):
        predictors = tuple(self.predictors)
        object.__setattr__(self, 'predictors', predictors)

        if not self.label:
            raise ValueError("Model specification requires a label")
        if not predictors:
            raise ValueError(f"Model specification '{self.label}' has no predictors")
        if len(set(predictors)) != len(predictors):
            raise ValueError(f"Model specification '{self.label}' repeats a predictor: {predictors}")
        if self.response in predictors:
            raise ValueError(f"Response '{self.response}' cannot also be a predictor")

    @property
    def n_parameters(self) -> int:
        """Intercept plus one coefficient per predictor."""
        return len(self.predictors) + 1

    def formula(self) -> str:
        return f"{self.response} ~ {' + '.join(self.predictors)}"


@dataclass(frozen=True, eq=False)
class Dataset:
    """
    Read-only table of observations with a binary response.

    Attributes:
        frame: Observations, one row each (re-indexed 0..n-1)
        response: Name of the categorical response column
        positive_class: Response value modelled as the "success" outcome
        reference_class: The other response value
    """
    frame: pd.DataFrame
    response: str
    positive_class: Any
    reference_class: Any

    def __post_init__(self):
        if self.positive_class == self.reference_class:
            raise ValueError("Positive and reference classes must differ")
        if self.response not in self.frame.columns:
            raise ValueError(f"Response column '{self.response}' not found")

        frame = self.frame.reset_index(drop=True)
        labels = frame[self.response]
        if labels.isnull().any():
            raise ValueError(f"Response column '{self.response}' contains missing values")

        unexpected = set(labels.unique()) - {self.positive_class, self.reference_class}
        if unexpected:
            raise ValueError(
                f"Response values {sorted(map(str, unexpected))} are neither "
                f"'{self.positive_class}' nor '{self.reference_class}'"
            )
        object.__setattr__(self, 'frame', frame)

    def __len__(self) -> int:
        return len(self.frame)

    @property
    def labels(self) -> np.ndarray:
        return self.frame[self.response].to_numpy()

    @property
    def positive_mask(self) -> np.ndarray:
        return self.labels == self.positive_class

    @property
    def classes(self) -> Tuple[Any, Any]:
        return (self.positive_class, self.reference_class)

    def class_counts(self) -> Dict[Any, int]:
        positives = int(self.positive_mask.sum())
        return {self.positive_class: positives, self.reference_class: len(self) - positives}

    def design_matrix(self, spec: ModelSpecification) -> np.ndarray:
        """Predictor values for ``spec`` as a float matrix (rows in dataset order)."""
        missing = [col for col in spec.predictors if col not in self.frame.columns]
        if missing:
            raise ValueError(f"Predictors missing from dataset for '{spec.label}': {missing}")
        return self.frame[list(spec.predictors)].to_numpy(dtype=float)

    def take(self, indices: Sequence[int]) -> 'Dataset':
        """Subset of rows by position."""
        return Dataset(
            frame=self.frame.iloc[np.asarray(indices, dtype=int)],
            response=self.response,
            positive_class=self.positive_class,
            reference_class=self.reference_class,
        )


@dataclass(frozen=True)
class Prediction:
    """Probability of the positive class and the thresholded label."""
    probability: float
    label: Any


@dataclass(frozen=True)
class AccuracyRecord:
    """Held-out accuracy of one specification on one fold."""
    model: str
    fold: int
    accuracy: float
    n_test: int


@dataclass(frozen=True)
class RankingRecord:
    """AICc statistics for one specification fitted on the full dataset."""
    spec: ModelSpecification
    k: int
    aicc: float
    delta_aicc: float
    model_likelihood: float
    weight: float
    log_likelihood: float
    cumulative_weight: float

    @property
    def model(self) -> str:
        return self.spec.label


@dataclass
class CVConfig:
    """Configuration for cross-validation."""
    folds: int = 10
    seed: int = 244
    n_jobs: int = 1


class BaseModel(ABC):
    """Base class for binary classifiers wrapped by modelSelector."""

    def __init__(self, name: str, **kwargs):
        self.name = name
        self.config = kwargs
        self.is_fitted = False

    @abstractmethod
    def fit(self, X: np.ndarray, y: np.ndarray) -> 'BaseModel':
        """Fit the model to the training data."""
        pass

    @abstractmethod
    def predict_proba(self, X: np.ndarray) -> np.ndarray:
        """Probability of the positive class for each row."""
        pass

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters for this estimator."""
        return self.config.copy() if deep else self.config


class BaseEvaluator(ABC):
    """Base class for evaluators in modelSelector."""

    def __init__(self, config: CVConfig):
        self.config = config
        self.results_ = None

    @abstractmethod
    def evaluate(self, dataset: Dataset, specs: List[ModelSpecification]) -> Any:
        """Evaluate model specifications on a dataset."""
        pass

    def get_results(self) -> Optional[Any]:
        """Get evaluation results."""
        return self.results_
