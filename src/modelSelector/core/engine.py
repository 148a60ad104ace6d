"""
Fit-and-score engine for modelSelector.

``fit`` estimates a binary logistic regression for one model specification,
``predict`` turns a fitted classifier into per-observation predictions and
``score`` reduces predictions to an accuracy. All three are side-effect free.
"""

from typing import Any, List, Sequence, Tuple
import numpy as np
import pandas as pd
from dataclasses import dataclass

from .base import Dataset, ModelSpecification, Prediction
from .exceptions import DegenerateTrainingSetError, EmptyEvaluationSetError, FittingError
from ..models.logistic_regression import LogisticRegressionClassifier
from ..utils.logger import get_logger

logger = get_logger("Engine")

# Probabilities at or above the threshold are assigned to the positive class.
CLASSIFICATION_THRESHOLD = 0.50


@dataclass(frozen=True)
class FittedClassifier:
    """Coefficients and fit statistics of one logistic regression."""
    spec: ModelSpecification
    intercept: float
    coefficients: Tuple[float, ...]
    log_likelihood: float
    n_observations: int
    positive_class: Any
    reference_class: Any

    @property
    def n_parameters(self) -> int:
        return self.spec.n_parameters

    def coefficient_table(self) -> pd.Series:
        return pd.Series(
            [self.intercept, *self.coefficients],
            index=['(Intercept)', *self.spec.predictors],
            name=self.spec.label,
        )

    def predict_proba(self, X: np.ndarray) -> np.ndarray:
        """Probability of the positive class for each row of ``X``."""
        z = self.intercept + np.asarray(X, dtype=float) @ np.asarray(self.coefficients)
        return 1.0 / (1.0 + np.exp(-np.clip(z, -500.0, 500.0)))


def classify(probability: float, positive_class: Any = 1, reference_class: Any = 0) -> Any:
    """Threshold a positive-class probability into a label (ties go positive)."""
    return positive_class if probability >= CLASSIFICATION_THRESHOLD else reference_class


def fit(training_set: Dataset, spec: ModelSpecification, **solver_options) -> FittedClassifier:
    """
    Fit ``spec`` on ``training_set``.

    Raises:
        DegenerateTrainingSetError: Training set holds fewer than two classes
        SeparationError: The solver cannot reach a maximum-likelihood estimate
    """
    if spec.response != training_set.response:
        raise ValueError(
            f"Specification '{spec.label}' models '{spec.response}' but the "
            f"dataset response is '{training_set.response}'"
        )

    counts = training_set.class_counts()
    if min(counts.values()) == 0:
        raise DegenerateTrainingSetError(
            f"Training set of {len(training_set)} observations contains a single class: {counts}",
            model=spec.label,
        )

    X = training_set.design_matrix(spec)
    y = training_set.positive_mask.astype(int)
    try:
        model = LogisticRegressionClassifier(**solver_options).fit(X, y)
    except FittingError as e:
        if e.model is None:
            e.model = spec.label
        raise

    logger.debug(
        f"{spec.label}: converged in {model.n_iter_} iterations on {len(training_set)} rows "
        f"({model.get_params()})"
    )

    return FittedClassifier(
        spec=spec,
        intercept=model.intercept_,
        coefficients=tuple(float(c) for c in model.coef_),
        log_likelihood=model.log_likelihood_,
        n_observations=len(training_set),
        positive_class=training_set.positive_class,
        reference_class=training_set.reference_class,
    )


def predict(classifier: FittedClassifier, evaluation_set: Dataset) -> List[Prediction]:
    """One prediction per observation, in dataset order."""
    if len(evaluation_set) == 0:
        return []
    probabilities = classifier.predict_proba(evaluation_set.design_matrix(classifier.spec))
    return [
        Prediction(
            probability=float(p),
            label=classify(p, classifier.positive_class, classifier.reference_class),
        )
        for p in probabilities
    ]


def score(predictions: Sequence[Prediction], true_labels: Sequence[Any]) -> float:
    """Fraction of predictions whose label matches the true label."""
    if len(predictions) == 0:
        raise EmptyEvaluationSetError("Cannot score an empty evaluation set")
    if len(predictions) != len(true_labels):
        raise ValueError(
            f"Got {len(predictions)} predictions for {len(true_labels)} labels"
        )
    matches = sum(1 for pred, truth in zip(predictions, true_labels) if pred.label == truth)
    return matches / len(predictions)
