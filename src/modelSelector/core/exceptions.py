"""
Exception hierarchy for modelSelector.

Every error raised by the analysis core derives from ModelSelectorError so
callers can decide whether to abort a whole analysis or report which model
specification (and fold) failed.
"""

from typing import Optional


class ModelSelectorError(Exception):
    """Base class for all modelSelector errors."""


class InvalidPartitionError(ModelSelectorError, ValueError):
    """The requested number of folds cannot partition the observations."""


class FittingError(ModelSelectorError):
    """A logistic regression fit could not be carried out."""

    def __init__(self, message: str, model: Optional[str] = None, fold: Optional[int] = None):
        super().__init__(message)
        self.model = model
        self.fold = fold

    def __str__(self) -> str:
        message = super().__str__()
        context = []
        if self.model is not None:
            context.append(f"model={self.model}")
        if self.fold is not None:
            context.append(f"fold={self.fold}")
        if context:
            return f"{message} ({', '.join(context)})"
        return message


class SeparationError(FittingError):
    """The maximum-likelihood solver did not converge (e.g. perfect separation)."""


class DegenerateTrainingSetError(FittingError):
    """The training data contains only one of the two classes."""


class EmptyEvaluationSetError(ModelSelectorError, ValueError):
    """Accuracy is undefined for an empty evaluation set."""


class InsufficientSampleSizeError(ModelSelectorError, ValueError):
    """AICc is undefined because n - K - 1 <= 0."""


class LoadError(ModelSelectorError, ValueError):
    """Input data is missing or malformed."""


class ModelSelectionConflictError(ModelSelectorError):
    """AICc ranking and cross-validated accuracy disagree on the best model."""
