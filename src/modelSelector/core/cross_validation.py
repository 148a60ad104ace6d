"""
K-fold cross-validation of competing model specifications.

One fold assignment is computed per run and shared by every specification.
The (fold, specification) pairs form a lazy task sequence; each task fits on
the training folds and scores the held-out fold, and the resulting accuracy
records are reduced to a mean accuracy per specification. Tasks are
independent, so they can be distributed with joblib when ``n_jobs > 1``.
"""

from typing import Dict, Iterator, List, Sequence, Tuple
import numpy as np
import pandas as pd
from dataclasses import dataclass
from joblib import Parallel, delayed

from .base import AccuracyRecord, BaseEvaluator, CVConfig, Dataset, ModelSpecification
from .engine import fit, predict, score
from .exceptions import FittingError
from .fold_partitioner import FoldAssignment, assign_folds
from ..utils.logger import get_logger


def check_specifications(specs: Sequence[ModelSpecification]) -> List[ModelSpecification]:
    """Ensure there is at least one specification and labels are unique."""
    specs = list(specs)
    if not specs:
        raise ValueError("At least one model specification is required")
    labels = [spec.label for spec in specs]
    duplicates = sorted({label for label in labels if labels.count(label) > 1})
    if duplicates:
        raise ValueError(f"Duplicate model labels: {duplicates}")
    return specs


def iter_tasks(
    assignment: FoldAssignment,
    specs: Sequence[ModelSpecification]
) -> Iterator[Tuple[int, ModelSpecification]]:
    """Yield every (fold, specification) pair, fold-major."""
    for fold in range(1, assignment.k + 1):
        for spec in specs:
            yield fold, spec


def evaluate_fold(
    dataset: Dataset,
    assignment: FoldAssignment,
    fold: int,
    spec: ModelSpecification
) -> AccuracyRecord:
    """Fit ``spec`` on all folds but ``fold`` and score it on ``fold``."""
    training_set = dataset.take(assignment.train_indices(fold))
    evaluation_set = dataset.take(assignment.test_indices(fold))

    try:
        classifier = fit(training_set, spec)
    except FittingError as e:
        e.model = spec.label
        e.fold = fold
        raise

    predictions = predict(classifier, evaluation_set)
    return AccuracyRecord(
        model=spec.label,
        fold=fold,
        accuracy=score(predictions, evaluation_set.labels),
        n_test=len(evaluation_set),
    )


@dataclass(frozen=True, eq=False)
class CrossValidationResult:
    """Per-fold accuracy records of one cross-validation run."""
    assignment: FoldAssignment
    labels: Tuple[str, ...]
    records: Tuple[AccuracyRecord, ...]

    def accuracies(self) -> Dict[str, List[float]]:
        """Accuracy per fold (ordered by fold) for each specification."""
        per_model = {label: [] for label in self.labels}
        for record in sorted(self.records, key=lambda r: r.fold):
            per_model[record.model].append(record.accuracy)
        return per_model

    def mean_accuracy(self) -> Dict[str, float]:
        return {label: float(np.mean(values)) for label, values in self.accuracies().items()}

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [
                {'model': r.model, 'fold': r.fold, 'accuracy': r.accuracy, 'n_test': r.n_test}
                for r in self.records
            ],
            columns=['model', 'fold', 'accuracy', 'n_test'],
        ).sort_values(['fold', 'model'], kind='stable').reset_index(drop=True)

    def summary(self) -> pd.DataFrame:
        """Mean, standard deviation and range of accuracy per specification."""
        summary = (
            self.to_frame()
            .groupby('model')['accuracy']
            .agg(['mean', 'std', 'min', 'max', 'count'])
            .reindex(list(self.labels))
        )
        summary.index.name = 'model'
        return summary.rename(columns={'mean': 'mean_accuracy', 'std': 'std_accuracy', 'count': 'n_folds'})


class CrossValidator(BaseEvaluator):
    """K-fold cross-validation evaluator for logistic regression specifications."""

    def __init__(self, config: CVConfig):
        super().__init__(config)
        self.logger = get_logger("CrossValidator")

    def evaluate(self, dataset: Dataset, specs: Sequence[ModelSpecification]) -> CrossValidationResult:
        """
        Run k-fold cross-validation for every specification.

        Args:
            dataset: Observations to partition
            specs: Candidate specifications

        Returns:
            CrossValidationResult holding one AccuracyRecord per (fold, spec)

        Raises:
            InvalidPartitionError: If the dataset cannot be split into k folds
            FittingError: If any fold fails to fit; no partial result is kept
        """
        specs = check_specifications(specs)
        assignment = assign_folds(len(dataset), self.config.folds, self.config.seed)
        self.logger.info(
            f"{self.config.folds}-fold CV on {len(dataset)} observations, "
            f"{len(specs)} specifications (seed={self.config.seed})"
        )
        self.logger.debug(f"Fold sizes: {assignment.fold_sizes()}")

        tasks = iter_tasks(assignment, specs)
        if self.config.n_jobs == 1:
            records = [evaluate_fold(dataset, assignment, fold, spec) for fold, spec in tasks]
        else:
            records = Parallel(n_jobs=self.config.n_jobs)(
                delayed(evaluate_fold)(dataset, assignment, fold, spec) for fold, spec in tasks
            )

        result = CrossValidationResult(
            assignment=assignment,
            labels=tuple(spec.label for spec in specs),
            records=tuple(records),
        )
        for label, accuracy in result.mean_accuracy().items():
            self.logger.info(f"  {label}: mean accuracy {accuracy:.4f}")

        self.results_ = result
        return result


def cross_validate(
    dataset: Dataset,
    specs: Sequence[ModelSpecification],
    k: int,
    seed: int,
    n_jobs: int = 1
) -> Dict[str, float]:
    """Mean held-out accuracy per specification label."""
    config = CVConfig(folds=k, seed=seed, n_jobs=n_jobs)
    return CrossValidator(config).evaluate(dataset, specs).mean_accuracy()
