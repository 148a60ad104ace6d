"""
Data validation utilities for modelSelector.

This module checks that a dataset can support every candidate specification.
"""

from typing import Sequence
import pandas as pd
import numpy as np

from ..core.base import Dataset, ModelSpecification
from ..utils.logger import get_logger


class DataValidator:
    """Data validator for binary-response datasets."""

    def __init__(self, min_class_count: int = 2):
        self.logger = get_logger("DataValidator")
        self.min_class_count = min_class_count

    def validate(self, dataset: Dataset, specs: Sequence[ModelSpecification]) -> None:
        """
        Validate a dataset against the specifications that will be fitted.

        Args:
            dataset: Prepared observations
            specs: Candidate model specifications

        Raises:
            ValueError: If data validation fails
        """
        self.logger.info("Validating input data...")

        if len(dataset) == 0:
            raise ValueError("Dataset has no observations")

        for spec in specs:
            self._validate_specification(dataset, spec)

        self._validate_labels(dataset)

        self.logger.info("Data validation passed")

    def _validate_specification(self, dataset: Dataset, spec: ModelSpecification) -> None:
        """Response matches and predictors are present, numeric and finite."""
        if spec.response != dataset.response:
            raise ValueError(
                f"Specification '{spec.label}' models '{spec.response}', "
                f"dataset response is '{dataset.response}'"
            )

        missing = [col for col in spec.predictors if col not in dataset.frame.columns]
        if missing:
            raise ValueError(f"Specification '{spec.label}' uses unknown predictors: {missing}")

        predictors = dataset.frame[list(spec.predictors)]
        non_numeric = [col for col in predictors.columns if not pd.api.types.is_numeric_dtype(predictors[col])]
        if non_numeric:
            raise ValueError(f"Non-numeric predictors in '{spec.label}': {non_numeric}")

        if predictors.isnull().any().any():
            raise ValueError(f"Predictors of '{spec.label}' contain missing values")

        if not np.isfinite(predictors.to_numpy(dtype=float)).all():
            raise ValueError(f"Predictors of '{spec.label}' contain infinite values")

        constant = [col for col in predictors.columns if predictors[col].nunique() <= 1]
        if constant:
            self.logger.warning(f"Constant predictors in '{spec.label}': {constant}")

    def _validate_labels(self, dataset: Dataset) -> None:
        """Both classes present with enough observations each."""
        counts = dataset.class_counts()
        self.logger.info(f"Class counts: {counts}")
        for label, count in counts.items():
            if count < self.min_class_count:
                raise ValueError(
                    f"Class '{label}' has {count} observations; at least "
                    f"{self.min_class_count} are required"
                )
