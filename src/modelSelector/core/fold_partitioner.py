"""
Fold partitioning for modelSelector.

Every observation is assigned to exactly one of k folds: the round-robin
sequence 1, 2, ..., k, 1, 2, ... is truncated to the number of observations
and shuffled with a seeded permutation. The same (n, k, seed) always yields
the same assignment, so every specification in a run is scored on identical
folds.
"""

from typing import Dict, Iterator, Tuple
import numbers
import numpy as np
import pandas as pd
from dataclasses import dataclass

from .exceptions import InvalidPartitionError


@dataclass(frozen=True, eq=False)
class FoldAssignment:
    """Fold number (1..k) for each observation, in row order."""
    folds: np.ndarray
    k: int
    seed: int

    def __post_init__(self):
        folds = np.array(self.folds, dtype=int)
        folds.setflags(write=False)
        object.__setattr__(self, 'folds', folds)

    def __len__(self) -> int:
        return len(self.folds)

    def _check_fold(self, fold: int) -> None:
        if not 1 <= fold <= self.k:
            raise ValueError(f"Fold must be in [1, {self.k}], got {fold}")

    def fold_sizes(self) -> Dict[int, int]:
        return {fold: int(np.sum(self.folds == fold)) for fold in range(1, self.k + 1)}

    def test_indices(self, fold: int) -> np.ndarray:
        self._check_fold(fold)
        return np.flatnonzero(self.folds == fold)

    def train_indices(self, fold: int) -> np.ndarray:
        self._check_fold(fold)
        return np.flatnonzero(self.folds != fold)

    def splits(self) -> Iterator[Tuple[int, np.ndarray, np.ndarray]]:
        """Yield (fold, train_indices, test_indices) for folds 1..k."""
        for fold in range(1, self.k + 1):
            yield fold, self.train_indices(fold), self.test_indices(fold)

    def to_series(self) -> pd.Series:
        return pd.Series(self.folds, name='fold')


def assign_folds(n_observations: int, k: int, seed: int) -> FoldAssignment:
    """
    Assign each of ``n_observations`` rows to one of ``k`` folds.

    Args:
        n_observations: Number of rows to partition
        k: Number of folds (2 <= k <= n_observations)
        seed: Seed for the permutation

    Returns:
        FoldAssignment whose folds each hold floor(n/k) or ceil(n/k) rows

    Raises:
        InvalidPartitionError: If k < 2 or n_observations < k
    """
    for name, value in (('n_observations', n_observations), ('k', k)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidPartitionError(f"{name} must be an integer, got {value!r}")
    if k < 2:
        raise InvalidPartitionError(f"At least 2 folds are required, got k={k}")
    if n_observations < k:
        raise InvalidPartitionError(
            f"Cannot split {n_observations} observations into {k} folds"
        )

    round_robin = np.resize(np.arange(1, k + 1), n_observations)
    rng = np.random.default_rng(seed)
    return FoldAssignment(folds=rng.permutation(round_robin), k=int(k), seed=seed)
