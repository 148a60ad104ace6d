"""Tests for fold assignment."""

import numpy as np
import pytest

from modelSelector.core.exceptions import InvalidPartitionError
from modelSelector.core.fold_partitioner import assign_folds


class TestAssignFolds:
    """Fold sizes, determinism and coverage."""

    def test_even_split(self):
        assignment = assign_folds(100, 10, 244)

        assert len(assignment) == 100
        assert assignment.fold_sizes() == {fold: 10 for fold in range(1, 11)}

    def test_uneven_split_is_balanced(self):
        """103 rows into 10 folds: three folds of 11, seven of 10."""
        sizes = assign_folds(103, 10, 1).fold_sizes()

        assert sum(sizes.values()) == 103
        assert set(sizes.values()) == {10, 11}
        assert sorted(sizes.values()).count(11) == 3

    def test_same_seed_same_assignment(self):
        first = assign_folds(100, 10, 244)
        second = assign_folds(100, 10, 244)

        np.testing.assert_array_equal(first.folds, second.folds)

    def test_different_seed_different_assignment(self):
        first = assign_folds(100, 10, 244)
        second = assign_folds(100, 10, 245)

        assert not np.array_equal(first.folds, second.folds)

    def test_every_observation_tested_once(self):
        assignment = assign_folds(37, 5, 3)
        tested = []

        for fold, train, test in assignment.splits():
            assert len(np.intersect1d(train, test)) == 0
            assert len(train) + len(test) == 37
            tested.extend(test.tolist())

        assert sorted(tested) == list(range(37))

    def test_k_equal_to_n(self):
        assignment = assign_folds(5, 5, 0)

        assert sorted(assignment.folds.tolist()) == [1, 2, 3, 4, 5]

    def test_folds_are_read_only(self):
        assignment = assign_folds(20, 4, 1)

        with pytest.raises(ValueError):
            assignment.folds[0] = 2

    def test_to_series(self):
        series = assign_folds(12, 3, 9).to_series()

        assert series.name == 'fold'
        assert series.value_counts().to_dict() == {1: 4, 2: 4, 3: 4}


class TestInvalidPartitions:
    """Rejected fold counts."""

    @pytest.mark.parametrize("n, k", [(10, 1), (10, 0), (3, 4), (0, 2)])
    def test_invalid_k(self, n, k):
        with pytest.raises(InvalidPartitionError):
            assign_folds(n, k, 1)

    def test_non_integer_arguments(self):
        with pytest.raises(InvalidPartitionError):
            assign_folds(10.5, 2, 1)
        with pytest.raises(InvalidPartitionError):
            assign_folds(10, True, 1)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            assign_folds(3, 10, 1)

    def test_fold_out_of_range(self):
        assignment = assign_folds(10, 2, 1)

        with pytest.raises(ValueError):
            assignment.test_indices(3)
        with pytest.raises(ValueError):
            assignment.train_indices(0)
