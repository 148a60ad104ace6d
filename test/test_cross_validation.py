"""Tests for k-fold cross-validation of model specifications."""

import pandas as pd
import pytest

from modelSelector.core.base import CVConfig, Dataset, ModelSpecification
from modelSelector.core.cross_validation import (
    CrossValidator, check_specifications, cross_validate, iter_tasks
)
from modelSelector.core.exceptions import DegenerateTrainingSetError, InvalidPartitionError
from modelSelector.core.fold_partitioner import assign_folds


class TestTasks:
    """Task sequence and specification checks."""

    def test_iter_tasks_is_fold_major(self, palmetto_specs):
        assignment = assign_folds(20, 4, 1)
        tasks = list(iter_tasks(assignment, palmetto_specs))

        assert len(tasks) == 8
        assert [fold for fold, _ in tasks] == [1, 1, 2, 2, 3, 3, 4, 4]
        assert [spec.label for _, spec in tasks[:2]] == ["Model 1", "Model 2"]

    def test_iter_tasks_is_restartable(self, palmetto_specs):
        assignment = assign_folds(20, 4, 1)

        assert list(iter_tasks(assignment, palmetto_specs)) == list(iter_tasks(assignment, palmetto_specs))

    def test_no_specifications(self):
        with pytest.raises(ValueError):
            check_specifications([])

    def test_duplicate_labels(self):
        spec = ModelSpecification(label="A", response="y", predictors=("x",))

        with pytest.raises(ValueError, match="Duplicate"):
            check_specifications([spec, spec])


class TestCrossValidate:
    """Cross-validation on the palmetto-like data."""

    def test_mean_accuracy_per_specification(self, palmetto_dataset, palmetto_specs):
        accuracies = cross_validate(palmetto_dataset, palmetto_specs, k=10, seed=244)

        assert list(accuracies) == ["Model 1", "Model 2"]
        for value in accuracies.values():
            assert 0.0 <= value <= 1.0
        # length 是区分度最高的预测变量
        assert accuracies["Model 1"] > accuracies["Model 2"]

    def test_reproducible(self, palmetto_dataset, palmetto_specs):
        first = cross_validate(palmetto_dataset, palmetto_specs, k=10, seed=244)
        second = cross_validate(palmetto_dataset, palmetto_specs, k=10, seed=244)

        assert first == second

    def test_parallel_matches_serial(self, palmetto_dataset, palmetto_specs):
        serial = cross_validate(palmetto_dataset, palmetto_specs, k=5, seed=244, n_jobs=1)
        parallel = cross_validate(palmetto_dataset, palmetto_specs, k=5, seed=244, n_jobs=2)

        assert serial == pytest.approx(parallel)

    def test_records(self, palmetto_dataset, palmetto_specs):
        result = CrossValidator(CVConfig(folds=10, seed=244)).evaluate(palmetto_dataset, palmetto_specs)
        frame = result.to_frame()

        assert len(frame) == 20
        assert list(frame.columns) == ['model', 'fold', 'accuracy', 'n_test']
        assert frame.groupby('model')['n_test'].sum().to_dict() == {"Model 1": 100, "Model 2": 100}
        assert result.mean_accuracy()["Model 1"] == pytest.approx(
            frame.loc[frame['model'] == "Model 1", 'accuracy'].mean()
        )

    def test_summary(self, palmetto_dataset, palmetto_specs):
        validator = CrossValidator(CVConfig(folds=10, seed=244))
        result = validator.evaluate(palmetto_dataset, palmetto_specs)
        summary = result.summary()

        assert validator.get_results() is result
        assert list(summary.index) == ["Model 1", "Model 2"]
        assert (summary['n_folds'] == 10).all()
        assert (summary['min'] <= summary['mean_accuracy']).all()
        assert (summary['mean_accuracy'] <= summary['max']).all()

    def test_too_many_folds(self, toy_dataset, toy_spec):
        with pytest.raises(InvalidPartitionError):
            cross_validate(toy_dataset, [toy_spec], k=13, seed=1)


class TestFailurePropagation:
    """Fitting failures abort the run and name the model and fold."""

    def test_single_class_training_fold(self):
        # 唯一的正类样本所在折，其训练集只含负类
        frame = pd.DataFrame({
            "y": ["neg"] * 4 + ["pos"] + ["neg"] * 5,
            "x": [1.0, 2.0, 3.0, 4.0, 5.5, 6.0, 7.0, 8.0, 9.0, 10.0],
        })
        dataset = Dataset(frame=frame, response="y", positive_class="pos", reference_class="neg")
        spec = ModelSpecification(label="x only", response="y", predictors=("x",))
        expected_fold = int(assign_folds(10, 5, 11).folds[4])

        with pytest.raises(DegenerateTrainingSetError) as exc_info:
            cross_validate(dataset, [spec], k=5, seed=11)

        assert exc_info.value.model == "x only"
        assert exc_info.value.fold == expected_fold
        assert f"fold={expected_fold}" in str(exc_info.value)
