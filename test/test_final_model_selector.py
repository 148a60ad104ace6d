"""Tests for final model selection."""

import pytest

from modelSelector.core.base import ModelSpecification, RankingRecord
from modelSelector.core.exceptions import ModelSelectionConflictError
from modelSelector.core.final_model_selector import FinalModelSelector, select_and_finalize
from modelSelector.core.ranker import rank


def _record(label, aicc_value, delta):
    spec = ModelSpecification(label=label, response="y", predictors=("x",))
    return RankingRecord(
        spec=spec, k=2, aicc=aicc_value, delta_aicc=delta, model_likelihood=1.0,
        weight=0.5, log_likelihood=-10.0, cumulative_weight=0.5,
    )


@pytest.fixture
def ranked():
    return [_record("A", 100.0, 0.0), _record("B", 104.0, 4.0)]


class TestSelect:
    """AICc-best choice and disagreement with CV accuracy."""

    def test_metrics_agree(self, ranked):
        top, conflict = FinalModelSelector().select(ranked, {"A": 0.90, "B": 0.85})

        assert top.model == "A"
        assert conflict is None

    def test_within_tolerance(self, ranked):
        top, conflict = FinalModelSelector(accuracy_tolerance=0.005).select(ranked, {"A": 0.900, "B": 0.903})

        assert top.model == "A"
        assert conflict is None

    def test_conflict_recorded(self, ranked):
        top, conflict = FinalModelSelector().select(ranked, {"A": 0.80, "B": 0.90})

        assert top.model == "A"
        assert conflict.aicc_best == "A"
        assert conflict.accuracy_best == "B"
        assert conflict.best_accuracy == 0.90
        assert "'B'" in conflict.describe()

    def test_conflict_strict(self, ranked):
        with pytest.raises(ModelSelectionConflictError):
            FinalModelSelector(strict=True).select(ranked, {"A": 0.80, "B": 0.90})

    def test_missing_accuracy(self, ranked):
        with pytest.raises(ValueError):
            FinalModelSelector().select(ranked, {"A": 0.9})

    def test_empty_ranking(self):
        with pytest.raises(ValueError):
            FinalModelSelector().select([], {})

    def test_negative_tolerance(self):
        with pytest.raises(ValueError):
            FinalModelSelector(accuracy_tolerance=-0.1)


class TestFinalize:
    """Refit on the full palmetto-like data."""

    def test_select_and_finalize(self, palmetto_dataset, palmetto_specs):
        ranked_specs = rank(palmetto_dataset, palmetto_specs)
        final = select_and_finalize(palmetto_dataset, ranked_specs, {"Model 1": 0.9, "Model 2": 0.6})

        assert final.spec.label == "Model 1"
        assert final.metrics_agree
        assert final.cv_accuracy == 0.9
        assert len(final.predictions) == 100
        for column in ['height', 'length', 'width', 'green_lvs', 'actual', 'probability', 'predicted', 'correct']:
            assert column in final.predictions.columns

    def test_classification_summary(self, palmetto_dataset, palmetto_specs):
        ranked_specs = rank(palmetto_dataset, palmetto_specs)
        final = select_and_finalize(palmetto_dataset, ranked_specs, {"Model 1": 0.9, "Model 2": 0.6})
        summary = final.summary

        assert list(summary.index) == ["Sabal etonia", "Serenoa repens"]
        assert ((summary['correct'] + summary['incorrect']) == 50).all()
        assert summary['correct'].sum() / 100 == pytest.approx(final.accuracy)
        assert final.accuracy > 0.8

    def test_refit_matches_ranking_fit(self, palmetto_dataset, palmetto_specs):
        ranked_specs = rank(palmetto_dataset, palmetto_specs)
        final = select_and_finalize(palmetto_dataset, ranked_specs, {"Model 1": 0.9, "Model 2": 0.6})

        assert final.classifier.log_likelihood == pytest.approx(ranked_specs[0].log_likelihood)
