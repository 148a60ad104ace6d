"""Tests for the nutrient PCA."""

import numpy as np
import pytest

from modelSelector.analysis.pca import NutrientPCA
from modelSelector.config.model_configs import NUTRIENT_COLUMNS
from modelSelector.data.loader import DataLoader


@pytest.fixture
def nutrients(food_csv):
    return DataLoader().load_food_nutrients(food_csv)


class TestNutrientPCA:
    """Explained variance, loadings and scores."""

    def test_all_components(self, nutrients):
        result = NutrientPCA(columns=NUTRIENT_COLUMNS).fit(nutrients)

        assert result.components == [f"PC{i}" for i in range(1, 7)]
        assert result.n_observations == 90
        assert result.scaled
        assert result.explained_variance['variance_ratio'].sum() == pytest.approx(1.0)
        assert result.explained_variance['cumulative_ratio'].iloc[-1] == pytest.approx(1.0)
        assert result.explained_variance['variance_ratio'].is_monotonic_decreasing

    def test_loadings_and_scores(self, nutrients):
        result = NutrientPCA(columns=NUTRIENT_COLUMNS, n_components=2).fit(nutrients)

        assert result.loadings.shape == (6, 2)
        assert list(result.loadings.index) == NUTRIENT_COLUMNS
        assert result.loadings.index.name == 'variable'
        assert result.scores.shape == (90, 2)
        # 单位长度的主成分向量
        np.testing.assert_allclose(np.linalg.norm(result.loadings.to_numpy(), axis=0), 1.0)

    def test_scaled_scores_are_centred(self, nutrients):
        result = NutrientPCA(columns=NUTRIENT_COLUMNS).fit(nutrients)

        np.testing.assert_allclose(result.scores.mean().to_numpy(), 0.0, atol=1e-10)

    def test_default_columns_are_numeric(self, nutrients):
        result = NutrientPCA().fit(nutrients)

        assert set(result.loadings.index) == set(NUTRIENT_COLUMNS)

    def test_missing_values_dropped(self, nutrients):
        nutrients = nutrients.copy()
        nutrients.loc[[0, 5], "fat_g"] = np.nan

        result = NutrientPCA(columns=NUTRIENT_COLUMNS).fit(nutrients)

        assert result.n_observations == 88
        assert 0 not in result.scores.index

    def test_too_few_columns(self, nutrients):
        with pytest.raises(ValueError):
            NutrientPCA(columns=["fat_g"]).fit(nutrients)

    def test_too_few_rows(self, nutrients):
        with pytest.raises(ValueError):
            NutrientPCA(columns=NUTRIENT_COLUMNS).fit(nutrients.head(1))

    def test_unknown_column(self, nutrients):
        with pytest.raises(ValueError, match="vitamin_c"):
            NutrientPCA(columns=["fat_g", "vitamin_c"]).fit(nutrients)
