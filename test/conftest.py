"""
Pytest configuration and shared fixtures.

Datasets are synthetic (see generate_test_data.py) and written to pytest's
temporary directories; nothing is mocked.
"""

import sys
from pathlib import Path

import pandas as pd
import pytest

sys.path.insert(0, str(Path(__file__).parent))

from generate_test_data import make_palmetto_frame, make_food_nutrient_frame
from modelSelector.core.base import Dataset, ModelSpecification
from modelSelector.data.loader import DataLoader
from modelSelector.config.model_configs import preset_specifications


@pytest.fixture(scope="session")
def palmetto_frame():
    return make_palmetto_frame()


@pytest.fixture
def palmetto_csv(tmp_path, palmetto_frame):
    path = tmp_path / "palmetto.csv"
    palmetto_frame.to_csv(path, index=False)
    return path


@pytest.fixture(scope="session")
def palmetto_dataset(palmetto_frame):
    """100 observations, 50 per species, species recoded to names."""
    return DataLoader().prepare_dataset(
        palmetto_frame,
        response="species",
        predictors=["height", "length", "width", "green_lvs"],
        positive_class="Sabal etonia",
        reference_class="Serenoa repens",
        response_mapping={1: "Serenoa repens", 2: "Sabal etonia"},
    )


@pytest.fixture(scope="session")
def palmetto_specs():
    """Model 1 (four predictors) and Model 2 (without length)."""
    return preset_specifications("palmetto")


@pytest.fixture
def food_frame():
    return make_food_nutrient_frame()


@pytest.fixture
def food_csv(tmp_path, food_frame):
    path = tmp_path / "usda.csv"
    food_frame.to_csv(path, index=False)
    return path


@pytest.fixture
def toy_dataset():
    """Small overlapping two-class dataset with a single predictor x."""
    frame = pd.DataFrame({
        "y": ["pos", "neg", "pos", "neg", "pos", "neg", "neg", "pos", "pos", "neg", "neg", "pos"],
        "x": [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0, 10.0, 11.0, 12.0],
        "z": [0.5, 0.1, 0.9, 0.3, 0.4, 0.8, 0.2, 0.7, 0.6, 0.1, 0.9, 0.3],
    })
    return Dataset(frame=frame, response="y", positive_class="pos", reference_class="neg")


@pytest.fixture
def toy_spec():
    return ModelSpecification(label="x only", response="y", predictors=("x",))
