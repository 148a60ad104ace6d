"""
Data loading utilities for modelSelector.

This module loads the palmetto measurements and the USDA food-nutrient table
from CSV, normalises column names and prepares analysis datasets.
"""

from typing import Any, Mapping, Optional, Sequence, Union
import pandas as pd
import numpy as np
from pathlib import Path

from ..core.base import Dataset
from ..core.exceptions import LoadError
from ..config.model_configs import MODEL_CONFIGS, FOOD_GROUP_COLUMN
from ..utils.helpers import clean_column_names
from ..utils.logger import get_logger


def _normalize_key(value: Any) -> str:
    """Compare coded labels by text so that 1, 1.0 and '1' match."""
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        value = int(value)
    return str(value).strip()


class DataLoader:
    """Data loader for the palmetto and food-nutrient datasets."""

    def __init__(self):
        self.logger = get_logger("DataLoader")
        self.dropped_rows_ = 0

    def read_csv(self, path: Union[str, Path]) -> pd.DataFrame:
        """
        Read a CSV file and snake-case its column names.

        Raises:
            LoadError: If the file is missing, empty or cannot be parsed
        """
        path = Path(path)
        if not path.exists():
            raise LoadError(f"Data file not found: {path}")

        self.logger.info(f"Loading data from {path}")
        try:
            frame = pd.read_csv(path)
        except pd.errors.EmptyDataError as e:
            raise LoadError(f"Data file is empty: {path}") from e
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            raise LoadError(f"Could not parse {path}: {e}") from e

        frame.columns = clean_column_names(frame.columns)
        self.logger.info(f"Loaded {frame.shape[0]} rows x {frame.shape[1]} columns")
        return frame

    def prepare_dataset(
        self,
        frame: pd.DataFrame,
        response: str,
        predictors: Sequence[str],
        positive_class: Any,
        reference_class: Any,
        response_mapping: Optional[Mapping[Any, Any]] = None
    ) -> Dataset:
        """
        Build a Dataset from an in-memory table.

        Rows with a missing response or predictor are dropped (no imputation).

        Args:
            frame: Raw observations
            response: Response column name
            predictors: Every predictor used by any specification
            positive_class: Response value modelled as the positive class
            reference_class: The other response value
            response_mapping: Optional recoding of raw response values
                (e.g. ``{1: "Serenoa repens", 2: "Sabal etonia"}``)

        Raises:
            LoadError: Missing columns, non-numeric predictors, unexpected
                response values or no complete rows
        """
        required = [response, *predictors]
        missing = [col for col in required if col not in frame.columns]
        if missing:
            raise LoadError(f"Missing required columns: {missing}")

        data = frame[required].copy()

        if response_mapping:
            lookup = {_normalize_key(k): v for k, v in response_mapping.items()}
            raw = data[response]
            mapped = raw.map(lambda v: lookup.get(_normalize_key(v)) if pd.notnull(v) else None)
            unmapped = raw.notnull() & mapped.isnull()
            if unmapped.any():
                values = sorted({_normalize_key(v) for v in raw[unmapped]})
                raise LoadError(f"Response values without a mapping in '{response}': {values}")
            data[response] = mapped

        for col in predictors:
            if not pd.api.types.is_numeric_dtype(data[col]):
                try:
                    data[col] = pd.to_numeric(data[col])
                except (ValueError, TypeError) as e:
                    raise LoadError(f"Predictor '{col}' is not numeric: {e}") from e

        # 非有限值按缺失处理
        data[list(predictors)] = data[list(predictors)].astype(float).replace([np.inf, -np.inf], np.nan)

        complete = data.dropna(subset=required)
        self.dropped_rows_ = len(data) - len(complete)
        if self.dropped_rows_:
            self.logger.info(f"Dropped {self.dropped_rows_} rows with missing values in {required}")
        if complete.empty:
            raise LoadError("No complete observations remain after removing missing values")

        unexpected = set(complete[response].unique()) - {positive_class, reference_class}
        if unexpected:
            raise LoadError(
                f"Response '{response}' has values outside "
                f"['{positive_class}', '{reference_class}']: {sorted(map(str, unexpected))}"
            )

        dataset = Dataset(
            frame=complete,
            response=response,
            positive_class=positive_class,
            reference_class=reference_class,
        )
        self.logger.info(f"Prepared dataset: {len(dataset)} observations, class counts {dataset.class_counts()}")
        return dataset

    def load_dataset(
        self,
        path: Union[str, Path],
        response: str,
        predictors: Sequence[str],
        positive_class: Any,
        reference_class: Any,
        response_mapping: Optional[Mapping[Any, Any]] = None
    ) -> Dataset:
        """Read a CSV file and prepare it as a Dataset (see ``prepare_dataset``)."""
        frame = self.read_csv(path)
        return self.prepare_dataset(
            frame,
            response=response,
            predictors=predictors,
            positive_class=positive_class,
            reference_class=reference_class,
            response_mapping=response_mapping,
        )

    def load_palmetto(self, path: Union[str, Path], predictors: Optional[Sequence[str]] = None) -> Dataset:
        """Load the palmetto survey with species recoded to scientific names."""
        preset = MODEL_CONFIGS["palmetto"]
        if predictors is None:
            predictors = []
            for names in preset["specifications"].values():
                predictors.extend(name for name in names if name not in predictors)
        return self.load_dataset(
            path,
            response=preset["response"],
            predictors=predictors,
            positive_class=preset["positive_class"],
            reference_class=preset["reference_class"],
            response_mapping=preset["response_mapping"],
        )

    def load_food_nutrients(
        self,
        path: Union[str, Path],
        food_groups: Optional[Sequence[str]] = None,
        group_column: str = FOOD_GROUP_COLUMN
    ) -> pd.DataFrame:
        """
        Load the USDA food-nutrient table, optionally keeping selected food groups.

        Food group matching ignores case and surrounding whitespace.
        """
        frame = self.read_csv(path)
        if food_groups:
            if group_column not in frame.columns:
                raise LoadError(f"Missing food group column: {group_column}")
            wanted = {str(g).strip().lower() for g in food_groups}
            keep = frame[group_column].astype(str).str.strip().str.lower().isin(wanted)
            frame = frame[keep].reset_index(drop=True)
            self.logger.info(f"Kept {len(frame)} rows in food groups {list(food_groups)}")
            if frame.empty:
                raise LoadError(f"No rows found for food groups: {list(food_groups)}")
        return frame
