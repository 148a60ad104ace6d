"""
Principal component analysis of food-nutrient profiles.

Nutrient columns are (optionally) standardised and decomposed with
scikit-learn's PCA. Results are returned as tables: variance explained per
component, variable loadings and per-observation scores.
"""

from typing import Optional, Sequence
import numpy as np
import pandas as pd
from dataclasses import dataclass
from sklearn.decomposition import PCA
from sklearn.preprocessing import StandardScaler

from ..utils.logger import get_logger


@dataclass(frozen=True, eq=False)
class PCAResult:
    """Tables describing a fitted PCA."""
    explained_variance: pd.DataFrame
    loadings: pd.DataFrame
    scores: pd.DataFrame
    n_observations: int
    scaled: bool

    @property
    def components(self) -> list:
        return list(self.loadings.columns)


class NutrientPCA:
    """
    PCA over selected numeric columns.

    Args:
        columns: Columns to decompose; defaults to every numeric column
        scale: Standardise columns to unit variance before decomposition
        n_components: Number of components to keep (default: all)
    """

    def __init__(
        self,
        columns: Optional[Sequence[str]] = None,
        scale: bool = True,
        n_components: Optional[int] = None
    ):
        self.columns = list(columns) if columns is not None else None
        self.scale = scale
        self.n_components = n_components
        self.logger = get_logger("NutrientPCA")
        self.pca_: Optional[PCA] = None

    def _select(self, frame: pd.DataFrame) -> pd.DataFrame:
        if self.columns is None:
            data = frame.select_dtypes(include=[np.number])
        else:
            missing = [col for col in self.columns if col not in frame.columns]
            if missing:
                raise ValueError(f"Columns not found for PCA: {missing}")
            data = frame[self.columns].apply(pd.to_numeric, errors='coerce')

        complete = data.dropna()
        dropped = len(data) - len(complete)
        if dropped:
            self.logger.info(f"Dropped {dropped} rows with missing nutrient values")
        if complete.shape[1] < 2:
            raise ValueError(f"PCA needs at least 2 columns, got {complete.shape[1]}")
        if complete.shape[0] < 2:
            raise ValueError(f"PCA needs at least 2 complete rows, got {complete.shape[0]}")
        return complete

    def fit(self, frame: pd.DataFrame) -> PCAResult:
        data = self._select(frame)
        values = data.to_numpy(dtype=float)
        if self.scale:
            values = StandardScaler().fit_transform(values)

        self.pca_ = PCA(n_components=self.n_components)
        scores = self.pca_.fit_transform(values)
        names = [f"PC{i + 1}" for i in range(self.pca_.n_components_)]

        explained = pd.DataFrame({
            'component': names,
            'std_dev': np.sqrt(self.pca_.explained_variance_),
            'variance_ratio': self.pca_.explained_variance_ratio_,
            'cumulative_ratio': np.cumsum(self.pca_.explained_variance_ratio_),
        })
        loadings = pd.DataFrame(self.pca_.components_.T, index=data.columns, columns=names)
        loadings.index.name = 'variable'
        scores = pd.DataFrame(scores, index=data.index, columns=names)

        self.logger.info(
            f"PCA on {data.shape[0]} rows x {data.shape[1]} columns; "
            f"PC1 explains {explained['variance_ratio'].iloc[0]:.1%}"
        )
        return PCAResult(
            explained_variance=explained,
            loadings=loadings,
            scores=scores,
            n_observations=data.shape[0],
            scaled=self.scale,
        )
