"""
Information-criterion ranking of model specifications.

Each specification is fitted once on the full dataset and scored with the
small-sample corrected Akaike Information Criterion (AICc). Specifications
are ordered by AICc and given Akaike weights (normalised relative
likelihoods).
"""

from typing import List, Sequence
import numpy as np
import pandas as pd

from .base import Dataset, ModelSpecification, RankingRecord
from .cross_validation import check_specifications
from .engine import fit
from .exceptions import InsufficientSampleSizeError
from ..utils.logger import get_logger

logger = get_logger("InformationCriterionRanker")


def aicc(log_likelihood: float, n_parameters: int, n_observations: int) -> float:
    """AICc = 2K - 2LL + 2K(K+1)/(n - K - 1)."""
    denominator = n_observations - n_parameters - 1
    if denominator <= 0:
        raise InsufficientSampleSizeError(
            f"AICc needs n - K - 1 > 0 (n={n_observations}, K={n_parameters})"
        )
    return (
        2 * n_parameters
        - 2 * log_likelihood
        + (2 * n_parameters * (n_parameters + 1)) / denominator
    )


def rank(dataset: Dataset, specs: Sequence[ModelSpecification]) -> List[RankingRecord]:
    """
    Rank specifications by AICc, best first.

    Ties keep the input order.

    Raises:
        InsufficientSampleSizeError: If n - K - 1 <= 0 for any specification
        FittingError: If any specification cannot be fitted on the full data
    """
    specs = check_specifications(specs)
    n = len(dataset)
    for spec in specs:
        if n - spec.n_parameters - 1 <= 0:
            raise InsufficientSampleSizeError(
                f"AICc needs n - K - 1 > 0 for '{spec.label}' "
                f"(n={n}, K={spec.n_parameters})"
            )

    fitted = []
    for spec in specs:
        classifier = fit(dataset, spec)
        fitted.append((spec, classifier.log_likelihood, aicc(classifier.log_likelihood, spec.n_parameters, n)))
        logger.debug(f"{spec.label}: LL={classifier.log_likelihood:.4f}, AICc={fitted[-1][2]:.4f}")

    fitted.sort(key=lambda item: item[2])
    scores = np.array([item[2] for item in fitted])
    deltas = scores - scores.min()
    likelihoods = np.exp(-deltas / 2.0)
    weights = likelihoods / likelihoods.sum()
    cumulative = np.cumsum(weights)

    records = [
        RankingRecord(
            spec=spec,
            k=spec.n_parameters,
            aicc=float(score),
            delta_aicc=float(delta),
            model_likelihood=float(likelihood),
            weight=float(weight),
            log_likelihood=float(ll),
            cumulative_weight=float(cum),
        )
        for (spec, ll, score), delta, likelihood, weight, cum
        in zip(fitted, deltas, likelihoods, weights, cumulative)
    ]
    logger.info(f"AICc ranking: {', '.join(f'{r.model} ({r.aicc:.2f})' for r in records)}")
    return records


def ranking_table(records: Sequence[RankingRecord]) -> pd.DataFrame:
    """AICc model-selection table, one row per specification in rank order."""
    return pd.DataFrame(
        [
            {
                'Modnames': r.model,
                'K': r.k,
                'AICc': r.aicc,
                'Delta_AICc': r.delta_aicc,
                'ModelLik': r.model_likelihood,
                'AICcWt': r.weight,
                'LL': r.log_likelihood,
                'Cum.Wt': r.cumulative_weight,
            }
            for r in records
        ],
        columns=['Modnames', 'K', 'AICc', 'Delta_AICc', 'ModelLik', 'AICcWt', 'LL', 'Cum.Wt'],
    )
