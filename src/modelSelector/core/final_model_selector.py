"""
最终模型选择器 for modelSelector.

结合两部分结果确定最终模型：
- AICc 排名（全量数据拟合）
- 交叉验证平均准确率
选出 AICc 最优的模型，在全量数据上重新拟合，并给出逐样本预测与分类汇总。
两个指标不一致时记录为冲突（不自行发明取舍规则）。
"""

from typing import Mapping, Optional, Sequence, Tuple
import pandas as pd
from dataclasses import dataclass

from .base import Dataset, ModelSpecification, RankingRecord
from .engine import FittedClassifier, fit, predict
from .exceptions import ModelSelectionConflictError
from ..evaluation.metrics import MetricsCalculator
from ..utils.logger import get_logger


@dataclass(frozen=True)
class ModelSelectionConflict:
    """AICc and cross-validated accuracy prefer different specifications."""
    aicc_best: str
    accuracy_best: str
    aicc_best_accuracy: float
    best_accuracy: float

    def describe(self) -> str:
        return (
            f"AICc prefers '{self.aicc_best}' (CV accuracy {self.aicc_best_accuracy:.4f}) "
            f"but '{self.accuracy_best}' has the highest CV accuracy ({self.best_accuracy:.4f})"
        )


@dataclass(frozen=True, eq=False)
class FinalModel:
    """The chosen specification refitted on the complete dataset."""
    spec: ModelSpecification
    classifier: FittedClassifier
    predictions: pd.DataFrame
    summary: pd.DataFrame
    cv_accuracy: float
    conflict: Optional[ModelSelectionConflict] = None

    @property
    def metrics_agree(self) -> bool:
        return self.conflict is None

    @property
    def accuracy(self) -> float:
        """Fraction of the full dataset classified correctly."""
        return float(self.predictions['correct'].mean())


class FinalModelSelector:
    """
    Picks the AICc-best specification and refits it on all observations.

    Args:
        accuracy_tolerance: Largest shortfall in mean CV accuracy, relative to
            the best competitor, that still counts as agreement
        strict: Raise ModelSelectionConflictError instead of recording the
            conflict when the metrics disagree
    """

    def __init__(self, accuracy_tolerance: float = 0.005, strict: bool = False):
        if accuracy_tolerance < 0:
            raise ValueError(f"accuracy_tolerance must be >= 0, got {accuracy_tolerance}")
        self.accuracy_tolerance = accuracy_tolerance
        self.strict = strict
        self.logger = get_logger("FinalModelSelector")
        self.metrics_calculator = MetricsCalculator()

    def select(
        self,
        ranked_specs: Sequence[RankingRecord],
        cv_accuracies: Mapping[str, float]
    ) -> Tuple[RankingRecord, Optional[ModelSelectionConflict]]:
        """Return the AICc-best record and any disagreement with CV accuracy."""
        if not ranked_specs:
            raise ValueError("No ranked specifications to choose from")

        top = ranked_specs[0]
        missing = [r.model for r in ranked_specs if r.model not in cv_accuracies]
        if missing:
            raise ValueError(f"No cross-validated accuracy for: {missing}")

        # 与 ranked_specs 顺序一致，准确率相同时取 AICc 更优者
        accuracy_best = max(ranked_specs, key=lambda r: cv_accuracies[r.model])
        top_accuracy = cv_accuracies[top.model]
        best_accuracy = cv_accuracies[accuracy_best.model]

        if best_accuracy - top_accuracy <= self.accuracy_tolerance:
            self.logger.info(f"AICc and CV accuracy agree on '{top.model}'")
            return top, None

        conflict = ModelSelectionConflict(
            aicc_best=top.model,
            accuracy_best=accuracy_best.model,
            aicc_best_accuracy=top_accuracy,
            best_accuracy=best_accuracy,
        )
        if self.strict:
            raise ModelSelectionConflictError(conflict.describe())
        self.logger.warning(f"Model selection conflict: {conflict.describe()}")
        return top, conflict

    def finalize(
        self,
        dataset: Dataset,
        spec: ModelSpecification
    ) -> Tuple[FittedClassifier, pd.DataFrame, pd.DataFrame]:
        """Refit ``spec`` on the whole dataset and tabulate its predictions."""
        self.logger.info(f"Refitting '{spec.label}' on {len(dataset)} observations")
        classifier = fit(dataset, spec)
        predictions = predict(classifier, dataset)

        actual = dataset.labels
        table = dataset.frame[list(spec.predictors)].copy()
        table['actual'] = actual
        table['probability'] = [p.probability for p in predictions]
        table['predicted'] = [p.label for p in predictions]
        table['correct'] = table['predicted'] == table['actual']

        summary = self.metrics_calculator.classification_summary(
            actual, table['predicted'].to_numpy(), classes=dataset.classes
        )
        return classifier, table, summary

    def select_and_finalize(
        self,
        dataset: Dataset,
        ranked_specs: Sequence[RankingRecord],
        cv_accuracies: Mapping[str, float]
    ) -> FinalModel:
        top, conflict = self.select(ranked_specs, cv_accuracies)
        classifier, predictions, summary = self.finalize(dataset, top.spec)
        return FinalModel(
            spec=top.spec,
            classifier=classifier,
            predictions=predictions,
            summary=summary,
            cv_accuracy=float(cv_accuracies[top.model]),
            conflict=conflict,
        )


def select_and_finalize(
    dataset: Dataset,
    ranked_specs: Sequence[RankingRecord],
    cv_accuracies: Mapping[str, float],
    accuracy_tolerance: float = 0.005,
    strict: bool = False
) -> FinalModel:
    """Choose the AICc-best specification, refit it and summarise its predictions."""
    selector = FinalModelSelector(accuracy_tolerance=accuracy_tolerance, strict=strict)
    return selector.select_and_finalize(dataset, ranked_specs, cv_accuracies)
