"""
Evaluation metrics for modelSelector.

This module contains classification metrics for the final model.
"""

from typing import Any, Dict, Optional, Sequence
import numpy as np
import pandas as pd
from sklearn.metrics import (
    accuracy_score, precision_score, recall_score, f1_score,
    confusion_matrix
)

from ..utils.logger import get_logger


class MetricsCalculator:
    """Calculator for binary classification metrics."""

    def __init__(self):
        self.logger = get_logger("MetricsCalculator")

    def calculate_metrics(
        self,
        y_true: Sequence[Any],
        y_pred: Sequence[Any],
        positive_class: Any
    ) -> Dict[str, float]:
        """
        Calculate evaluation metrics for binary classification.

        Args:
            y_true: True labels
            y_pred: Predicted labels
            positive_class: Label treated as the positive class

        Returns:
            Dictionary of metrics
        """
        # 将标签转换为0和1
        y_true_binary = (np.asarray(y_true) == positive_class).astype(int)
        y_pred_binary = (np.asarray(y_pred) == positive_class).astype(int)

        metrics = {
            'accuracy': accuracy_score(y_true_binary, y_pred_binary),
            'precision': precision_score(y_true_binary, y_pred_binary, zero_division=0),
            'recall': recall_score(y_true_binary, y_pred_binary, zero_division=0),
            'f1': f1_score(y_true_binary, y_pred_binary, zero_division=0),
        }
        metrics['specificity'] = self._calculate_specificity(y_true_binary, y_pred_binary)
        metrics['balanced_accuracy'] = (metrics['recall'] + metrics['specificity']) / 2
        return {name: float(value) for name, value in metrics.items()}

    def _calculate_specificity(self, y_true: np.ndarray, y_pred: np.ndarray) -> float:
        """真阴性率。"""
        tn = np.sum((y_true == 0) & (y_pred == 0))
        fp = np.sum((y_true == 0) & (y_pred == 1))
        if tn + fp == 0:
            return 0.0
        return tn / (tn + fp)

    def confusion_matrix(
        self,
        y_true: Sequence[Any],
        y_pred: Sequence[Any],
        classes: Sequence[Any]
    ) -> pd.DataFrame:
        """Confusion matrix with true classes as rows and predictions as columns."""
        cm = confusion_matrix(np.asarray(y_true), np.asarray(y_pred), labels=list(classes))
        return pd.DataFrame(
            cm,
            index=pd.Index(list(classes), name='actual'),
            columns=pd.Index(list(classes), name='predicted'),
        )

    def classification_summary(
        self,
        y_true: Sequence[Any],
        y_pred: Sequence[Any],
        classes: Optional[Sequence[Any]] = None
    ) -> pd.DataFrame:
        """
        Correct and incorrect counts per true class.

        Returns:
            DataFrame indexed by class with columns correct, incorrect, pct_correct
        """
        y_true = np.asarray(y_true)
        y_pred = np.asarray(y_pred)
        if classes is None:
            classes = pd.unique(y_true)

        rows = []
        for cls in classes:
            in_class = y_true == cls
            correct = int(np.sum(in_class & (y_pred == cls)))
            incorrect = int(np.sum(in_class)) - correct
            total = correct + incorrect
            rows.append({
                'class': cls,
                'correct': correct,
                'incorrect': incorrect,
                'pct_correct': 100.0 * correct / total if total else float('nan'),
            })
        return pd.DataFrame(rows, columns=['class', 'correct', 'incorrect', 'pct_correct']).set_index('class')
