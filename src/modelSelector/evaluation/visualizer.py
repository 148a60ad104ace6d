"""
Visualization utilities for modelSelector.

This module contains plots for cross-validation results, the final
classification summary and PCA.
"""

from typing import Optional, Union
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns
import pandas as pd
import numpy as np
from pathlib import Path

from ..utils.logger import get_logger


class ResultsVisualizer:
    """Visualizer for modelSelector results."""

    def __init__(self, style: str = "whitegrid", figsize: tuple = (8, 6)):
        self.style = style
        self.figsize = figsize
        self.logger = get_logger("ResultsVisualizer")

        # Set plotting style
        sns.set_style(style)

    def _save(self, fig, save_path: Optional[Union[str, Path]], what: str) -> None:
        if save_path:
            save_path = Path(save_path)
            save_path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(save_path, dpi=300, bbox_inches='tight')
            self.logger.info(f"{what} plot saved to {save_path}")
        plt.close(fig)

    def plot_cv_accuracy(self,
                         fold_accuracies: pd.DataFrame,
                         save_path: Optional[Union[str, Path]] = None) -> None:
        """Per-fold held-out accuracy for each specification, with the mean marked."""
        self.logger.info("Creating CV accuracy plot...")

        if fold_accuracies.empty:
            self.logger.warning("No fold accuracies to plot")
            return

        fig, ax = plt.subplots(figsize=self.figsize)
        sns.stripplot(data=fold_accuracies, x='model', y='accuracy', ax=ax,
                      color='gray', alpha=0.6, size=6, jitter=0.15)
        means = fold_accuracies.groupby('model', sort=False)['accuracy'].mean()
        ax.scatter(range(len(means)), means.values, color='darkorange', marker='D',
                   s=80, zorder=3, label='Mean accuracy')
        for x, value in enumerate(means.values):
            ax.text(x + 0.12, value, f"{value:.1%}", va='center', fontsize=10)

        ax.set_title('Cross-Validated Accuracy by Model', fontsize=14, fontweight='bold')
        ax.set_xlabel('Model')
        ax.set_ylabel('Held-out accuracy')
        ax.set_ylim(0, 1.05)
        ax.legend(loc='lower right')

        self._save(fig, save_path, "CV accuracy")

    def plot_classification_summary(self,
                                    summary: pd.DataFrame,
                                    save_path: Optional[Union[str, Path]] = None) -> None:
        """Stacked bars of correctly and incorrectly classified observations per class."""
        self.logger.info("Creating classification summary plot...")

        fig, ax = plt.subplots(figsize=self.figsize)
        classes = [str(c) for c in summary.index]
        ax.bar(classes, summary['correct'], color='seagreen', label='Correct')
        ax.bar(classes, summary['incorrect'], bottom=summary['correct'],
               color='indianred', label='Incorrect')
        for x, (_, row) in enumerate(summary.iterrows()):
            total = row['correct'] + row['incorrect']
            ax.text(x, total, f"{row['pct_correct']:.1f}%", ha='center', va='bottom')

        ax.set_title('Final Model Classification', fontsize=14, fontweight='bold')
        ax.set_ylabel('Observations')
        ax.legend()

        self._save(fig, save_path, "Classification summary")

    def plot_pca_scree(self,
                       explained_variance: pd.DataFrame,
                       save_path: Optional[Union[str, Path]] = None) -> None:
        """Variance explained per principal component."""
        self.logger.info("Creating PCA scree plot...")

        fig, ax = plt.subplots(figsize=self.figsize)
        sns.barplot(data=explained_variance, x='component', y='variance_ratio',
                    color='steelblue', ax=ax)
        ax.plot(range(len(explained_variance)), explained_variance['cumulative_ratio'],
                color='darkorange', marker='o', label='Cumulative')
        ax.set_xlabel('Principal component')
        ax.set_ylabel('Proportion of variance')
        ax.set_ylim(0, 1.05)
        ax.legend()

        self._save(fig, save_path, "PCA scree")

    def plot_pca_biplot(self,
                        scores: pd.DataFrame,
                        loadings: pd.DataFrame,
                        groups: Optional[pd.Series] = None,
                        save_path: Optional[Union[str, Path]] = None) -> None:
        """Scores on PC1/PC2 with variable loadings drawn as arrows."""
        self.logger.info("Creating PCA biplot...")

        if scores.shape[1] < 2:
            self.logger.warning("Biplot needs at least two components")
            return

        fig, ax = plt.subplots(figsize=self.figsize)
        hue = groups.reindex(scores.index) if groups is not None else None
        sns.scatterplot(x=scores.iloc[:, 0], y=scores.iloc[:, 1], hue=hue,
                        alpha=0.6, ax=ax)

        # 箭头按得分范围缩放
        score_range = np.abs(scores.iloc[:, :2].to_numpy()).max()
        scale = 0.8 * score_range / max(np.abs(loadings.iloc[:, :2].to_numpy()).max(), 1e-12)
        for variable, (x, y) in loadings.iloc[:, :2].iterrows():
            ax.arrow(0, 0, x * scale, y * scale, color='firebrick',
                     head_width=0.02 * score_range, length_includes_head=True)
            ax.text(x * scale * 1.1, y * scale * 1.1, variable, color='firebrick', fontsize=9)

        ax.set_xlabel(scores.columns[0])
        ax.set_ylabel(scores.columns[1])
        ax.set_title('PCA Biplot', fontsize=14, fontweight='bold')

        self._save(fig, save_path, "PCA biplot")
