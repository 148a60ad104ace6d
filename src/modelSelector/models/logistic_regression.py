"""
二元逻辑回归（sklearn 包装，无正则化的最大似然估计）。
"""

from typing import Optional
import warnings
import numpy as np
from sklearn.linear_model import LogisticRegression
from sklearn.preprocessing import StandardScaler
from sklearn.exceptions import ConvergenceWarning
from sklearn.metrics import log_loss
from sklearn.utils.validation import check_X_y, check_array

from ..core.base import BaseModel
from ..core.exceptions import DegenerateTrainingSetError, SeparationError

# 拟合概率与 0 或 1 的距离小于该值时视为（准）完全分离
BOUNDARY_PROBABILITY = 1e-10


class LogisticRegressionClassifier(BaseModel):
    """
    对 sklearn LogisticRegression 的轻量封装，提供统一接口：
    - fit：无惩罚项的最大似然拟合（y 为 0/1，1 为正类）
    - predict_proba：正类概率
    - intercept_ / coef_：原始尺度上的系数
    - log_likelihood_：训练集对数似然

    预测变量在内部标准化后再求解，系数随后换算回原始尺度；
    似然函数对仿射变换不变，因此估计结果与直接拟合一致。
    """

    def __init__(
        self,
        solver: str = 'lbfgs',
        max_iter: int = 1000,
        tol: float = 1e-8,
        **kwargs
    ) -> None:
        super().__init__(
            "LogisticRegression", solver=solver, max_iter=max_iter, tol=tol, **kwargs
        )
        self.solver = solver
        self.max_iter = max_iter
        self.tol = tol

        self.model_: Optional[LogisticRegression] = None
        self.intercept_: Optional[float] = None
        self.coef_: Optional[np.ndarray] = None
        self.log_likelihood_: Optional[float] = None
        self.n_iter_: Optional[int] = None

    def fit(self, X: np.ndarray, y: np.ndarray) -> 'LogisticRegressionClassifier':
        X, y = check_X_y(X, y, dtype=float)
        y = y.astype(int)
        classes = np.unique(y)
        if len(classes) != 2:
            raise DegenerateTrainingSetError(
                f"Training data contains a single class ({classes.tolist()}); "
                "logistic regression needs both"
            )

        scaler = StandardScaler().fit(X)
        X_scaled = scaler.transform(X)

        # C=inf 即无惩罚项
        model = LogisticRegression(
            C=np.inf,
            solver=self.solver,
            max_iter=self.max_iter,
            tol=self.tol,
        )
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", ConvergenceWarning)
            model.fit(X_scaled, y)
        if any(issubclass(w.category, ConvergenceWarning) for w in caught):
            raise SeparationError(
                f"Solver did not converge within {self.max_iter} iterations "
                "(possible perfect separation)"
            )

        coef_scaled = model.coef_.ravel()
        self.coef_ = coef_scaled / scaler.scale_
        self.intercept_ = float(model.intercept_[0] - np.sum(coef_scaled * scaler.mean_ / scaler.scale_))
        self.model_ = model
        self.n_iter_ = int(np.max(model.n_iter_))

        proba = self.predict_proba(X)
        # 训练样本全部被严格正确分类 => 数据线性可分，MLE 不存在
        if np.all((proba > 0.5) == (y == 1)) and not np.any(proba == 0.5):
            raise SeparationError("Training data is perfectly separated; maximum-likelihood estimate does not exist")
        # 准完全分离：边界上的样本 p≈0.5，其余样本的拟合概率趋于 0 或 1
        if np.any((proba < BOUNDARY_PROBABILITY) | (proba > 1 - BOUNDARY_PROBABILITY)):
            raise SeparationError(
                "Fitted probabilities numerically 0 or 1 occurred (quasi-complete separation); "
                "maximum-likelihood estimate does not exist"
            )

        self.log_likelihood_ = -float(log_loss(y, proba, normalize=False, labels=[0, 1]))
        self.is_fitted = True
        return self

    def decision_function(self, X: np.ndarray) -> np.ndarray:
        if self.coef_ is None:
            raise ValueError("Model must be fitted before prediction")
        X = check_array(X, dtype=float)
        return self.intercept_ + X @ self.coef_

    def predict_proba(self, X: np.ndarray) -> np.ndarray:
        z = np.clip(self.decision_function(X), -500.0, 500.0)
        return 1.0 / (1.0 + np.exp(-z))
