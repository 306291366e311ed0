"""
L2-regularized Logistic Regression classifier.

Features are median-imputed and standardized on the training subset only.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from sklearn.impute import SimpleImputer
from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler

from repcv.config import LogisticRegressionConfig
from repcv.models.base import Classifier


class LogisticRegressionModel(Classifier):
    """Logistic regression with imputation and scaling."""

    def __init__(self, cfg: LogisticRegressionConfig | None = None):
        """Initialize model with config.

        Args:
            cfg: Configuration. Uses defaults if None.
        """
        self.cfg = cfg or LogisticRegressionConfig()
        self._model: Optional[Pipeline] = None

    def fit(self, X: np.ndarray, y: np.ndarray) -> LogisticRegressionModel:
        """Fit model on training data.

        Args:
            X: Feature matrix (n_samples, n_features).
            y: Labels; at least two distinct classes are required.
        """
        self._model = Pipeline([
            ("impute", SimpleImputer(strategy="median", keep_empty_features=True)),
            ("scale", StandardScaler()),
            ("logreg", LogisticRegression(
                C=self.cfg.C,
                max_iter=self.cfg.max_iter,
                random_state=self.cfg.random_seed,
            )),
        ])
        self._model.fit(X, y)
        return self

    def predict(self, X: np.ndarray) -> np.ndarray:
        """Predict the most probable class for each row."""
        self._check_fitted(self._model)
        return self._model.predict(X)
