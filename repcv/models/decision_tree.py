"""
CART decision tree classifier.

Missing feature values are median-imputed from the training subset before
the tree is grown.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from sklearn.impute import SimpleImputer
from sklearn.pipeline import Pipeline
from sklearn.tree import DecisionTreeClassifier

from repcv.config import DecisionTreeConfig
from repcv.models.base import Classifier


class DecisionTreeModel(Classifier):
    """sklearn DecisionTreeClassifier behind a median imputer."""

    def __init__(self, cfg: DecisionTreeConfig | None = None) -> None:
        self.cfg = cfg or DecisionTreeConfig()
        self._model: Optional[Pipeline] = None

    def _build(self) -> Pipeline:
        return Pipeline([
            ("impute", SimpleImputer(strategy="median", keep_empty_features=True)),
            ("tree", DecisionTreeClassifier(
                criterion=self.cfg.criterion,
                max_depth=self.cfg.max_depth,
                min_samples_leaf=self.cfg.min_samples_leaf,
                random_state=self.cfg.random_seed,
            )),
        ])

    def fit(self, X: np.ndarray, y: np.ndarray) -> DecisionTreeModel:
        self._model = self._build()
        self._model.fit(X, y)
        return self

    def predict(self, X: np.ndarray) -> np.ndarray:
        self._check_fitted(self._model)
        return self._model.predict(X)
