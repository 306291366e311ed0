"""
XGBoost classifier wrapper.

Labels are encoded to 0..C-1 on the training subset and decoded again on
prediction, so any hashable label domain works. Binary or multi-class
objective is picked by xgboost from the number of training classes.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import xgboost as xgb
from sklearn.model_selection import train_test_split
from sklearn.preprocessing import LabelEncoder

from repcv.config import XGBoostConfig
from repcv.models.base import Classifier


class XGBoostModel(Classifier):
    """XGBoost classifier wrapper.

    Uses early stopping with a stratified validation split when the
    training subset is large enough; otherwise trains for the full
    number of rounds. Missing values are handled natively by xgboost.
    """

    def __init__(self, cfg: XGBoostConfig | None = None) -> None:
        self.cfg = cfg or XGBoostConfig()
        self._model: xgb.XGBClassifier | None = None
        self._encoder: Optional[LabelEncoder] = None

    def _can_early_stop(self, y_enc: np.ndarray) -> bool:
        return (
            self.cfg.early_stopping_rounds is not None
            and self.cfg.validation_fraction > 0
            and len(y_enc) > 50
            and np.bincount(y_enc).min() >= 2
        )

    def fit(self, X: np.ndarray, y: np.ndarray) -> XGBoostModel:
        """Train the model, with early stopping when there is enough data.

        Args:
            X: Feature matrix of shape (n_samples, n_features).
            y: Labels of shape (n_samples,).
        """
        self._encoder = LabelEncoder()
        y_enc = self._encoder.fit_transform(y)

        self._model = xgb.XGBClassifier(
            n_estimators=self.cfg.n_estimators,
            max_depth=self.cfg.max_depth,
            learning_rate=self.cfg.learning_rate,
            subsample=self.cfg.subsample,
            colsample_bytree=self.cfg.colsample_bytree,
            random_state=self.cfg.random_seed,
            n_jobs=1,
            verbosity=0,
        )

        if self._can_early_stop(y_enc):
            X_train, X_val, y_train, y_val = train_test_split(
                X, y_enc,
                test_size=self.cfg.validation_fraction,
                random_state=self.cfg.random_seed,
                stratify=y_enc,
            )
            self._model.set_params(early_stopping_rounds=self.cfg.early_stopping_rounds)
            self._model.fit(
                X_train, y_train,
                eval_set=[(X_val, y_val)],
                verbose=False,
            )
        else:
            # Not enough data for split, train without early stopping
            self._model.fit(X, y_enc)
        return self

    def predict(self, X: np.ndarray) -> np.ndarray:
        """Predict labels in the original label domain.

        Raises:
            RuntimeError: If model has not been fitted.
        """
        self._check_fitted(self._model)
        return self._encoder.inverse_transform(self._model.predict(X).astype(int))
