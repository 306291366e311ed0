"""Always-predict-the-majority-class baseline."""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from repcv.models.base import Classifier


class MajorityClassModel(Classifier):
    """Predicts the most frequent training label for every record.

    Ties go to the first label in sorted order, so the baseline is
    deterministic.
    """

    def __init__(self) -> None:
        self._label: Optional[Any] = None

    def fit(self, X: np.ndarray, y: np.ndarray) -> MajorityClassModel:
        y = np.asarray(y)
        if len(y) == 0:
            raise ValueError("Cannot fit on an empty training set")
        labels, counts = np.unique(y, return_counts=True)
        self._label = labels[np.argmax(counts)]
        return self

    def predict(self, X: np.ndarray) -> np.ndarray:
        self._check_fitted(self._label)
        return np.repeat(np.asarray([self._label]), len(X))
