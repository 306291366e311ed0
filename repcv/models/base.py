"""
Model capability interface.

Cross-validation only needs two things from a model: fit it on a training
subset, and predict labels for held-out records. Any model family that
implements this interface can be plugged into the fold evaluator without
touching the partitioner or the aggregator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class Classifier(ABC):
    """Abstract base class for classifiers used in cross-validation.

    A fresh instance is built for every fold, so implementations may keep
    fitted state on ``self``.
    """

    @abstractmethod
    def fit(self, X: np.ndarray, y: np.ndarray) -> Classifier:
        """Fit the model on labeled data.

        Args:
            X: Encoded feature matrix of shape (n_samples, n_features).
                May contain NaN for missing values.
            y: Labels of shape (n_samples,), drawn from the dataset's classes.

        Returns:
            The fitted model (self).
        """

    @abstractmethod
    def predict(self, X: np.ndarray) -> np.ndarray:
        """Predict one label per row of X.

        Raises:
            RuntimeError: If the model has not been fitted.
        """

    def _check_fitted(self, fitted: object) -> None:
        if fitted is None:
            raise RuntimeError("Model has not been fitted. Call fit() first.")
