"""
Classification metrics for held-out folds.
"""

from __future__ import annotations

import numpy as np
from sklearn.metrics import accuracy_score


def compute_accuracy(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Compute accuracy by exact-match comparison.

    Args:
        y_true: True labels.
        y_pred: Predicted labels, same domain as y_true.

    Returns:
        (# matches) / (# records), in [0, 1].
    """
    y_true = np.asarray(y_true)
    y_pred = np.asarray(y_pred)
    if len(y_true) != len(y_pred):
        raise ValueError(
            f"y_true and y_pred must have the same length: {len(y_true)} != {len(y_pred)}"
        )
    if len(y_true) == 0:
        raise ValueError("Cannot score an empty set of predictions")
    return float(accuracy_score(y_true, y_pred))
