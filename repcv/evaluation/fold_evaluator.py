"""
Fold evaluation: fit a fresh model on the training indices and score it
on the held-out indices.

Nothing is carried over between folds. Every failure to fit or score a
model is reported as a ModelFitError; whether that aborts the run is the
caller's decision.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from repcv.data.dataset import Dataset
from repcv.data.splitters import Fold, derive_seed
from repcv.errors import InvalidParameterError, ModelFitError
from repcv.evaluation.metrics import compute_accuracy
from repcv.models.factory import ModelSpecLike, build_model, resolve_model_spec


@dataclass(frozen=True)
class FoldResult:
    """Accuracy of one (train, held-out) pair.

    Created by the fold evaluator, consumed only by the aggregator.
    """

    repetition: int
    fold: int
    accuracy: float
    n_train: int
    n_test: int

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "repetition": self.repetition,
            "fold": self.fold,
            "accuracy": self.accuracy,
            "n_train": self.n_train,
            "n_test": self.n_test,
        }


def evaluate_fold(
    dataset: Dataset,
    train_indices: Sequence[int],
    test_indices: Sequence[int],
    model_spec: ModelSpecLike,
    random_seed: Optional[int] = None,
) -> float:
    """Fit on train_indices, score on test_indices.

    Args:
        dataset: Source dataset (read-only).
        train_indices: Records used to fit the model.
        test_indices: Held-out records to score.
        model_spec: Model family and hyperparameters; a fresh instance is
            built for this call.
        random_seed: Seed for the model's own randomness, if the family
            has one and model_spec does not fix it.

    Returns:
        Accuracy in [0, 1].

    Raises:
        InvalidParameterError: Bad indices or model spec.
        ModelFitError: Empty subsets, a single-class training subset, or
            any exception raised by the model while fitting or predicting.
    """
    spec = resolve_model_spec(model_spec)
    train_idx = dataset.take(train_indices)
    test_idx = dataset.take(test_indices)

    if len(np.intersect1d(train_idx, test_idx)) > 0:
        raise InvalidParameterError("Training and held-out indices overlap")
    if len(train_idx) == 0:
        raise ModelFitError("Training subset is empty")
    if len(test_idx) == 0:
        raise ModelFitError("Held-out subset is empty")

    present = np.unique(dataset.label_codes[train_idx])
    if len(present) < 2:
        raise ModelFitError(
            f"Training subset contains a single class "
            f"({dataset.classes[present[0]]!r}); cannot fit a classifier"
        )

    model = build_model(spec, random_seed=random_seed)

    try:
        model.fit(dataset.feature_matrix(train_idx), dataset.labels(train_idx))
    except Exception as exc:
        raise ModelFitError(
            f"{spec.name} failed to fit on {len(train_idx)} records: {exc}"
        ) from exc

    try:
        y_pred = np.asarray(model.predict(dataset.feature_matrix(test_idx)))
    except Exception as exc:
        raise ModelFitError(
            f"{spec.name} failed to predict {len(test_idx)} records: {exc}"
        ) from exc

    if len(y_pred) != len(test_idx):
        raise ModelFitError(
            f"{spec.name} returned {len(y_pred)} predictions for {len(test_idx)} records"
        )

    return compute_accuracy(dataset.labels(test_idx), y_pred)


def score_fold(dataset: Dataset, fold: Fold, model_spec: ModelSpecLike) -> FoldResult:
    """Evaluate one Fold and tag the result (or error) with its position.

    The model is seeded with a sub-seed of the repetition seed keyed by the
    fold index, so every fold of every repetition gets its own seed.
    """
    try:
        accuracy = evaluate_fold(
            dataset,
            fold.train_idx,
            fold.test_idx,
            model_spec,
            random_seed=derive_seed(fold.seed, fold.fold),
        )
    except ModelFitError as exc:
        exc.repetition = fold.repetition
        exc.fold = fold.fold
        raise
    return FoldResult(
        repetition=fold.repetition,
        fold=fold.fold,
        accuracy=accuracy,
        n_train=len(fold.train_idx),
        n_test=len(fold.test_idx),
    )
