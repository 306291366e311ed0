from __future__ import annotations

import numpy as np
import pytest

import repcv.evaluation.fold_evaluator as fold_evaluator
from repcv.data import Dataset, build_folds, derive_seed, iter_folds, partition
from repcv.errors import InvalidParameterError, ModelFitError
from repcv.evaluation import evaluate_fold, score_fold
from repcv.models.base import Classifier


class _ExplodingModel(Classifier):
    def fit(self, X, y):
        raise ValueError("boom")

    def predict(self, X):
        raise AssertionError("never called")


def test_majority_baseline_scores_half_on_balanced_folds(balanced_dataset: Dataset) -> None:
    subsets = partition(balanced_dataset, 5, random_seed=0)

    for fold in iter_folds(subsets):
        acc = evaluate_fold(balanced_dataset, fold.train_idx, fold.test_idx, "majority")
        assert acc == pytest.approx(0.5)


def test_accuracy_is_a_fraction(separable_dataset: Dataset) -> None:
    subsets = partition(separable_dataset, 5, random_seed=1)
    fold = next(iter_folds(subsets))

    acc = evaluate_fold(
        separable_dataset,
        fold.train_idx,
        fold.test_idx,
        {"name": "decision_tree", "params": {"max_depth": 3}},
    )

    assert 0.0 <= acc <= 1.0
    assert acc > 0.7


def test_single_class_training_subset_fails(balanced_dataset: Dataset) -> None:
    codes = balanced_dataset.label_codes
    train = np.flatnonzero(codes == 0)[:20]
    test = np.flatnonzero(codes == 1)[:5]

    with pytest.raises(ModelFitError, match="single class"):
        evaluate_fold(balanced_dataset, train, test, "majority")


def test_empty_held_out_subset_fails(balanced_dataset: Dataset) -> None:
    with pytest.raises(ModelFitError, match="empty"):
        evaluate_fold(balanced_dataset, np.arange(50), [], "majority")


def test_overlapping_indices_are_rejected(balanced_dataset: Dataset) -> None:
    with pytest.raises(InvalidParameterError, match="overlap"):
        evaluate_fold(balanced_dataset, np.arange(60), np.arange(50, 70), "majority")


def test_model_exceptions_are_wrapped(balanced_dataset: Dataset, monkeypatch) -> None:
    monkeypatch.setattr(
        fold_evaluator, "build_model", lambda spec, random_seed=None: _ExplodingModel()
    )

    with pytest.raises(ModelFitError, match="failed to fit") as excinfo:
        evaluate_fold(balanced_dataset, np.arange(80), np.arange(80, 100), "majority")

    assert isinstance(excinfo.value.__cause__, ValueError)


def test_each_call_builds_a_fresh_model(balanced_dataset: Dataset, monkeypatch) -> None:
    built = []
    real_build = fold_evaluator.build_model

    def counting_build(spec, random_seed=None):
        model = real_build(spec, random_seed=random_seed)
        built.append(model)
        return model

    monkeypatch.setattr(fold_evaluator, "build_model", counting_build)
    subsets = partition(balanced_dataset, 4, random_seed=2)
    for fold in iter_folds(subsets):
        evaluate_fold(balanced_dataset, fold.train_idx, fold.test_idx, "majority")

    assert len(built) == 4
    assert len({id(m) for m in built}) == 4


def test_score_fold_tags_results_and_errors(balanced_dataset: Dataset) -> None:
    subsets = partition(balanced_dataset, 5, random_seed=0)
    fold = list(iter_folds(subsets, repetition=3))[2]

    result = score_fold(balanced_dataset, fold, "majority")
    assert (result.repetition, result.fold) == (3, 2)
    assert result.n_train == 80 and result.n_test == 20

    codes = balanced_dataset.label_codes
    bad = fold.__class__(
        repetition=1, fold=4, seed=0,
        train_idx=np.flatnonzero(codes == 0), test_idx=np.flatnonzero(codes == 1),
    )
    with pytest.raises(ModelFitError) as excinfo:
        score_fold(balanced_dataset, bad, "majority")
    assert (excinfo.value.repetition, excinfo.value.fold) == (1, 4)


def test_each_fold_seeds_its_own_model(balanced_dataset: Dataset, monkeypatch) -> None:
    seeds = []
    real_build = fold_evaluator.build_model

    def recording_build(spec, random_seed=None):
        seeds.append(random_seed)
        return real_build(spec, random_seed=random_seed)

    monkeypatch.setattr(fold_evaluator, "build_model", recording_build)
    folds = build_folds(balanced_dataset, k=4, repetitions=2, base_seed=13)
    for fold in folds:
        score_fold(balanced_dataset, fold, "decision_tree")

    assert seeds == [derive_seed(f.seed, f.fold) for f in folds]
    assert len(set(seeds)) == 8
