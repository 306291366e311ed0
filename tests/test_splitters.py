"""
Unit tests for partitioning and seed derivation.

Run:
    pytest tests/test_splitters.py -v
"""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from repcv.data import Dataset, build_folds, derive_seed, iter_folds, partition
from repcv.errors import InvalidParameterError


def _imbalanced_dataset(n_pos: int = 30, n_neg: int = 70) -> Dataset:
    frame = pd.DataFrame(
        {
            "x": np.arange(n_pos + n_neg, dtype=float),
            "y": ["pos"] * n_pos + ["neg"] * n_neg,
        }
    )
    return Dataset.from_frame(frame, label="y")


@pytest.mark.parametrize("stratified", [True, False])
@pytest.mark.parametrize("k", [2, 3, 5, 7, 10])
def test_partition_covers_every_index_once(balanced_dataset: Dataset, k: int, stratified: bool) -> None:
    n = balanced_dataset.n_records
    subsets = partition(balanced_dataset, k, random_seed=3, stratified=stratified)

    assert len(subsets) == k
    assert sum(len(s) for s in subsets) == n
    np.testing.assert_array_equal(np.sort(np.concatenate(subsets)), np.arange(n))
    for s in subsets:
        assert abs(len(s) - n / k) < 1.0


def test_stratified_partition_preserves_class_balance(balanced_dataset: Dataset) -> None:
    subsets = partition(balanced_dataset, 5, random_seed=0)

    for s in subsets:
        counts = balanced_dataset.class_counts(s)
        assert list(counts.values()) == [10, 10]


def test_stratified_partition_tracks_imbalanced_proportions() -> None:
    ds = _imbalanced_dataset(n_pos=30, n_neg=70)
    subsets = partition(ds, 10, random_seed=1)

    for s in subsets:
        assert len(s) == 10
        assert ds.class_counts(s) == {"neg": 7, "pos": 3}


@pytest.mark.parametrize("stratified", [True, False])
def test_leave_one_out_gives_singletons(stratified: bool) -> None:
    ds = _imbalanced_dataset(n_pos=4, n_neg=8)
    subsets = partition(ds, ds.n_records, random_seed=5, stratified=stratified)

    assert len(subsets) == ds.n_records
    assert all(len(s) == 1 for s in subsets)
    np.testing.assert_array_equal(np.sort(np.concatenate(subsets)), np.arange(ds.n_records))


def test_partition_rejects_bad_k(balanced_dataset: Dataset) -> None:
    with pytest.raises(InvalidParameterError):
        partition(balanced_dataset, 1, random_seed=0)
    with pytest.raises(InvalidParameterError):
        partition(balanced_dataset, balanced_dataset.n_records + 1, random_seed=0)
    with pytest.raises(InvalidParameterError):
        partition(balanced_dataset, 2.5, random_seed=0)


def test_partition_rejects_negative_seed(balanced_dataset: Dataset) -> None:
    with pytest.raises(InvalidParameterError):
        partition(balanced_dataset, 5, random_seed=-1)


def test_partition_is_pure(balanced_dataset: Dataset) -> None:
    first = partition(balanced_dataset, 5, random_seed=42)
    second = partition(balanced_dataset, 5, random_seed=42)
    other = partition(balanced_dataset, 5, random_seed=43)

    for a, b in zip(first, second):
        np.testing.assert_array_equal(a, b)
    assert any(not np.array_equal(a, b) for a, b in zip(first, other))


def test_derive_seed_is_deterministic_and_distinct() -> None:
    seeds = [derive_seed(42, r) for r in range(200)]

    assert seeds == [derive_seed(42, r) for r in range(200)]
    assert len(set(seeds)) == len(seeds)
    assert derive_seed(42, 0) != derive_seed(43, 0)


def test_derive_seed_rejects_negative_values() -> None:
    with pytest.raises(InvalidParameterError):
        derive_seed(-1, 0)
    with pytest.raises(InvalidParameterError):
        derive_seed(0, -1)


def test_iter_folds_train_is_complement_of_test(balanced_dataset: Dataset) -> None:
    subsets = partition(balanced_dataset, 4, random_seed=9)
    folds = list(iter_folds(subsets, repetition=2, seed=99))

    assert [f.fold for f in folds] == [0, 1, 2, 3]
    for fold in folds:
        assert fold.repetition == 2
        assert fold.seed == 99
        assert len(np.intersect1d(fold.train_idx, fold.test_idx)) == 0
        np.testing.assert_array_equal(
            np.sort(np.concatenate([fold.train_idx, fold.test_idx])),
            np.arange(balanced_dataset.n_records),
        )


def test_build_folds_orders_and_reseeds_repetitions(balanced_dataset: Dataset) -> None:
    folds = build_folds(balanced_dataset, k=5, repetitions=3, base_seed=42)

    assert len(folds) == 15
    assert [(f.repetition, f.fold) for f in folds] == [(r, k) for r in range(3) for k in range(5)]
    assert folds[0].seed == derive_seed(42, 0)
    assert folds[5].seed == derive_seed(42, 1)
    # Independent partitions per repetition
    assert not np.array_equal(folds[0].test_idx, folds[5].test_idx)


def test_build_folds_rejects_zero_repetitions(balanced_dataset: Dataset) -> None:
    with pytest.raises(InvalidParameterError):
        build_folds(balanced_dataset, k=5, repetitions=0, base_seed=0)
