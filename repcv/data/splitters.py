"""
Splitting utilities for repeated k-fold cross-validation.

Implements:
- Seed derivation: one independent sub-seed per repetition from a base seed
- Stratified k-fold partition (round-robin dealing within classes)
- Plain shuffled k-fold partition (sklearn KFold)
- Fold records (train = complement of each held-out subset)

Every function here is pure: the same dataset, k and seed always give the
same partition. Label permutation for hypothesis testing is a different
procedure and lives in repcv.resampling.permutation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Sequence

import numpy as np
from sklearn.model_selection import KFold

from repcv.data.dataset import Dataset
from repcv.errors import InvalidParameterError


@dataclass(frozen=True, eq=False)
class Fold:
    """One (train, held-out) pair of a partition.

    Stores indices rather than data; the Dataset is looked up lazily.
    """

    repetition: int
    fold: int
    seed: int
    train_idx: np.ndarray
    test_idx: np.ndarray

    @property
    def key(self) -> str:
        """Human-readable key like "rep=3|fold=1"."""
        return f"rep={self.repetition}|fold={self.fold}"


def _validate_seed(seed: int, name: str) -> None:
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise InvalidParameterError(f"{name} must be an integer, got {seed!r}")
    if seed < 0:
        raise InvalidParameterError(f"{name} must be non-negative, got {seed}")


def validate_k(k: int, n_records: int) -> None:
    """Raise InvalidParameterError unless 2 <= k <= n_records."""
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise InvalidParameterError(f"k must be an integer, got {k!r}")
    if k < 2:
        raise InvalidParameterError(f"k must be at least 2, got {k}")
    if k > n_records:
        raise InvalidParameterError(
            f"k={k} cannot exceed the number of records ({n_records})"
        )


def derive_seed(base_seed: int, repetition: int) -> int:
    """Derive the seed of one repetition from the run's base seed.

    Uses numpy's SeedSequence spawn keys, so sub-seeds of different
    repetitions are statistically independent and never share a generator.

    Args:
        base_seed: Non-negative base seed of the run.
        repetition: Repetition index (>= 0).

    Returns:
        32-bit unsigned integer seed.
    """
    _validate_seed(base_seed, "base_seed")
    _validate_seed(repetition, "repetition")
    seq = np.random.SeedSequence(int(base_seed), spawn_key=(int(repetition),))
    return int(seq.generate_state(1, dtype=np.uint32)[0])


def _stratified_subsets(codes: np.ndarray, k: int, rng: np.random.Generator) -> List[np.ndarray]:
    """Deal records to k subsets class by class.

    Records are shuffled within their class and laid out one class after
    another; position i goes to subset i % k. Subset sizes therefore differ
    by at most one and each class is spread as evenly as possible.
    """
    order = np.concatenate(
        [rng.permutation(np.flatnonzero(codes == c)) for c in np.unique(codes)]
    )
    assignment = np.empty(len(codes), dtype=np.intp)
    assignment[order] = np.arange(len(codes)) % k
    return [np.flatnonzero(assignment == i) for i in range(k)]


def partition(
    dataset: Dataset,
    k: int,
    random_seed: int,
    stratified: bool = True,
) -> List[np.ndarray]:
    """Split record indices into k disjoint held-out subsets.

    Args:
        dataset: Dataset to partition.
        k: Number of subsets, 2 <= k <= number of records.
        random_seed: Non-negative seed; the partition is a pure function of it.
        stratified: Preserve class proportions in every subset.

    Returns:
        List of k sorted index arrays covering [0, n) exactly once.

    Raises:
        InvalidParameterError: If k or random_seed is out of range.
    """
    n = dataset.n_records
    validate_k(k, n)
    _validate_seed(random_seed, "random_seed")

    if stratified:
        rng = np.random.default_rng(int(random_seed))
        return _stratified_subsets(dataset.label_codes, int(k), rng)

    kf = KFold(n_splits=int(k), shuffle=True, random_state=int(random_seed))
    return [np.sort(test_idx) for _, test_idx in kf.split(np.arange(n))]


def iter_folds(
    subsets: Sequence[np.ndarray],
    repetition: int = 0,
    seed: int = 0,
) -> Iterator[Fold]:
    """Yield one Fold per subset, training on all the other subsets."""
    for fold_id, test_idx in enumerate(subsets):
        others = [s for i, s in enumerate(subsets) if i != fold_id]
        train_idx = np.sort(np.concatenate(others)) if others else np.array([], dtype=np.intp)
        yield Fold(
            repetition=repetition,
            fold=fold_id,
            seed=seed,
            train_idx=train_idx,
            test_idx=test_idx,
        )


def build_folds(
    dataset: Dataset,
    k: int,
    repetitions: int,
    base_seed: int,
    stratified: bool = True,
) -> List[Fold]:
    """Build every fold of a repeated k-fold run, in (repetition, fold) order.

    Args:
        dataset: Dataset to partition.
        k: Number of folds per repetition.
        repetitions: Number of independently randomized partitions.
        base_seed: Seed from which each repetition's seed is derived.
        stratified: Use class-stratified partitions.

    Returns:
        List of k * repetitions Fold objects.
    """
    if isinstance(repetitions, bool) or not isinstance(repetitions, (int, np.integer)):
        raise InvalidParameterError(f"repetitions must be an integer, got {repetitions!r}")
    if repetitions < 1:
        raise InvalidParameterError(f"repetitions must be at least 1, got {repetitions}")

    folds: List[Fold] = []
    for repetition in range(repetitions):
        rep_seed = derive_seed(base_seed, repetition)
        subsets = partition(dataset, k, rep_seed, stratified=stratified)
        folds.extend(iter_folds(subsets, repetition=repetition, seed=rep_seed))
    return folds
