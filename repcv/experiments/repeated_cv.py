"""
Repeated k-fold cross-validation driver.

For each repetition r:
- seed_r = derive_seed(base_seed, r)
- partition the dataset once with seed_r
- fit/score a fresh model on every fold of that partition

Fold results are returned in (repetition, fold) order whatever order they
finish in. Any fold failure fails the whole run: no partial collection is
returned, because averaging only over the folds that worked would bias the
estimate.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from tqdm import tqdm

from repcv.config import CrossValidationConfig
from repcv.data.dataset import Dataset
from repcv.data.splitters import Fold, build_folds, derive_seed
from repcv.errors import (
    CrossValidationRunError,
    FoldFailure,
    InvalidParameterError,
    ModelFitError,
)
from repcv.evaluation.fold_evaluator import FoldResult, score_fold
from repcv.evaluation.summary import EstimateReport, summarize
from repcv.models.factory import ModelSpecLike, resolve_model_spec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccuracySamples:
    """All fold accuracies of a run, in (repetition, fold) order.

    The order carries no statistical meaning beyond exchangeability.
    """

    results: Tuple[FoldResult, ...]
    n_folds: int
    n_repetitions: int
    base_seed: int
    seeds: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.results)

    @property
    def accuracies(self) -> np.ndarray:
        """Accuracy of every fold, length n_folds * n_repetitions."""
        return np.array([r.accuracy for r in self.results], dtype=np.float64)

    def repetition_means(self) -> np.ndarray:
        """Mean accuracy of each repetition (one k-fold estimate per repetition)."""
        return self.accuracies.reshape(self.n_repetitions, self.n_folds).mean(axis=1)

    def to_frame(self) -> pd.DataFrame:
        """One row per fold, with the repetition seed."""
        frame = pd.DataFrame([r.to_dict() for r in self.results])
        frame["seed"] = [self.seeds[r.repetition] for r in self.results]
        return frame


@dataclass(frozen=True)
class CrossValidationReport:
    """Samples and their summary from one cross_validate() call."""

    samples: AccuracySamples
    estimate: EstimateReport
    config: CrossValidationConfig

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "config": self.config.model_dump(),
            "estimate": self.estimate.to_dict(),
            "repetition_means": self.samples.repetition_means().tolist(),
            "folds": [r.to_dict() for r in self.samples.results],
        }


def _run_sequential(
    dataset: Dataset,
    folds: Sequence[Fold],
    spec: ModelSpecLike,
    fail_fast: bool,
    show_progress: bool,
) -> Tuple[List[FoldResult], List[FoldFailure]]:
    results: List[FoldResult] = []
    failures: List[FoldFailure] = []

    iterator = tqdm(folds, desc="CV folds") if show_progress else folds
    for fold in iterator:
        try:
            results.append(score_fold(dataset, fold, spec))
        except ModelFitError as exc:
            logger.warning("Fold %s failed: %s", fold.key, exc)
            failures.append(FoldFailure(fold.repetition, fold.fold, exc))
            if fail_fast:
                break

    return results, failures


def _run_threaded(
    dataset: Dataset,
    folds: Sequence[Fold],
    spec: ModelSpecLike,
    n_jobs: int,
    fail_fast: bool,
    show_progress: bool,
) -> Tuple[List[FoldResult], List[FoldFailure]]:
    results: List[FoldResult] = []
    failures: List[FoldFailure] = []
    progress = tqdm(total=len(folds), desc="CV folds") if show_progress else None

    try:
        with ThreadPoolExecutor(max_workers=n_jobs) as executor:
            futures = {
                executor.submit(score_fold, dataset, fold, spec): fold
                for fold in folds
            }
            # Barrier: every future is drained before returning
            for future in as_completed(futures):
                if future.cancelled():
                    continue
                fold = futures[future]
                if progress is not None:
                    progress.update(1)
                try:
                    results.append(future.result())
                except ModelFitError as exc:
                    logger.warning("Fold %s failed: %s", fold.key, exc)
                    failures.append(FoldFailure(fold.repetition, fold.fold, exc))
                    if fail_fast:
                        n_cancelled = sum(f.cancel() for f in futures)
                        if n_cancelled:
                            logger.info("Cancelled %d pending fold evaluations", n_cancelled)
    finally:
        if progress is not None:
            progress.close()

    return results, failures


def run_repeated_cv(
    dataset: Dataset,
    k: int,
    repetitions: int,
    model_spec: ModelSpecLike,
    base_seed: int,
    *,
    stratified: bool = True,
    n_jobs: int = 1,
    fail_fast: bool = True,
    show_progress: bool = False,
) -> AccuracySamples:
    """Run k-fold cross-validation `repetitions` times.

    Args:
        dataset: Dataset to evaluate on (read-only).
        k: Folds per repetition, 2 <= k <= number of records.
        repetitions: Number of independently randomized partitions (>= 1).
        model_spec: Model family and hyperparameters; a fresh model is built
            for every fold.
        base_seed: Non-negative seed; each repetition's seed is derived from
            it, so identical arguments give identical results.
        stratified: Use class-stratified partitions.
        n_jobs: Worker threads for fold evaluation (1 = sequential).
        fail_fast: Stop scheduling (and cancel pending) evaluations after
            the first failure. If False, every fold is attempted so the
            error lists all failing folds.
        show_progress: Whether to show a progress bar.

    Returns:
        AccuracySamples of length k * repetitions.

    Raises:
        InvalidParameterError: Malformed k, repetitions, seed, n_jobs or spec.
        CrossValidationRunError: One or more folds failed; lists each
            failed (repetition, fold) and its cause.
    """
    if isinstance(n_jobs, bool) or not isinstance(n_jobs, int) or n_jobs < 1:
        raise InvalidParameterError(f"n_jobs must be a positive integer, got {n_jobs!r}")

    spec = resolve_model_spec(model_spec)
    folds = build_folds(dataset, k, repetitions, base_seed, stratified=stratified)
    seeds = tuple(derive_seed(base_seed, r) for r in range(repetitions))

    logger.info(
        "Repeated CV: model=%s k=%d repetitions=%d records=%d base_seed=%d n_jobs=%d",
        spec.name, k, repetitions, dataset.n_records, base_seed, n_jobs,
    )

    if n_jobs == 1:
        results, failures = _run_sequential(dataset, folds, spec, fail_fast, show_progress)
    else:
        results, failures = _run_threaded(
            dataset, folds, spec, n_jobs, fail_fast, show_progress
        )

    if failures:
        logger.error("%d of %d fold evaluations failed", len(failures), len(folds))
        raise CrossValidationRunError(failures, n_scheduled=len(folds))

    results.sort(key=lambda r: (r.repetition, r.fold))
    return AccuracySamples(
        results=tuple(results),
        n_folds=int(k),
        n_repetitions=int(repetitions),
        base_seed=int(base_seed),
        seeds=seeds,
    )


def cross_validate(
    dataset: Dataset,
    cfg: Optional[CrossValidationConfig] = None,
) -> CrossValidationReport:
    """Run repeated cross-validation from config and summarize the accuracies.

    Args:
        dataset: Dataset to evaluate on.
        cfg: Run configuration. Uses defaults if None.

    Returns:
        CrossValidationReport with the fold samples and the estimate.
    """
    cfg = cfg or CrossValidationConfig()
    samples = run_repeated_cv(
        dataset,
        k=cfg.n_folds,
        repetitions=cfg.n_repetitions,
        model_spec=cfg.model,
        base_seed=cfg.base_seed,
        stratified=cfg.stratified,
        n_jobs=cfg.n_jobs,
        fail_fast=cfg.fail_fast,
        show_progress=cfg.show_progress,
    )
    estimate = summarize(
        samples.accuracies,
        confidence_z=cfg.confidence_z,
        method=cfg.interval_method,
    )
    logger.info("Accuracy estimate: %s", estimate.format())
    return CrossValidationReport(samples=samples, estimate=estimate, config=cfg)
