"""
Aggregation of fold accuracies into a point estimate and an interval.

The default interval is the normal approximation mean ± z·std.
Accuracy is bounded in [0, 1] and can be skewed when folds
are small, so the normal interval is a known simplification; a percentile
interval over the raw samples is available as ``method="percentile"`` with
the same nominal coverage.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
from scipy.stats import norm

from repcv.errors import InsufficientDataError, InvalidParameterError

INTERVAL_METHODS = ("normal", "percentile")


@dataclass(frozen=True)
class EstimateReport:
    """Immutable summary of an accuracy sample collection.

    Attributes:
        mean: Arithmetic mean of the samples.
        std: Sample standard deviation (n - 1 denominator).
        sem: Standard error of the mean, std / sqrt(n).
        lower: Lower interval bound.
        upper: Upper interval bound.
        confidence_z: Confidence multiplier z (1.96 ~ 95%).
        method: "normal" or "percentile".
        n_samples: Number of samples summarized.
        samples: The raw samples, in the order given.
    """

    mean: float
    std: float
    sem: float
    lower: float
    upper: float
    confidence_z: float
    method: str
    n_samples: int
    samples: Tuple[float, ...]

    @property
    def interval(self) -> Tuple[float, float]:
        return (self.lower, self.upper)

    @property
    def coverage(self) -> float:
        """Nominal two-sided coverage implied by confidence_z."""
        return nominal_coverage(self.confidence_z)

    def contains(self, value: float) -> bool:
        """Whether value lies inside the closed interval."""
        return self.lower <= value <= self.upper

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "mean": self.mean,
            "std": self.std,
            "sem": self.sem,
            "lower": self.lower,
            "upper": self.upper,
            "confidence_z": self.confidence_z,
            "coverage": self.coverage,
            "method": self.method,
            "n_samples": self.n_samples,
            "samples": list(self.samples),
        }

    def format(self) -> str:
        return (
            f"mean={self.mean:.4f} std={self.std:.4f} "
            f"[{self.lower:.4f}, {self.upper:.4f}] "
            f"({self.method}, z={self.confidence_z:g}, n={self.n_samples})"
        )


def _validate_z(confidence_z: float) -> float:
    try:
        z = float(confidence_z)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"confidence_z must be a number, got {confidence_z!r}") from exc
    if not math.isfinite(z) or z <= 0:
        raise InvalidParameterError(f"confidence_z must be positive and finite, got {confidence_z}")
    return z


def _as_samples(samples: Sequence[float]) -> np.ndarray:
    arr = np.asarray(samples, dtype=np.float64)
    if arr.ndim != 1:
        raise InvalidParameterError(f"samples must be 1-dimensional, got shape {arr.shape}")
    if len(arr) < 2:
        raise InsufficientDataError(
            f"At least 2 samples are needed to estimate a standard deviation, got {len(arr)}"
        )
    if not np.all(np.isfinite(arr)):
        raise InvalidParameterError("samples must all be finite")
    return arr


def nominal_coverage(confidence_z: float) -> float:
    """Two-sided normal coverage 2·Φ(z) − 1 (0.95 for z = 1.96)."""
    z = _validate_z(confidence_z)
    return float(2.0 * norm.cdf(z) - 1.0)


def standard_error(samples: Sequence[float]) -> float:
    """Standard error of the mean: sample std / sqrt(n)."""
    arr = _as_samples(samples)
    return float(np.std(arr, ddof=1) / math.sqrt(len(arr)))


def percentile_interval(samples: Sequence[float], confidence_z: float = 1.96) -> Tuple[float, float]:
    """Empirical quantile interval with the coverage implied by confidence_z."""
    arr = _as_samples(samples)
    coverage = nominal_coverage(confidence_z)
    lo, hi = np.quantile(arr, [(1.0 - coverage) / 2.0, (1.0 + coverage) / 2.0])
    return float(lo), float(hi)


def summarize(
    samples: Sequence[float],
    confidence_z: float = 1.96,
    method: str = "normal",
) -> EstimateReport:
    """Summarize accuracy samples into an EstimateReport.

    Args:
        samples: Accuracy values, at least two.
        confidence_z: Confidence multiplier z > 0.
        method: "normal" for mean ± z·std (normal approximation, not
            guaranteed coverage), or "percentile" for empirical quantiles.

    Returns:
        EstimateReport. Pure: identical inputs give identical reports.

    Raises:
        InsufficientDataError: Fewer than 2 samples.
        InvalidParameterError: Non-positive z, unknown method, or
            non-finite samples.
    """
    z = _validate_z(confidence_z)
    if method not in INTERVAL_METHODS:
        raise InvalidParameterError(
            f"method must be one of {INTERVAL_METHODS}, got {method!r}"
        )
    arr = _as_samples(samples)

    mean = float(np.mean(arr))
    std = float(np.std(arr, ddof=1))
    sem = std / math.sqrt(len(arr))

    if method == "normal":
        lower, upper = mean - z * std, mean + z * std
    else:
        lower, upper = percentile_interval(arr, z)

    return EstimateReport(
        mean=mean,
        std=std,
        sem=sem,
        lower=float(lower),
        upper=float(upper),
        confidence_z=z,
        method=method,
        n_samples=len(arr),
        samples=tuple(float(s) for s in arr),
    )
