"""
Two-sample permutation test for a difference in means.

The group labels are shuffled (resampled without replacement) and the
difference in means recomputed for each shuffle, giving the null
distribution under exchangeability. This is not a partitioning scheme and
is never used to build cross-validation folds.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from repcv.errors import InvalidParameterError

ALTERNATIVES = ("two-sided", "greater", "less")


@dataclass(frozen=True, eq=False)
class PermutationTestResult:
    """Outcome of a permutation test.

    Attributes:
        observed: mean(group_a) - mean(group_b).
        p_value: (1 + #{as or more extreme}) / (1 + n_permutations).
        alternative: "two-sided", "greater" (a > b) or "less" (a < b).
        null_distribution: Statistic under each permutation.
    """

    observed: float
    p_value: float
    alternative: str
    null_distribution: np.ndarray

    @property
    def n_permutations(self) -> int:
        return len(self.null_distribution)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization (null summarized)."""
        return {
            "observed": self.observed,
            "p_value": self.p_value,
            "alternative": self.alternative,
            "n_permutations": self.n_permutations,
            "null_mean": float(np.mean(self.null_distribution)),
            "null_std": float(np.std(self.null_distribution)),
        }


def _as_group(values: Sequence[float], name: str) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1 or len(arr) == 0:
        raise InvalidParameterError(f"{name} must be a non-empty 1-dimensional sequence")
    if not np.all(np.isfinite(arr)):
        raise InvalidParameterError(f"{name} must be finite")
    return arr


def permutation_test(
    group_a: Sequence[float],
    group_b: Sequence[float],
    n_permutations: int = 10000,
    seed: int = 42,
    alternative: str = "two-sided",
) -> PermutationTestResult:
    """Test whether two groups differ in mean.

    Args:
        group_a: Values of the first group.
        group_b: Values of the second group.
        n_permutations: Number of label shuffles (>= 1).
        seed: Non-negative seed for the shuffles.
        alternative: "two-sided", "greater" or "less".

    Returns:
        PermutationTestResult. The +1 in numerator and denominator counts
        the observed labelling, so the p-value is never 0.
    """
    a = _as_group(group_a, "group_a")
    b = _as_group(group_b, "group_b")
    if alternative not in ALTERNATIVES:
        raise InvalidParameterError(
            f"alternative must be one of {ALTERNATIVES}, got {alternative!r}"
        )
    if n_permutations < 1:
        raise InvalidParameterError(f"n_permutations must be at least 1, got {n_permutations}")
    if seed < 0:
        raise InvalidParameterError(f"seed must be non-negative, got {seed}")

    pooled = np.concatenate([a, b])
    n_a = len(a)
    observed = float(a.mean() - b.mean())

    rng = np.random.default_rng(seed)
    null = np.empty(n_permutations, dtype=np.float64)
    for j in range(n_permutations):
        shuffled = rng.permutation(pooled)
        null[j] = shuffled[:n_a].mean() - shuffled[n_a:].mean()

    # Tolerance so ties with the observed statistic survive float rounding
    tol = 1e-12 * max(1.0, abs(observed))
    if alternative == "two-sided":
        extreme = np.abs(null) >= abs(observed) - tol
    elif alternative == "greater":
        extreme = null >= observed - tol
    else:
        extreme = null <= observed + tol

    p_value = (int(extreme.sum()) + 1) / (n_permutations + 1)
    return PermutationTestResult(
        observed=observed,
        p_value=float(p_value),
        alternative=alternative,
        null_distribution=null,
    )
