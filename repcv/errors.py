"""
Exception taxonomy for the cross-validation estimator.

All errors are fatal to the enclosing call. Fold-level failures are
collected by the repetition driver and re-raised together as a
CrossValidationRunError so the caller can see which (repetition, fold)
pairs failed and why.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


class RepcvError(Exception):
    """Base class for all repcv errors."""


class InvalidParameterError(RepcvError, ValueError):
    """Malformed k, repetitions, confidence multiplier, seed or schema."""


class InsufficientDataError(RepcvError, ValueError):
    """Too few accuracy samples to summarize (standard deviation needs n >= 2)."""


class ModelFitError(RepcvError, RuntimeError):
    """A model could not be fit or scored on a fold.

    Attributes:
        repetition: Repetition index, if known.
        fold: Fold index within the repetition, if known.
    """

    def __init__(
        self,
        message: str,
        repetition: Optional[int] = None,
        fold: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.repetition = repetition
        self.fold = fold


@dataclass(frozen=True)
class FoldFailure:
    """One failed fold evaluation."""

    repetition: int
    fold: int
    error: BaseException

    def describe(self) -> str:
        return (
            f"repetition={self.repetition} fold={self.fold}: "
            f"{type(self.error).__name__}: {self.error}"
        )


class CrossValidationRunError(RepcvError, RuntimeError):
    """One or more folds failed during a repeated cross-validation run."""

    def __init__(self, failures: List[FoldFailure], n_scheduled: int) -> None:
        self.failures = sorted(failures, key=lambda f: (f.repetition, f.fold))
        self.n_scheduled = n_scheduled
        lines = [f.describe() for f in self.failures]
        super().__init__(
            f"{len(self.failures)} of {n_scheduled} fold evaluations failed:\n  "
            + "\n  ".join(lines)
        )

    @property
    def failed_folds(self) -> List[tuple[int, int]]:
        """(repetition, fold) pairs that failed, in order."""
        return [(f.repetition, f.fold) for f in self.failures]
