"""
Experiment runners.

This module provides:
- run_repeated_cv: repeated k-fold cross-validation, one accuracy per fold
- cross_validate: config-driven run plus summary
"""

from repcv.experiments.repeated_cv import (
    AccuracySamples,
    CrossValidationReport,
    cross_validate,
    run_repeated_cv,
)

__all__ = [
    "AccuracySamples",
    "CrossValidationReport",
    "cross_validate",
    "run_repeated_cv",
]
