"""
repcv: repeated k-fold cross-validation accuracy estimates.

Partition -> fit/score each fold -> repeat with independent seeds ->
summarize into a mean and an interval.
"""

from repcv.config import CrossValidationConfig, ModelSpec
from repcv.data import Dataset, FeatureSpec, partition
from repcv.errors import (
    CrossValidationRunError,
    InsufficientDataError,
    InvalidParameterError,
    ModelFitError,
)
from repcv.evaluation import EstimateReport, evaluate_fold, summarize
from repcv.experiments import AccuracySamples, cross_validate, run_repeated_cv

__version__ = "0.1.0"

__all__ = [
    "AccuracySamples",
    "CrossValidationConfig",
    "CrossValidationRunError",
    "Dataset",
    "EstimateReport",
    "FeatureSpec",
    "InsufficientDataError",
    "InvalidParameterError",
    "ModelFitError",
    "ModelSpec",
    "cross_validate",
    "evaluate_fold",
    "partition",
    "run_repeated_cv",
    "summarize",
]
