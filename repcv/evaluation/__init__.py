"""Evaluation module: fold scoring and accuracy aggregation."""

from repcv.evaluation.fold_evaluator import FoldResult, evaluate_fold, score_fold
from repcv.evaluation.metrics import compute_accuracy
from repcv.evaluation.summary import (
    EstimateReport,
    nominal_coverage,
    percentile_interval,
    standard_error,
    summarize,
)

__all__ = [
    "EstimateReport",
    "FoldResult",
    "compute_accuracy",
    "evaluate_fold",
    "nominal_coverage",
    "percentile_interval",
    "score_fold",
    "standard_error",
    "summarize",
]
