"""
Datasets and partitioning for repeated cross-validation.

This module provides:
- Dataset / FeatureSpec: statically-shaped labeled records
- load_csv_dataset: Loads a Dataset from a local CSV file
- SyntheticGenerator: Gaussian-mixture two-class data
- Splitters: seed derivation, stratified k-fold partitions and folds
"""

from repcv.data.csv_loader import load_csv_dataset
from repcv.data.dataset import Dataset, FeatureSpec
from repcv.data.splitters import (
    Fold,
    build_folds,
    derive_seed,
    iter_folds,
    partition,
)
from repcv.data.synthetic import SyntheticGenerator, make_classification_dataset

__all__ = [
    "Dataset",
    "FeatureSpec",
    "Fold",
    "SyntheticGenerator",
    "build_folds",
    "derive_seed",
    "iter_folds",
    "load_csv_dataset",
    "make_classification_dataset",
    "partition",
]
