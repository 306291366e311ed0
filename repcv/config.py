"""
Configuration management using pydantic.

All config classes use pydantic for validation and YAML loading.
Config files are stored in configs/ directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, Field


# Base path for config files
CONFIGS_DIR = Path(__file__).parent.parent / "configs"

ModelName = Literal["majority", "decision_tree", "logistic_regression", "xgboost"]
IntervalMethod = Literal["normal", "percentile"]
Alternative = Literal["two-sided", "greater", "less"]


def load_yaml(path: Path | str) -> dict[str, Any]:
    """Load a YAML file and return as dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


class GaussianMixtureConfig(BaseModel):
    """Configuration for Gaussian mixture components."""

    mu_negative_base: List[float] = Field(default=[0.0, 0.0])
    mu_positive_base: List[float] = Field(default=[1.5, 1.0])
    component_offset: float = 1.0
    sigma_max: float = 1.0


class SyntheticDataConfig(BaseModel):
    """Configuration for synthetic two-class data generation."""

    random_seed: int = Field(default=42, ge=0)
    n_records: int = Field(default=200, ge=2)
    n_features: int = Field(default=2, ge=1)
    n_components: int = Field(default=1, ge=1)
    positive_rate: float = Field(default=0.5, gt=0.0, lt=1.0)
    # Exactly round(n_records * positive_rate) positives instead of Bernoulli draws
    balanced: bool = False
    n_categorical_features: int = Field(default=0, ge=0)
    n_categories: int = Field(default=3, ge=2)
    missing_rate: float = Field(default=0.0, ge=0.0, lt=1.0)
    class_labels: List[str] = Field(default=["negative", "positive"], min_length=2, max_length=2)
    gaussian_mixture: GaussianMixtureConfig = Field(
        default_factory=GaussianMixtureConfig
    )

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> SyntheticDataConfig:
        """Load config from YAML file.

        Args:
            path: Path to YAML file. If None, uses configs/synthetic_data.yaml.
        """
        if path is None:
            path = CONFIGS_DIR / "synthetic_data.yaml"
        return cls(**load_yaml(path))


class DecisionTreeConfig(BaseModel):
    """Configuration for the CART decision tree."""

    criterion: Literal["gini", "entropy", "log_loss"] = "gini"
    max_depth: Optional[int] = Field(default=None, ge=1)
    min_samples_leaf: int = Field(default=1, ge=1)
    random_seed: int = 42


class LogisticRegressionConfig(BaseModel):
    """Configuration for (L2) logistic regression."""

    C: float = Field(default=1.0, gt=0.0)  # Inverse regularization strength
    max_iter: int = Field(default=1000, ge=1)
    random_seed: int = 42


class XGBoostConfig(BaseModel):
    """Configuration for XGBoost model."""

    n_estimators: int = 100
    max_depth: int = 3
    learning_rate: float = 0.1
    subsample: float = 0.8
    colsample_bytree: float = 0.8
    early_stopping_rounds: Optional[int] = 10
    validation_fraction: float = 0.2  # Fraction of training data for early stopping
    random_seed: int = 42

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> XGBoostConfig:
        """Load config from YAML file.

        Args:
            path: Path to YAML file. If None, uses configs/model_xgboost.yaml.
        """
        if path is None:
            path = CONFIGS_DIR / "model_xgboost.yaml"
        return cls(**load_yaml(path))


class ModelSpec(BaseModel):
    """Names a model family and its hyperparameters.

    ``params`` is validated against the family's config class when the
    model is built, see repcv.models.factory.
    """

    name: ModelName = "decision_tree"
    params: Dict[str, Any] = Field(default_factory=dict)


class CrossValidationConfig(BaseModel):
    """Configuration for repeated k-fold cross-validation."""

    n_folds: int = Field(default=5, ge=2)
    n_repetitions: int = Field(default=1, ge=1)
    base_seed: int = Field(default=42, ge=0)
    stratified: bool = True
    confidence_z: float = Field(default=1.96, gt=0.0)  # 1.96 ~ 95% normal interval
    interval_method: IntervalMethod = "normal"
    n_jobs: int = Field(default=1, ge=1)
    fail_fast: bool = True
    show_progress: bool = False
    model: ModelSpec = Field(default_factory=ModelSpec)

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> CrossValidationConfig:
        """Load config from YAML file.

        Args:
            path: Path to YAML file. If None, uses configs/repeated_cv.yaml.
        """
        if path is None:
            path = CONFIGS_DIR / "repeated_cv.yaml"
        return cls(**load_yaml(path))


class PermutationTestConfig(BaseModel):
    """Configuration for the two-sample permutation test."""

    n_permutations: int = Field(default=10000, ge=1)
    alternative: Alternative = "two-sided"
    random_seed: int = Field(default=42, ge=0)

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> PermutationTestConfig:
        """Load config from YAML file.

        Args:
            path: Path to YAML file. If None, uses configs/permutation_test.yaml.
        """
        if path is None:
            path = CONFIGS_DIR / "permutation_test.yaml"
        return cls(**load_yaml(path))


class SEMSimulationConfig(BaseModel):
    """Configuration for the sampling-distribution-of-the-mean simulation.

    The population is drawn once from N(population_mean, population_std)
    and samples are then taken from it without replacement.
    """

    population_size: int = Field(default=10000, ge=2)
    population_mean: float = 0.0
    population_std: float = Field(default=1.0, gt=0.0)
    sample_size: int = Field(default=30, ge=2)
    n_simulations: int = Field(default=1000, ge=2)
    random_seed: int = Field(default=42, ge=0)

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> "SEMSimulationConfig":
        """Load config from YAML file.

        Args:
            path: Path to YAML file. If None, uses configs/sem_simulation.yaml.
        """
        if path is None:
            path = CONFIGS_DIR / "sem_simulation.yaml"
        return cls(**load_yaml(path))
