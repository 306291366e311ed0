"""Model families for cross-validation, behind a common fit/predict interface."""

from repcv.config import (
    DecisionTreeConfig,
    LogisticRegressionConfig,
    ModelSpec,
    XGBoostConfig,
)
from repcv.models.base import Classifier
from repcv.models.decision_tree import DecisionTreeModel
from repcv.models.factory import available_models, build_model, resolve_model_spec
from repcv.models.logistic_regression import LogisticRegressionModel
from repcv.models.majority import MajorityClassModel
from repcv.models.xgboost_model import XGBoostModel

__all__ = [
    "Classifier",
    "DecisionTreeConfig",
    "DecisionTreeModel",
    "LogisticRegressionConfig",
    "LogisticRegressionModel",
    "MajorityClassModel",
    "ModelSpec",
    "XGBoostConfig",
    "XGBoostModel",
    "available_models",
    "build_model",
    "resolve_model_spec",
]
