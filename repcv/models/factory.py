"""
Model factory: builds a fresh, unfitted model from a ModelSpec.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Type, Union

from pydantic import BaseModel, ValidationError

from repcv.config import (
    DecisionTreeConfig,
    LogisticRegressionConfig,
    ModelSpec,
    XGBoostConfig,
)
from repcv.errors import InvalidParameterError
from repcv.models.base import Classifier
from repcv.models.decision_tree import DecisionTreeModel
from repcv.models.logistic_regression import LogisticRegressionModel
from repcv.models.majority import MajorityClassModel
from repcv.models.xgboost_model import XGBoostModel

# name -> (config class or None, model constructor)
_REGISTRY: Dict[str, Tuple[Optional[Type[BaseModel]], Callable[..., Classifier]]] = {
    "majority": (None, MajorityClassModel),
    "decision_tree": (DecisionTreeConfig, DecisionTreeModel),
    "logistic_regression": (LogisticRegressionConfig, LogisticRegressionModel),
    "xgboost": (XGBoostConfig, XGBoostModel),
}

ModelSpecLike = Union[ModelSpec, str, Mapping[str, Any]]


def available_models() -> list[str]:
    """Names accepted by ModelSpec.name."""
    return sorted(_REGISTRY)


def resolve_model_spec(spec: ModelSpecLike) -> ModelSpec:
    """Accept a ModelSpec, a bare model name, or a {"name", "params"} mapping."""
    try:
        if isinstance(spec, ModelSpec):
            return spec
        if isinstance(spec, str):
            return ModelSpec(name=spec)
        return ModelSpec(**dict(spec))
    except (ValidationError, TypeError) as exc:
        raise InvalidParameterError(f"Invalid model spec {spec!r}: {exc}") from exc


def build_model(spec: ModelSpecLike, random_seed: Optional[int] = None) -> Classifier:
    """Build a fresh, unfitted model instance.

    Args:
        spec: Model family and hyperparameters.
        random_seed: Seed for the model's own randomness. Used only when
            the family has a ``random_seed`` parameter that ``spec.params``
            does not set explicitly.

    Returns:
        New Classifier; no state is shared with previously built models.

    Raises:
        InvalidParameterError: If the name is unknown or params do not
            validate against the family's config class.
    """
    spec = resolve_model_spec(spec)
    config_cls, model_cls = _REGISTRY[spec.name]

    if config_cls is None:
        if spec.params:
            raise InvalidParameterError(
                f"Model {spec.name!r} takes no parameters, got {sorted(spec.params)}"
            )
        return model_cls()

    params = dict(spec.params)
    if random_seed is not None and "random_seed" in config_cls.model_fields:
        params.setdefault("random_seed", int(random_seed))

    try:
        cfg = config_cls(**params)
    except ValidationError as exc:
        raise InvalidParameterError(
            f"Invalid parameters for model {spec.name!r}: {exc}"
        ) from exc
    return model_cls(cfg)
