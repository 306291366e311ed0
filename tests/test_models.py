from __future__ import annotations

import numpy as np
import pytest

from repcv.config import ModelSpec
from repcv.data import Dataset
from repcv.errors import InvalidParameterError
from repcv.models import (
    DecisionTreeModel,
    LogisticRegressionModel,
    MajorityClassModel,
    XGBoostModel,
    available_models,
    build_model,
)


def test_majority_predicts_most_frequent_label() -> None:
    X = np.zeros((5, 1))
    model = MajorityClassModel().fit(X, np.array(["b", "a", "b", "b", "a"]))

    np.testing.assert_array_equal(model.predict(np.zeros((3, 1))), ["b", "b", "b"])


def test_majority_breaks_ties_by_sorted_order() -> None:
    model = MajorityClassModel().fit(np.zeros((4, 1)), np.array(["z", "a", "z", "a"]))

    assert list(model.predict(np.zeros((2, 1)))) == ["a", "a"]


@pytest.mark.parametrize(
    "model",
    [MajorityClassModel(), DecisionTreeModel(), LogisticRegressionModel(), XGBoostModel()],
)
def test_predict_before_fit_raises(model) -> None:
    with pytest.raises(RuntimeError, match="not been fitted"):
        model.predict(np.zeros((2, 2)))


@pytest.mark.parametrize("name", ["decision_tree", "logistic_regression", "xgboost"])
def test_models_learn_separable_data(separable_dataset: Dataset, name: str) -> None:
    X = separable_dataset.feature_matrix()
    y = separable_dataset.labels()

    model = build_model(name).fit(X, y)
    preds = model.predict(X)

    assert set(preds) <= set(separable_dataset.classes)
    assert np.mean(preds == y) > 0.8


@pytest.mark.parametrize("name", ["decision_tree", "logistic_regression", "xgboost"])
def test_models_tolerate_missing_values(name: str) -> None:
    rng = np.random.default_rng(0)
    X = rng.normal(size=(80, 3))
    y = np.where(X[:, 0] > 0, "hi", "lo")
    X[rng.random(X.shape) < 0.1] = np.nan

    preds = build_model(name).fit(X, y).predict(X)

    assert len(preds) == 80


def test_build_model_returns_fresh_instances() -> None:
    first = build_model("decision_tree")
    second = build_model("decision_tree")

    assert first is not second
    assert isinstance(first, DecisionTreeModel)


def test_build_model_validates_params() -> None:
    model = build_model({"name": "decision_tree", "params": {"max_depth": 2}})
    assert model.cfg.max_depth == 2

    with pytest.raises(InvalidParameterError, match="decision_tree"):
        build_model(ModelSpec(name="decision_tree", params={"max_depth": 0}))
    with pytest.raises(InvalidParameterError, match="takes no parameters"):
        build_model(ModelSpec(name="majority", params={"x": 1}))
    with pytest.raises(InvalidParameterError):
        build_model("random_forest")


def test_available_models() -> None:
    assert available_models() == ["decision_tree", "logistic_regression", "majority", "xgboost"]


def test_build_model_seeds_families_with_randomness() -> None:
    assert build_model("decision_tree", random_seed=7).cfg.random_seed == 7
    assert build_model("xgboost", random_seed=7).cfg.random_seed == 7
    # An explicit seed in params wins
    pinned = {"name": "logistic_regression", "params": {"random_seed": 3}}
    assert build_model(pinned, random_seed=7).cfg.random_seed == 3
    assert isinstance(build_model("majority", random_seed=7), MajorityClassModel)
