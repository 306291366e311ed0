from __future__ import annotations

import json

import numpy as np
import pandas as pd
import pytest

from repcv.data import load_csv_dataset
from repcv.errors import InvalidParameterError


def test_load_infers_schema(tmp_path, mixed_frame: pd.DataFrame) -> None:
    path = tmp_path / "patients.csv"
    mixed_frame.to_csv(path, index=False)

    ds = load_csv_dataset(path, label="outcome")

    assert ds.n_records == 6
    assert ds.classes == ("no", "yes")
    kinds = {f.name: f.kind for f in ds.features}
    assert kinds == {"age": "numeric", "colour": "categorical"}
    assert np.isnan(ds.feature_matrix()[2, 0])


def test_feature_subset(tmp_path, mixed_frame: pd.DataFrame) -> None:
    path = tmp_path / "patients.csv"
    mixed_frame.to_csv(path, index=False)

    ds = load_csv_dataset(path, label="outcome", features=["age"])

    assert ds.feature_names == ["age"]


def test_schema_file_next_to_csv(tmp_path, mixed_frame: pd.DataFrame) -> None:
    path = tmp_path / "patients.csv"
    mixed_frame.to_csv(path, index=False)
    schema = {
        "features": [
            {"name": "age", "kind": "numeric"},
            {"name": "colour", "kind": "categorical",
             "categories": ["red", "green", "blue", "purple"]},
        ],
        "classes": ["yes", "no", "maybe"],
    }
    (tmp_path / "patients.schema.json").write_text(json.dumps(schema))

    ds = load_csv_dataset(path, label="outcome")

    assert ds.classes == ("yes", "no", "maybe")
    assert ds.class_counts()["maybe"] == 0
    assert len(ds.encoded_feature_names) == 5


def test_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_csv_dataset(tmp_path / "nope.csv", label="y")


def test_schema_without_features(tmp_path, mixed_frame: pd.DataFrame) -> None:
    path = tmp_path / "patients.csv"
    mixed_frame.to_csv(path, index=False)
    schema_path = tmp_path / "custom.json"
    schema_path.write_text(json.dumps({"classes": ["no", "yes"]}))

    with pytest.raises(InvalidParameterError, match="features"):
        load_csv_dataset(path, label="outcome", schema_path=schema_path)


def test_schema_listing_the_label_is_rejected(tmp_path, mixed_frame: pd.DataFrame) -> None:
    path = tmp_path / "patients.csv"
    mixed_frame.to_csv(path, index=False)
    schema = {
        "features": [
            {"name": "age", "kind": "numeric"},
            {"name": "outcome", "kind": "categorical", "categories": ["no", "yes"]},
        ],
    }
    (tmp_path / "patients.schema.json").write_text(json.dumps(schema))

    with pytest.raises(InvalidParameterError, match="cannot be a feature"):
        load_csv_dataset(path, label="outcome")
