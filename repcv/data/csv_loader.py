"""
CSV-based dataset source.

Loads a labeled table from a local CSV file (plus an optional schema.json
next to it) and builds a validated Dataset.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence

import pandas as pd

from repcv.data.dataset import Dataset, FeatureSpec
from repcv.errors import InvalidParameterError

logger = logging.getLogger(__name__)


def _load_schema(schema_path: Path) -> tuple[List[FeatureSpec], Optional[List[Any]]]:
    """Read declared features and classes from a schema.json file.

    Expected layout::

        {
          "features": [{"name": "age", "kind": "numeric"},
                       {"name": "colour", "kind": "categorical",
                        "categories": ["red", "green"]}],
          "classes": ["no", "yes"]
        }
    """
    with open(schema_path) as f:
        schema = json.load(f)

    if "features" not in schema:
        raise InvalidParameterError(f"{schema_path} must have a 'features' list")

    specs = [
        FeatureSpec(
            name=item["name"],
            kind=item.get("kind", "numeric"),
            categories=tuple(item.get("categories", ())),
        )
        for item in schema["features"]
    ]
    return specs, schema.get("classes")


def load_csv_dataset(
    path: str | Path,
    label: str,
    features: Optional[Sequence[str]] = None,
    schema_path: str | Path | None = None,
) -> Dataset:
    """Load a Dataset from a CSV file.

    Args:
        path: Path to the CSV file.
        label: Name of the outcome column.
        features: Feature columns to use. If None, every column except the
            label. Ignored when a schema is found.
        schema_path: Optional schema.json declaring features and classes.
            If None, ``<stem>.schema.json`` next to the CSV is used when it
            exists.

    Returns:
        Validated Dataset.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Required file not found: {path}")

    frame = pd.read_csv(path)
    logger.info("Loaded %s: %d rows, %d columns", path, len(frame), len(frame.columns))

    if schema_path is None:
        candidate = path.with_name(f"{path.stem}.schema.json")
        schema_path = candidate if candidate.exists() else None

    if schema_path is not None:
        specs, classes = _load_schema(Path(schema_path))
        logger.info("Using declared schema from %s", schema_path)
        return Dataset.from_frame(frame, label=label, features=specs, classes=classes)

    return Dataset.from_frame(frame, label=label, features=features)
