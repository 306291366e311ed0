"""
Statically-shaped labeled dataset.

A Dataset declares its feature schema and label domain up front, so a
malformed feature set is rejected at construction rather than when a model
is fit. Categorical features are one-hot encoded against their declared
categories, which keeps the design matrix columns identical for every
train/test subset.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from repcv.errors import InvalidParameterError

FeatureKind = Literal["numeric", "categorical"]


def _sorted_values(values: Sequence[Any]) -> Tuple[Any, ...]:
    """Sort distinct values, falling back to string order for mixed types."""
    try:
        return tuple(sorted(values))
    except TypeError:
        return tuple(sorted(values, key=str))


@dataclass(frozen=True)
class FeatureSpec:
    """Declared name and type of one feature column."""

    name: str
    kind: FeatureKind = "numeric"
    categories: Tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        if self.kind not in ("numeric", "categorical"):
            raise InvalidParameterError(
                f"Feature {self.name!r}: kind must be 'numeric' or 'categorical', got {self.kind!r}"
            )
        object.__setattr__(self, "categories", tuple(self.categories))
        if self.kind == "categorical":
            if not self.categories:
                raise InvalidParameterError(
                    f"Categorical feature {self.name!r} must declare its categories"
                )
            if len(set(self.categories)) != len(self.categories):
                raise InvalidParameterError(
                    f"Categorical feature {self.name!r} has duplicate categories"
                )
        elif self.categories:
            raise InvalidParameterError(
                f"Numeric feature {self.name!r} cannot declare categories"
            )

    @property
    def encoded_names(self) -> List[str]:
        """Column names this feature contributes to the design matrix."""
        if self.kind == "numeric":
            return [self.name]
        return [f"{self.name}={c}" for c in self.categories]


@dataclass(frozen=True, eq=False)
class Dataset:
    """Ordered labeled records with a fixed feature schema and label domain.

    Attributes:
        features: Declared feature schema, in column order.
        X: Feature values, one column per declared feature. Missing values
            (NaN/None) are allowed.
        y: Outcome label per record.
        classes: Fixed, finite label domain.
    """

    features: Tuple[FeatureSpec, ...]
    X: pd.DataFrame
    y: np.ndarray
    classes: Tuple[Any, ...]
    _matrix: np.ndarray = field(init=False, repr=False)
    _codes: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate the schema and precompute the encoded design matrix."""
        features = tuple(self.features)
        names = [f.name for f in features]
        if not features:
            raise InvalidParameterError("Dataset needs at least one feature")
        if len(set(names)) != len(names):
            raise InvalidParameterError(f"Duplicate feature names: {names}")

        X = pd.DataFrame(self.X).reset_index(drop=True)
        missing = [n for n in names if n not in X.columns]
        if missing:
            raise InvalidParameterError(f"Missing columns for declared features: {missing}")
        extra = [c for c in X.columns if c not in names]
        if extra:
            raise InvalidParameterError(f"Undeclared feature columns: {extra}")
        X = X[names]

        y = np.asarray(self.y)
        if y.ndim != 1:
            raise InvalidParameterError(f"y must be 1-dimensional, got shape {y.shape}")
        if len(X) != len(y):
            raise InvalidParameterError(
                f"X and y must have the same length: X={len(X)}, y={len(y)}"
            )

        classes = tuple(self.classes)
        if not classes:
            raise InvalidParameterError("Label domain must contain at least one class")
        if len(set(classes)) != len(classes):
            raise InvalidParameterError(f"Duplicate classes: {classes}")
        if pd.isna(pd.Series(y, dtype=object)).any():
            raise InvalidParameterError("Outcome labels cannot be missing")
        class_index = {c: i for i, c in enumerate(classes)}
        unknown = {v for v in pd.unique(pd.Series(y, dtype=object)) if v not in class_index}
        if unknown:
            raise InvalidParameterError(
                f"Labels outside the declared classes {classes}: {sorted(map(str, unknown))}"
            )
        codes = np.array([class_index[v] for v in y], dtype=np.intp)

        blocks = [self._encode_column(X[spec.name], spec) for spec in features]
        matrix = np.hstack(blocks) if blocks else np.empty((len(X), 0))

        object.__setattr__(self, "features", features)
        object.__setattr__(self, "X", X)
        object.__setattr__(self, "y", y)
        object.__setattr__(self, "classes", classes)
        object.__setattr__(self, "_matrix", matrix)
        object.__setattr__(self, "_codes", codes)

    @staticmethod
    def _encode_column(column: pd.Series, spec: FeatureSpec) -> np.ndarray:
        if spec.kind == "numeric":
            if not (
                pd.api.types.is_numeric_dtype(column) or column.isna().all()
            ) or pd.api.types.is_bool_dtype(column):
                raise InvalidParameterError(
                    f"Numeric feature {spec.name!r} has non-numeric dtype {column.dtype}"
                )
            values = pd.to_numeric(column).to_numpy(dtype=np.float64, na_value=np.nan)
            return values.reshape(-1, 1)

        present = column.dropna()
        unknown = set(present.unique()) - set(spec.categories)
        if unknown:
            raise InvalidParameterError(
                f"Feature {spec.name!r} has values outside its categories: "
                f"{sorted(map(str, unknown))}"
            )
        codes = pd.Categorical(column, categories=list(spec.categories)).codes
        onehot = np.zeros((len(column), len(spec.categories)), dtype=np.float64)
        rows = np.flatnonzero(codes >= 0)
        onehot[rows, codes[rows]] = 1.0
        # Missing categorical values encode as an all-zero row
        return onehot

    @classmethod
    def from_frame(
        cls,
        frame: pd.DataFrame,
        label: str,
        features: Optional[Sequence[Union[str, FeatureSpec]]] = None,
        classes: Optional[Sequence[Any]] = None,
    ) -> Dataset:
        """Build a Dataset from a DataFrame.

        Args:
            frame: Table holding feature columns and the label column.
            label: Name of the outcome column.
            features: Feature names or FeatureSpecs. Names get their kind
                inferred: numeric dtypes are numeric, anything else is
                categorical with categories taken from the whole column.
                If None, every column except ``label`` is a feature.
            classes: Label domain. If None, the sorted distinct labels.

        Returns:
            Validated Dataset.
        """
        if label not in frame.columns:
            raise InvalidParameterError(f"Label column {label!r} not found")

        if features is None:
            features = [c for c in frame.columns if c != label]

        specs: List[FeatureSpec] = []
        for feat in features:
            name = feat.name if isinstance(feat, FeatureSpec) else feat
            if name == label:
                raise InvalidParameterError(f"Label column {label!r} cannot be a feature")
            if name not in frame.columns:
                raise InvalidParameterError(f"Feature column {name!r} not found")
            if isinstance(feat, FeatureSpec):
                specs.append(feat)
                continue
            column = frame[feat]
            if pd.api.types.is_numeric_dtype(column) and not pd.api.types.is_bool_dtype(column):
                specs.append(FeatureSpec(feat, "numeric"))
            else:
                categories = _sorted_values(list(column.dropna().unique()))
                specs.append(FeatureSpec(feat, "categorical", categories))

        y = frame[label].to_numpy()
        if classes is None:
            classes = _sorted_values(list(pd.Series(y).dropna().unique()))

        return cls(
            features=tuple(specs),
            X=frame[[s.name for s in specs]],
            y=y,
            classes=tuple(classes),
        )

    def __len__(self) -> int:
        return self.n_records

    @property
    def n_records(self) -> int:
        """Number of records."""
        return len(self.y)

    @property
    def n_classes(self) -> int:
        return len(self.classes)

    @property
    def feature_names(self) -> List[str]:
        """Declared feature names."""
        return [f.name for f in self.features]

    @property
    def encoded_feature_names(self) -> List[str]:
        """Column names of the encoded design matrix."""
        return [name for f in self.features for name in f.encoded_names]

    @property
    def label_codes(self) -> np.ndarray:
        """Index into ``classes`` for every record."""
        return self._codes

    def take(self, indices: Optional[Sequence[int]] = None) -> np.ndarray:
        """Validate record indices and return them as an integer array."""
        if indices is None:
            return np.arange(self.n_records)
        idx = np.asarray(indices)
        if idx.size == 0:
            return idx.astype(np.intp)
        if idx.ndim != 1 or not np.issubdtype(idx.dtype, np.integer):
            raise InvalidParameterError("Indices must be a 1-dimensional integer sequence")
        if idx.min() < 0 or idx.max() >= self.n_records:
            raise InvalidParameterError(
                f"Indices out of range [0, {self.n_records})"
            )
        return idx.astype(np.intp)

    def feature_matrix(self, indices: Optional[Sequence[int]] = None) -> np.ndarray:
        """Encoded float design matrix for the given records (all if None)."""
        return self._matrix[self.take(indices)]

    def labels(self, indices: Optional[Sequence[int]] = None) -> np.ndarray:
        """Outcome labels for the given records (all if None)."""
        return self.y[self.take(indices)]

    def class_counts(self, indices: Optional[Sequence[int]] = None) -> Dict[Any, int]:
        """Number of records per declared class, including empty classes."""
        counts = np.bincount(self._codes[self.take(indices)], minlength=self.n_classes)
        return {c: int(n) for c, n in zip(self.classes, counts)}

    def get_summary(self) -> dict:
        """Return summary statistics about the dataset."""
        return {
            "n_records": self.n_records,
            "n_features": len(self.features),
            "n_encoded_features": self._matrix.shape[1],
            "feature_names": self.feature_names,
            "classes": [str(c) for c in self.classes],
            "class_counts": {str(c): n for c, n in self.class_counts().items()},
        }
