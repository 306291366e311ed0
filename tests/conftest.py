from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from repcv.config import SyntheticDataConfig
from repcv.data import Dataset, make_classification_dataset


@pytest.fixture
def balanced_dataset() -> Dataset:
    """100 records, exactly 50 per class."""
    cfg = SyntheticDataConfig(n_records=100, balanced=True, random_seed=7)
    return make_classification_dataset(cfg)


@pytest.fixture
def separable_dataset() -> Dataset:
    """200 well separated records with one categorical feature."""
    cfg = SyntheticDataConfig(
        n_records=200,
        balanced=True,
        random_seed=11,
        n_categorical_features=1,
        gaussian_mixture={"mu_negative_base": [0.0, 0.0], "mu_positive_base": [4.0, 4.0]},
    )
    return make_classification_dataset(cfg)


@pytest.fixture
def mixed_frame() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "age": [23.0, 35.0, np.nan, 51.0, 44.0, 29.0],
            "colour": ["red", "green", "red", None, "blue", "green"],
            "outcome": ["yes", "no", "yes", "no", "no", "yes"],
        }
    )
