"""
Synthetic two-class data generator.

Labels are assigned first (Bernoulli(positive_rate), or an exact count when
``balanced`` is set), then numeric features are drawn from class-specific
Gaussian mixtures. Optional categorical features and missing values make
the output exercise the whole Dataset schema.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from repcv.config import SyntheticDataConfig
from repcv.data.dataset import Dataset, FeatureSpec


class SyntheticGenerator:
    """
    Generates labeled records from a Gaussian mixture per class.

    Each record belongs to one of C mixture components and is either
    negative (code 0) or positive (code 1). Covariances are A @ A.T + eps*I
    with A ~ U(0, sigma_max), drawn once at init.
    """

    def __init__(self, cfg: SyntheticDataConfig):
        self.cfg = cfg
        self.rng = np.random.default_rng(cfg.random_seed)

        # Pre-generate GMM parameters at init for consistency across samples
        self._mu_neg, self._mu_pos = self._generate_means()
        self._sigma_neg, self._sigma_pos = self._generate_covariances()

    def _generate_means(self) -> tuple[np.ndarray, np.ndarray]:
        """Component means: base mean shifted by component_offset per component."""
        n_comp = self.cfg.n_components
        n_feat = self.cfg.n_features
        offset = self.cfg.gaussian_mixture.component_offset

        mu_n_base = self._adjust_array_length(
            np.array(self.cfg.gaussian_mixture.mu_negative_base, dtype=float), n_feat
        )
        mu_p_base = self._adjust_array_length(
            np.array(self.cfg.gaussian_mixture.mu_positive_base, dtype=float), n_feat
        )

        shifts = np.arange(n_comp)[:, None] * offset
        return mu_n_base + shifts, mu_p_base + shifts

    def _adjust_array_length(self, arr: np.ndarray, target_len: int) -> np.ndarray:
        """Pad with zeros or truncate array to target length."""
        if len(arr) < target_len:
            return np.pad(arr, (0, target_len - len(arr)))
        return arr[:target_len]

    def _generate_covariances(self) -> tuple[np.ndarray, np.ndarray]:
        n_comp = self.cfg.n_components
        n_feat = self.cfg.n_features
        sigma_max = self.cfg.gaussian_mixture.sigma_max
        eps = 1e-6

        sigma_neg = np.zeros((n_comp, n_feat, n_feat))
        sigma_pos = np.zeros((n_comp, n_feat, n_feat))

        for c in range(n_comp):
            A_neg = self.rng.uniform(0, sigma_max, size=(n_feat, n_feat))
            A_pos = self.rng.uniform(0, sigma_max, size=(n_feat, n_feat))

            sigma_neg[c] = A_neg @ A_neg.T + eps * np.eye(n_feat)
            sigma_pos[c] = A_pos @ A_pos.T + eps * np.eye(n_feat)

        return sigma_neg, sigma_pos

    def _sample_labels(self, n_samples: int) -> np.ndarray:
        if self.cfg.balanced:
            n_pos = int(round(n_samples * self.cfg.positive_rate))
            labels = np.zeros(n_samples, dtype=int)
            labels[:n_pos] = 1
            return self.rng.permutation(labels)
        return self.rng.binomial(1, self.cfg.positive_rate, size=n_samples)

    def generate_frame(self, n_samples: int | None = None) -> pd.DataFrame:
        """
        Sample records from the mixture.

        Args:
            n_samples: Number of records. Defaults to cfg.n_records.

        Returns:
            DataFrame with numeric columns x0.., categorical columns c0..
            and label column 'y' holding cfg.class_labels values.
        """
        if n_samples is None:
            n_samples = self.cfg.n_records
        n_feat = self.cfg.n_features
        n_comp = self.cfg.n_components

        components = self.rng.integers(0, n_comp, size=n_samples)
        labels = self._sample_labels(n_samples)

        features = np.zeros((n_samples, n_feat))

        for c in range(n_comp):
            for code, mu, sigma in ((0, self._mu_neg, self._sigma_neg),
                                    (1, self._mu_pos, self._sigma_pos)):
                mask = (components == c) & (labels == code)
                n_masked = mask.sum()
                if n_masked > 0:
                    features[mask] = self.rng.multivariate_normal(
                        mu[c], sigma[c], size=n_masked
                    )

        df = pd.DataFrame(features, columns=[f"x{i}" for i in range(n_feat)])

        # Categorical features lean towards category 0 for negatives and the
        # last category for positives
        n_cat = self.cfg.n_categories
        for j in range(self.cfg.n_categorical_features):
            weights = np.linspace(1.0, 2.0, n_cat)
            p_neg = weights[::-1] / weights.sum()
            p_pos = weights / weights.sum()
            cats = np.where(
                labels == 1,
                self.rng.choice(n_cat, size=n_samples, p=p_pos),
                self.rng.choice(n_cat, size=n_samples, p=p_neg),
            )
            df[f"c{j}"] = pd.Series([f"cat{v}" for v in cats], dtype=object)

        if self.cfg.missing_rate > 0:
            mask = self.rng.random(df.shape) < self.cfg.missing_rate
            df = df.mask(mask)

        df["y"] = np.asarray(self.cfg.class_labels, dtype=object)[labels]
        return df

    def feature_specs(self) -> tuple[FeatureSpec, ...]:
        """Declared schema of the generated features."""
        numeric = [FeatureSpec(f"x{i}", "numeric") for i in range(self.cfg.n_features)]
        categories = tuple(f"cat{v}" for v in range(self.cfg.n_categories))
        categorical = [
            FeatureSpec(f"c{j}", "categorical", categories)
            for j in range(self.cfg.n_categorical_features)
        ]
        return tuple(numeric + categorical)

    def generate_dataset(self, n_samples: int | None = None) -> Dataset:
        """Generate records and wrap them in a validated Dataset."""
        frame = self.generate_frame(n_samples)
        return Dataset.from_frame(
            frame,
            label="y",
            features=self.feature_specs(),
            classes=tuple(self.cfg.class_labels),
        )


def make_classification_dataset(cfg: SyntheticDataConfig | None = None) -> Dataset:
    """Generate a synthetic Dataset from config (defaults if None)."""
    return SyntheticGenerator(cfg or SyntheticDataConfig()).generate_dataset()
