"""
Sampling distribution of the mean.

Draws many samples (without replacement) from a finite population and
compares the spread of their means, the empirical standard error, with
the analytic sigma / sqrt(n).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from repcv.config import SEMSimulationConfig
from repcv.data.splitters import derive_seed
from repcv.errors import InvalidParameterError
from repcv.evaluation.summary import standard_error


@dataclass(frozen=True, eq=False)
class SamplingDistribution:
    """Result of a sampling-distribution simulation.

    Attributes:
        sample_means: Mean of each simulated sample.
        sample_size: Records per sample (n).
        population_size: Records in the population (N).
        population_mean: Mean of the population.
        population_std: Population standard deviation (ddof=0).
    """

    sample_means: np.ndarray
    sample_size: int
    population_size: int
    population_mean: float
    population_std: float

    @property
    def n_simulations(self) -> int:
        return len(self.sample_means)

    @property
    def mean_of_means(self) -> float:
        return float(np.mean(self.sample_means))

    @property
    def empirical_sem(self) -> float:
        """Standard deviation of the simulated sample means."""
        return float(np.std(self.sample_means, ddof=1))

    @property
    def analytic_sem(self) -> float:
        """sigma / sqrt(n), ignoring the finite population."""
        return self.population_std / math.sqrt(self.sample_size)

    @property
    def finite_population_sem(self) -> float:
        """analytic_sem with the finite population correction sqrt((N-n)/(N-1))."""
        n, N = self.sample_size, self.population_size
        return self.analytic_sem * math.sqrt((N - n) / (N - 1))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "n_simulations": self.n_simulations,
            "sample_size": self.sample_size,
            "population_size": self.population_size,
            "population_mean": self.population_mean,
            "population_std": self.population_std,
            "mean_of_means": self.mean_of_means,
            "empirical_sem": self.empirical_sem,
            "analytic_sem": self.analytic_sem,
            "finite_population_sem": self.finite_population_sem,
        }


def simulate_sampling_distribution(
    population: np.ndarray,
    sample_size: int,
    n_simulations: int,
    seed: int,
) -> SamplingDistribution:
    """Simulate the sampling distribution of the mean.

    Args:
        population: Finite population of values (1-D, finite).
        sample_size: Values per sample, 1 <= sample_size <= len(population).
        n_simulations: Number of samples to draw (>= 2).
        seed: Non-negative seed for the sampling generator.

    Returns:
        SamplingDistribution with one mean per simulated sample.
    """
    pop = np.asarray(population, dtype=np.float64)
    if pop.ndim != 1 or len(pop) < 2:
        raise InvalidParameterError("population must be 1-dimensional with at least 2 values")
    if not np.all(np.isfinite(pop)):
        raise InvalidParameterError("population must be finite")
    if not 1 <= sample_size <= len(pop):
        raise InvalidParameterError(
            f"sample_size must be in [1, {len(pop)}], got {sample_size}"
        )
    if n_simulations < 2:
        raise InvalidParameterError(f"n_simulations must be at least 2, got {n_simulations}")
    if seed < 0:
        raise InvalidParameterError(f"seed must be non-negative, got {seed}")

    rng = np.random.default_rng(seed)
    means = np.empty(n_simulations, dtype=np.float64)
    for j in range(n_simulations):
        means[j] = rng.choice(pop, size=sample_size, replace=False).mean()

    return SamplingDistribution(
        sample_means=means,
        sample_size=int(sample_size),
        population_size=len(pop),
        population_mean=float(pop.mean()),
        population_std=float(pop.std()),
    )


def make_population(cfg: SEMSimulationConfig) -> np.ndarray:
    """Draw a normal population of cfg.population_size values."""
    rng = np.random.default_rng(derive_seed(cfg.random_seed, 0))
    return rng.normal(cfg.population_mean, cfg.population_std, size=cfg.population_size)


def simulate_from_config(cfg: SEMSimulationConfig | None = None) -> SamplingDistribution:
    """Build a population and simulate from it, seeds derived from cfg.random_seed."""
    cfg = cfg or SEMSimulationConfig()
    population = make_population(cfg)
    return simulate_sampling_distribution(
        population,
        sample_size=cfg.sample_size,
        n_simulations=cfg.n_simulations,
        seed=derive_seed(cfg.random_seed, 1),
    )


def single_sample_sem(population: np.ndarray, sample_size: int, seed: int) -> float:
    """SEM estimated from one sample alone: s / sqrt(n)."""
    rng = np.random.default_rng(seed)
    return standard_error(rng.choice(np.asarray(population), size=sample_size, replace=False))
