from __future__ import annotations

import numpy as np
import pytest

from repcv.config import SEMSimulationConfig
from repcv.errors import InvalidParameterError
from repcv.resampling import (
    make_population,
    permutation_test,
    simulate_from_config,
    simulate_sampling_distribution,
    single_sample_sem,
)


def test_empirical_sem_tracks_analytic_value() -> None:
    cfg = SEMSimulationConfig(population_size=5000, sample_size=25, n_simulations=2000)

    dist = simulate_from_config(cfg)

    assert dist.n_simulations == 2000
    assert dist.mean_of_means == pytest.approx(dist.population_mean, abs=0.02)
    assert dist.empirical_sem == pytest.approx(dist.finite_population_sem, rel=0.1)
    assert dist.finite_population_sem < dist.analytic_sem


def test_simulation_is_seeded() -> None:
    population = np.arange(100, dtype=float)

    a = simulate_sampling_distribution(population, 10, 50, seed=8)
    b = simulate_sampling_distribution(population, 10, 50, seed=8)

    np.testing.assert_array_equal(a.sample_means, b.sample_means)


def test_whole_population_sample_has_no_spread() -> None:
    population = np.array([1.0, 2.0, 3.0, 4.0])

    dist = simulate_sampling_distribution(population, 4, 10, seed=0)

    np.testing.assert_allclose(dist.sample_means, 2.5)
    assert dist.finite_population_sem == pytest.approx(0.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"population": [1.0]},
        {"population": [1.0, np.inf]},
        {"sample_size": 0},
        {"sample_size": 11},
        {"n_simulations": 1},
        {"seed": -1},
    ],
)
def test_simulation_validation(kwargs: dict) -> None:
    args = {"population": np.arange(10.0), "sample_size": 5, "n_simulations": 10, "seed": 0}
    args.update(kwargs)

    with pytest.raises(InvalidParameterError):
        simulate_sampling_distribution(**args)


def test_single_sample_sem() -> None:
    population = make_population(SEMSimulationConfig(population_size=2000))

    sem = single_sample_sem(population, 100, seed=1)

    assert 0.05 < sem < 0.15


def test_permutation_detects_shift() -> None:
    rng = np.random.default_rng(0)
    a = rng.normal(1.0, 1.0, size=40)
    b = rng.normal(0.0, 1.0, size=40)

    result = permutation_test(a, b, n_permutations=2000, seed=1)

    assert result.observed == pytest.approx(a.mean() - b.mean())
    assert result.p_value < 0.01
    assert result.n_permutations == 2000
    assert permutation_test(a, b, n_permutations=2000, seed=1, alternative="less").p_value > 0.9


def test_permutation_p_value_is_never_zero() -> None:
    result = permutation_test([10.0, 11.0, 12.0], [0.0, 1.0, 2.0], n_permutations=99, seed=0)

    assert result.p_value >= 1 / 100


def test_identical_groups_are_not_significant() -> None:
    result = permutation_test([1.0, 2.0, 3.0], [1.0, 2.0, 3.0], n_permutations=200, seed=0)

    assert result.observed == 0.0
    assert result.p_value == pytest.approx(1.0)


def test_permutation_validation() -> None:
    with pytest.raises(InvalidParameterError):
        permutation_test([], [1.0])
    with pytest.raises(InvalidParameterError):
        permutation_test([1.0], [2.0], alternative="both")
    with pytest.raises(InvalidParameterError):
        permutation_test([1.0], [2.0], n_permutations=0)
