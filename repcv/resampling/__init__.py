"""
Companion resampling procedures.

- sem: Monte Carlo sampling distribution of the mean and its standard error
- permutation: two-sample permutation test (labels resampled without replacement)
"""

from repcv.resampling.permutation import PermutationTestResult, permutation_test
from repcv.resampling.sem import (
    SamplingDistribution,
    make_population,
    simulate_from_config,
    simulate_sampling_distribution,
    single_sample_sem,
)

__all__ = [
    "PermutationTestResult",
    "SamplingDistribution",
    "make_population",
    "permutation_test",
    "simulate_from_config",
    "simulate_sampling_distribution",
    "single_sample_sem",
]
