#!/usr/bin/env python
"""
Resampling demos: standard error of the mean and permutation tests.

Usage:
    python scripts/run_resampling.py sem
    python scripts/run_resampling.py sem --sample-size 100 --n-simulations 5000
    python scripts/run_resampling.py permutation --data data/scores.csv \
        --value score --group arm --a treatment --b control
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import pandas as pd
from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from repcv.config import PermutationTestConfig, SEMSimulationConfig
from repcv.data.splitters import derive_seed
from repcv.errors import RepcvError
from repcv.resampling import (
    make_population,
    permutation_test,
    simulate_from_config,
    single_sample_sem,
)


def run_sem(args: argparse.Namespace) -> dict:
    cfg = SEMSimulationConfig.from_yaml(args.config)
    overrides = {
        "sample_size": args.sample_size,
        "n_simulations": args.n_simulations,
        "random_seed": args.seed,
    }
    cfg = SEMSimulationConfig(
        **{**cfg.model_dump(), **{k: v for k, v in overrides.items() if v is not None}}
    )

    dist = simulate_from_config(cfg)
    one_sample = single_sample_sem(
        make_population(cfg), cfg.sample_size, derive_seed(cfg.random_seed, 2)
    )

    print("=" * 70)
    print("Sampling distribution of the mean")
    print("=" * 70)
    print(f"  Population: N={dist.population_size}, mean={dist.population_mean:.4f}, "
          f"sd={dist.population_std:.4f}")
    print(f"  Samples: {dist.n_simulations} x n={dist.sample_size}")
    print(f"  Mean of sample means:  {dist.mean_of_means:.4f}")
    print(f"  Empirical SEM:         {dist.empirical_sem:.4f}")
    print(f"  sigma / sqrt(n):       {dist.analytic_sem:.4f}")
    print(f"  With FPC:              {dist.finite_population_sem:.4f}")
    print(f"  One-sample s/sqrt(n):  {one_sample:.4f}")
    print("=" * 70)

    return dist.to_dict() | {"single_sample_sem": one_sample}


def run_permutation(args: argparse.Namespace) -> dict:
    cfg = PermutationTestConfig.from_yaml(args.config)
    overrides = {
        "n_permutations": args.n_permutations,
        "alternative": args.alternative,
        "random_seed": args.seed,
    }
    cfg = PermutationTestConfig(
        **{**cfg.model_dump(), **{k: v for k, v in overrides.items() if v is not None}}
    )

    frame = pd.read_csv(args.data)
    for col in (args.value, args.group):
        if col not in frame.columns:
            raise SystemExit(f"Column {col!r} not found in {args.data}")
    groups = frame[args.group].astype(str)
    group_a = frame.loc[groups == args.a, args.value].dropna().to_numpy()
    group_b = frame.loc[groups == args.b, args.value].dropna().to_numpy()

    result = permutation_test(
        group_a,
        group_b,
        n_permutations=cfg.n_permutations,
        seed=cfg.random_seed,
        alternative=cfg.alternative,
    )

    print("=" * 70)
    print(f"Permutation test: mean({args.a}) - mean({args.b})")
    print("=" * 70)
    print(f"  n({args.a})={len(group_a)}, n({args.b})={len(group_b)}")
    print(f"  Observed difference:   {result.observed:+.4f}")
    print(f"  Permutations:          {result.n_permutations}")
    print(f"  p-value ({result.alternative}): {result.p_value:.4g}")
    print("=" * 70)

    return result.to_dict()


def main():
    parser = argparse.ArgumentParser(description="Resampling demos")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--output", type=str, help="Write the result as JSON to this path")
    sub = parser.add_subparsers(dest="command", required=True)

    sem = sub.add_parser("sem", help="Simulate the sampling distribution of the mean")
    sem.add_argument("--config", type=str, help="Path to config YAML file")
    sem.add_argument("--sample-size", type=int, help="Sample size n (overrides config)")
    sem.add_argument("--n-simulations", type=int, help="Number of samples (overrides config)")
    sem.add_argument("--seed", type=int, help="Random seed (overrides config)")
    sem.set_defaults(func=run_sem)

    perm = sub.add_parser("permutation", help="Two-sample permutation test on a CSV")
    perm.add_argument("--config", type=str, help="Path to config YAML file")
    perm.add_argument("--data", type=str, required=True, help="CSV file")
    perm.add_argument("--value", type=str, required=True, help="Numeric value column")
    perm.add_argument("--group", type=str, required=True, help="Group label column")
    perm.add_argument("--a", type=str, required=True, help="Label of group A")
    perm.add_argument("--b", type=str, required=True, help="Label of group B")
    perm.add_argument("--n-permutations", type=int, help="Number of shuffles (overrides config)")
    perm.add_argument("--alternative", choices=["two-sided", "greater", "less"])
    perm.add_argument("--seed", type=int, help="Random seed (overrides config)")
    perm.set_defaults(func=run_permutation)

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        result = args.func(args)
    except (ValidationError, RepcvError) as exc:
        print(f"Invalid run: {exc}", file=sys.stderr)
        sys.exit(2)

    if args.output:
        with open(args.output, "w") as f:
            json.dump(result, f, indent=2)
        print(f"\nResults saved to: {args.output}")


if __name__ == "__main__":
    main()
