#!/usr/bin/env python
"""
Repeated k-fold cross-validation accuracy estimate.

Fits a fresh model on every fold of R independently randomized k-fold
partitions, then reports the mean accuracy, its standard deviation and a
confidence interval.

Usage:
    python scripts/run_repeated_cv.py
    python scripts/run_repeated_cv.py --data data/iris.csv --label species
    python scripts/run_repeated_cv.py --folds 10 --repetitions 50 --model logistic_regression
    python scripts/run_repeated_cv.py --config configs/repeated_cv.yaml --n-jobs 4

Without --data, a synthetic dataset is generated from
configs/synthetic_data.yaml. Results are saved to
experiments/repeated_cv_{timestamp}/.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

import yaml
from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from repcv.config import CrossValidationConfig, ModelSpec, SyntheticDataConfig
from repcv.data import load_csv_dataset, make_classification_dataset
from repcv.errors import CrossValidationRunError, RepcvError
from repcv.experiments import cross_validate
from repcv.models import available_models


def build_config(args: argparse.Namespace) -> CrossValidationConfig:
    """Load the YAML config and apply CLI overrides."""
    cfg = CrossValidationConfig.from_yaml(args.config)
    overrides = {
        "n_folds": args.folds,
        "n_repetitions": args.repetitions,
        "base_seed": args.seed,
        "confidence_z": args.z,
        "interval_method": args.interval,
        "n_jobs": args.n_jobs,
    }
    updates = {k: v for k, v in overrides.items() if v is not None}
    if args.model is not None:
        # Params in the config belong to the configured model only
        params = cfg.model.params if args.model == cfg.model.name else {}
        updates["model"] = ModelSpec(name=args.model, params=params)
    if args.unstratified:
        updates["stratified"] = False
    if args.no_progress:
        updates["show_progress"] = False
    return CrossValidationConfig(**{**cfg.model_dump(), **updates})


def main():
    parser = argparse.ArgumentParser(
        description="Repeated k-fold cross-validation accuracy estimate"
    )
    parser.add_argument("--config", type=str, help="Path to config YAML file")
    parser.add_argument("--data", type=str, help="CSV file (default: synthetic data)")
    parser.add_argument("--label", type=str, default="y", help="Label column in --data")
    parser.add_argument("--synthetic-config", type=str, help="Synthetic data YAML file")
    parser.add_argument("--folds", type=int, help="Number of folds k (overrides config)")
    parser.add_argument("--repetitions", type=int, help="Number of repetitions (overrides config)")
    parser.add_argument("--seed", type=int, help="Base seed (overrides config)")
    parser.add_argument("--model", choices=available_models(), help="Model family (overrides config)")
    parser.add_argument("--z", type=float, help="Confidence multiplier (overrides config)")
    parser.add_argument("--interval", choices=["normal", "percentile"], help="Interval method")
    parser.add_argument("--n-jobs", type=int, help="Worker threads (overrides config)")
    parser.add_argument("--unstratified", action="store_true", help="Plain shuffled k-fold")
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    parser.add_argument("--name", type=str, default="", help="Experiment name suffix")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = build_config(args)
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        sys.exit(2)

    if args.data:
        dataset = load_csv_dataset(args.data, label=args.label)
        data_source = args.data
    else:
        data_cfg = SyntheticDataConfig.from_yaml(args.synthetic_config)
        dataset = make_classification_dataset(data_cfg)
        data_source = f"synthetic (seed={data_cfg.random_seed})"

    # Create output directory
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    exp_name = f"repeated_cv_{timestamp}"
    if args.name:
        exp_name += f"_{args.name}"
    exp_dir = PROJECT_ROOT / "experiments" / exp_name
    exp_dir.mkdir(parents=True, exist_ok=True)

    print("=" * 70)
    print("Repeated k-fold cross-validation")
    print("=" * 70)
    print(f"  Config: {args.config or 'configs/repeated_cv.yaml'}")
    print(f"  Data: {data_source}")
    print(f"  Records: {dataset.n_records}, classes: {dataset.class_counts()}")
    print(f"  Model: {cfg.model.name} {cfg.model.params}")
    print(f"  Folds x repetitions: {cfg.n_folds} x {cfg.n_repetitions}")
    print(f"  Stratified: {cfg.stratified}, base seed: {cfg.base_seed}")
    print(f"  Output: {exp_dir}")
    print("=" * 70)

    with open(exp_dir / "config.yaml", "w") as f:
        yaml.dump(cfg.model_dump(), f, default_flow_style=False)

    try:
        report = cross_validate(dataset, cfg)
    except CrossValidationRunError as exc:
        print(f"\nRun failed: {exc}", file=sys.stderr)
        with open(exp_dir / "failures.json", "w") as f:
            json.dump(
                [{"repetition": fail.repetition, "fold": fail.fold, "error": str(fail.error)}
                 for fail in exc.failures],
                f,
                indent=2,
            )
        sys.exit(1)
    except RepcvError as exc:
        print(f"\nInvalid run: {exc}", file=sys.stderr)
        sys.exit(2)

    report.samples.to_frame().to_csv(exp_dir / "folds.csv", index=False)
    with open(exp_dir / "estimate.json", "w") as f:
        json.dump(report.to_dict(), f, indent=2)

    est = report.estimate
    rep_means = report.samples.repetition_means()

    print("\n" + "=" * 70)
    print("RESULTS SUMMARY")
    print("=" * 70)
    print(f"  Mean accuracy:         {est.mean:.4f}")
    print(f"  Std (per fold):        {est.std:.4f}")
    print(f"  SEM:                   {est.sem:.4f}")
    print(f"  {est.coverage:.0%} interval ({est.method}): [{est.lower:.4f}, {est.upper:.4f}]")
    if len(rep_means) > 1:
        print(f"  Repetition means:      {rep_means.mean():.4f} +/- {rep_means.std(ddof=1):.4f}")
    print("=" * 70)
    print(f"\nResults saved to: {exp_dir}")
    print(f"  - Per-fold accuracies: folds.csv")
    print(f"  - Estimate: estimate.json")


if __name__ == "__main__":
    main()
