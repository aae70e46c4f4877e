#!/usr/bin/env python3
"""
energybreak: example script (synthetic demo + dataset generation)
==================================================================

This script demonstrates the two detection engines in two steps:
  1) **Synthetic demo**: build a toy series with a level shift, locate the
     changepoints with E-Divisive and estimate the impact of the shift.
  2) **Dataset generation**: optionally write a parquet (or CSV) file with
     many synthetic series laid out as [id, time, value, period], ready for
     the ``energybreak`` batch command.

Usage
-----
# Demo only
python synthetic_demo.py

# Demo plus a 200-series dataset, then a batch run over it
python synthetic_demo.py --write X_synth.parquet --n_ids 200
energybreak --method impact --input X_synth.parquet --output-pred impact.csv --output-meta impact_meta.csv
"""
from __future__ import annotations

import argparse
from typing import List, Optional

import numpy as np
import pandas as pd

from energybreak import detect_changes, detect_impact


# -----------------------------
# Synthetic data
# -----------------------------

def make_synthetic(
    n0: int = 120,
    n1: int = 80,
    shift: float = 1.5,
    sigma: float = 1.0,
    phi: float = 0.3,  # AR(1) coeff both segments
    seed: int = 123,
) -> tuple[np.ndarray, np.ndarray]:
    """Build a toy series with a single 0→1 boundary and a mean shift of ``shift``.

    Returns
    -------
    values: np.ndarray shape (n0+n1,)
    periods: np.ndarray of 0/1 labels
    """
    rng = np.random.default_rng(seed)
    n = n0 + n1
    e = sigma * rng.standard_normal(n)
    mu = np.where(np.arange(n) < n0, 0.0, shift)

    values = np.zeros(n, dtype=float)
    for t in range(n):
        prev = values[t-1] - mu[t-1] if t > 0 else 0.0
        values[t] = mu[t] + phi * prev + e[t]

    periods = np.concatenate([np.zeros(n0, dtype=int), np.ones(n1, dtype=int)])
    return values, periods


def make_dataset(n_ids: int, seed: int = 42) -> pd.DataFrame:
    """Half of the series carry a shift at their boundary, the other half none."""
    rng = np.random.default_rng(seed)
    frames = []
    for id_ in range(n_ids):
        shift = float(rng.choice([-2.0, 2.0])) if id_ % 2 == 0 else 0.0
        n0 = int(rng.integers(60, 120))
        n1 = int(rng.integers(30, 80))
        vals, per = make_synthetic(n0=n0, n1=n1, shift=shift, seed=int(rng.integers(2**31)))
        frames.append(pd.DataFrame({
            "id": id_, "time": np.arange(n0 + n1), "value": vals, "period": per,
        }))
    return pd.concat(frames, ignore_index=True)


# -----------------------------
# Demo
# -----------------------------

def run_synthetic_demo(permutations: int, iterations: int, min_size: int, seed: int) -> dict:
    print("\n[1/2] Synthetic demo: mean shift (+1.5) with AR(1) phi=0.3 ...")
    vals, per = make_synthetic(seed=seed)
    n0 = int((per == 0).sum())

    changes = detect_changes(vals, 0.05, permutations, min_size, seed=seed)
    print(f"  changepoints                   = {changes}")
    print(f"  true boundary                  = {n0}")

    probability, direction = detect_impact(vals[:n0], vals[n0:], iterations, seed=seed)
    print(f"  impact probability             = {probability:.6f}")
    print(f"  impact direction               = {direction.name}")
    return {"changepoints": changes, "probability": probability, "direction": direction}


# -----------------------------
# CLI
# -----------------------------

def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="energybreak example: synthetic demo + dataset generation")
    ap.add_argument("--write", default=None, help="Write a synthetic dataset to this parquet/CSV path")
    ap.add_argument("--n_ids", type=int, default=100, help="Number of series in the synthetic dataset")
    ap.add_argument("--permutations", type=int, default=199, help="Permutations per E-Divisive test")
    ap.add_argument("--iterations", type=int, default=1000, help="Random walks per impact estimate")
    ap.add_argument("--min_size", type=int, default=20, help="Minimum cluster size for E-Divisive")
    ap.add_argument("--seed", type=int, default=42, help="Random seed for the data and both engines")
    args = ap.parse_args(argv)

    run_synthetic_demo(args.permutations, args.iterations, args.min_size, args.seed)

    if args.write:
        print(f"\n[2/2] Writing {args.n_ids} synthetic series ...")
        X = make_dataset(args.n_ids, seed=args.seed)
        if args.write.lower().endswith(".csv"):
            X.to_csv(args.write, index=False)
        else:
            X.to_parquet(args.write, index=False)
        print(f"Saved {args.write} with shape {X.shape}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
