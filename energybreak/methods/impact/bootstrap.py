"""
Bootstrapped random walks.

Each walk starts at the last smoothed pre-change value and takes steps drawn
with replacement from the historical step population. Only terminal values
are kept.
"""

import logging
from typing import List, Tuple

import numpy as np
from joblib import Parallel, delayed, effective_n_jobs

from ..base.utils import SeedLike, as_seed_sequence, spawn_generators
from .config import BLOCK_ELEMENTS

logger = logging.getLogger(__name__)


def simulate(start: float, n_steps: int, steps: np.ndarray, rng: np.random.Generator) -> float:
    """Terminal value of one walk of ``n_steps`` resampled steps."""
    which = rng.integers(0, len(steps), size=n_steps)
    return float(start + steps[which].sum())


def simulate_many(start: float, n_steps: int, steps: np.ndarray,
                  rng: np.random.Generator, size: int) -> np.ndarray:
    """Terminal values of ``size`` independent walks."""
    which = rng.integers(0, len(steps), size=(size, n_steps))
    return start + steps[which].sum(axis=1)


def walk_blocks(iterations: int, n_steps: int) -> List[Tuple[int, int]]:
    """Slot ranges of the result buffer, each simulated by its own generator."""
    per_block = max(1, BLOCK_ELEMENTS // max(n_steps, 1))
    return [(lo, min(lo + per_block, iterations)) for lo in range(0, iterations, per_block)]


def _walk_block(destinations: np.ndarray, lo: int, hi: int, start: float, n_steps: int,
                steps: np.ndarray, rng: np.random.Generator) -> None:
    destinations[lo:hi] = simulate_many(start, n_steps, steps, rng, hi - lo)


def walks(iterations: int, n_steps: int, start: float, steps: np.ndarray,
          n_jobs: int = 1, seed: SeedLike = None) -> np.ndarray:
    """
    Destinations of ``iterations`` bootstrapped random walks.

    Blocks of walks run on a joblib thread pool; every block writes to its own
    slice of one pre-sized buffer with a generator spawned for it alone, so
    the output for a given seed does not depend on ``n_jobs``.

    Args:
        iterations: Number of walks
        n_steps: Steps per walk
        start: Starting value of every walk
        steps: Step population sampled with replacement
        n_jobs: joblib workers (-1 for all CPUs)
        seed: Seed or SeedSequence for the block generators

    Returns:
        Array of ``iterations`` terminal values
    """
    steps = np.asarray(steps, dtype=float)
    if len(steps) == 0:
        raise ValueError("step population must not be empty")

    destinations = np.empty(iterations, dtype=float)
    blocks = walk_blocks(iterations, n_steps)
    rngs = spawn_generators(as_seed_sequence(seed), len(blocks))
    n_workers = min(effective_n_jobs(n_jobs), len(blocks))

    logger.debug(f"Simulating {iterations} walks of {n_steps} steps in {len(blocks)} blocks on {n_workers} workers")
    Parallel(n_jobs=n_workers, require='sharedmem')(
        delayed(_walk_block)(destinations, lo, hi, start, n_steps, steps, rng)
        for (lo, hi), rng in zip(blocks, rngs)
    )
    return destinations
