"""
Permutation significance test for a proposed E-Divisive changepoint.

Observations are shuffled only within the clusters already established by
accepted changepoints. Every repetition works on its own permuted copy of the
distance matrix and draws from its own generator.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List

import numpy as np
from joblib import Parallel, delayed

from ..base.errors import InvalidArgumentError
from ..base.utils import SeedLike, as_seed_sequence, spawn_generators
from .distance import DistanceMatrix
from .energy import best_cluster_split

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PermutationSummary:
    p_value: float
    permutations: int     # -1 when no test was run
    over: int = 0         # repetitions whose energy exceeded the observed one

    @property
    def skipped(self) -> bool:
        return self.permutations < 0

    def is_significant(self, significance: float) -> bool:
        """An untested candidate is never significant."""
        return not self.skipped and self.p_value <= significance


def cluster_permutation(bounds: Iterable[int], rng: np.random.Generator) -> np.ndarray:
    """Index order shuffled independently inside each ``[bounds[i], bounds[i+1])``."""
    points = sorted(bounds)
    order = np.arange(points[-1])
    for lo, hi in zip(points[:-1], points[1:]):
        order[lo:hi] = rng.permutation(order[lo:hi])
    return order


def permuted_best_energy(distance: DistanceMatrix, bounds: List[int], min_size: int,
                         rng: np.random.Generator) -> float:
    order = cluster_permutation(bounds, rng)
    best, _ = best_cluster_split(bounds, distance.permuted(order), min_size)
    return best.energy


class PermutationTester:
    """
    Within-cluster permutation test.

    Args:
        seed: Seed (or SeedSequence) for the repetition generators; None draws
            fresh entropy
        n_jobs: joblib workers for the repetitions (1 runs them inline)
    """

    def __init__(self, seed: SeedLike = None, n_jobs: int = 1):
        self._seed_seq = as_seed_sequence(seed)
        self.n_jobs = n_jobs

    def test(self, distance: DistanceMatrix, changes: Iterable[int], min_size: int,
             observed_energy: float, permutations: int) -> PermutationSummary:
        """
        p-value of ``observed_energy`` under within-cluster relabelling.

        Args:
            distance: Canonical distance matrix (never modified)
            changes: Accepted changepoints including the 0 and n sentinels
            min_size: Minimum cluster size used by the split search
            observed_energy: Energy of the proposed split
            permutations: Number of repetitions; 0 skips the test

        Returns:
            PermutationSummary with ``p = (over + 1) / (permutations + 1)``
        """
        if permutations < 0:
            raise InvalidArgumentError(f"permutations ({permutations}) must be non-negative")
        if permutations == 0:
            return PermutationSummary(p_value=math.nan, permutations=-1)

        bounds = sorted(changes)
        rngs = spawn_generators(self._seed_seq, permutations)
        if self.n_jobs == 1:
            energies = [permuted_best_energy(distance, bounds, min_size, rng) for rng in rngs]
        else:
            energies = Parallel(n_jobs=self.n_jobs)(
                delayed(permuted_best_energy)(distance, bounds, min_size, rng) for rng in rngs
            )

        over = int(np.sum(np.asarray(energies) > observed_energy))
        p_value = (over + 1) / (permutations + 1)
        logger.debug(f"Permutation test: observed={observed_energy:.6g} over={over}/{permutations} p={p_value:.4f}")
        return PermutationSummary(p_value=p_value, permutations=permutations, over=over)
