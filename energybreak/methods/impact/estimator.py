"""
Monte Carlo impact estimation between two adjacent sub-series.

The pre-change series is smoothed together with the post-change series, its
first differences become the bootstrap step population, and the observed
final post-change value is ranked against the destinations of simulated
random walks. The rarer of the two tails is reported with the direction of
the shift.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Optional

import numpy as np

from ..base.errors import InvalidArgumentError
from ..base.numeric import as_vector, diff
from ..base.utils import SeedLike, as_seed_sequence
from .bootstrap import walks
from .config import SMOOTH_HALF_WINDOW, IMPACT_N_JOBS
from .smoothing import smooth_joint

logger = logging.getLogger(__name__)


class Operator(IntEnum):
    """Whether the candidate series increased, decreased or stayed the same."""
    EQUALS = 0
    GREATER_THAN = 1
    LESS_THAN = 2


class ImpactResult(NamedTuple):
    probability: float
    direction: Operator


@dataclass(frozen=True)
class ImpactSimulation:
    start: float                 # last smoothed pre-change value
    observed: float              # final post-change value
    destinations: np.ndarray     # simulated terminal values
    p_lower: float               # share of walks ending below the observed value
    p_upper: float               # share of walks ending above the observed value

    def result(self) -> ImpactResult:
        if self.p_lower < self.p_upper:
            return ImpactResult(self.p_lower, Operator.LESS_THAN)
        if self.p_upper < self.p_lower:
            return ImpactResult(self.p_upper, Operator.GREATER_THAN)
        return ImpactResult(1.0, Operator.EQUALS)


def count_greater(x: float, xs) -> int:
    """Number of values in ``xs`` strictly greater than ``x``."""
    return int(np.count_nonzero(np.asarray(xs, dtype=float) > x))


def count_less(x: float, xs) -> int:
    """Number of values in ``xs`` strictly less than ``x``."""
    return int(np.count_nonzero(np.asarray(xs, dtype=float) < x))


class ImpactEstimator:
    """
    Reusable impact detector.

    Args:
        half_window: Moving-average points on either side of each value
        n_jobs: joblib workers for the walks; None uses the configured default
        seed: Seed for the walk generators; None draws fresh entropy. Each call
            spawns new generators, so repeated calls are independent.
    """

    def __init__(self, half_window: int = SMOOTH_HALF_WINDOW, n_jobs: Optional[int] = None,
                 seed: SeedLike = None):
        if half_window < 0:
            raise InvalidArgumentError(f"half_window ({half_window}) must be non-negative")
        self.half_window = half_window
        self.n_jobs = IMPACT_N_JOBS if n_jobs is None else n_jobs
        self._seed_seq = as_seed_sequence(seed)

    @property
    def window(self) -> int:
        return 2 * self.half_window + 1

    def _validate(self, before: np.ndarray, after: np.ndarray, iterations: int) -> None:
        if iterations <= 0:
            raise InvalidArgumentError(f"iterations ({iterations}) must be positive")
        min_before = max(self.window, 2)
        if len(before) < min_before:
            raise InvalidArgumentError(
                f"before series has {len(before)} values, needs at least {min_before}")
        if len(after) < self.window:
            raise InvalidArgumentError(
                f"after series has {len(after)} values, needs at least {self.window}")

    def simulate(self, before, after, iterations: int) -> ImpactSimulation:
        x1 = as_vector(before)
        x2 = as_vector(after)
        self._validate(x1, x2, iterations)

        x1_smooth, _ = smooth_joint(x1, x2, self.half_window)
        steps = diff(x1_smooth)
        start = float(x1_smooth[-1])
        observed = float(x2[-1])

        (seed_seq,) = self._seed_seq.spawn(1)
        destinations = walks(iterations, len(x2), start, steps, n_jobs=self.n_jobs, seed=seed_seq)

        p_lower = count_less(observed, destinations) / iterations
        p_upper = count_greater(observed, destinations) / iterations
        logger.debug(f"Impact: start={start:.6g} observed={observed:.6g} "
                     f"p_lower={p_lower:.4f} p_upper={p_upper:.4f}")
        return ImpactSimulation(start, observed, destinations, p_lower, p_upper)

    def estimate(self, before, after, iterations: int) -> ImpactResult:
        """
        Probability and direction of the level shift from ``before`` to ``after``.

        Args:
            before: Pre-change sub-series
            after: Post-change sub-series, adjacent to ``before``
            iterations: Number of simulated walks

        Returns:
            ImpactResult(probability, direction)

        Raises:
            InvalidArgumentError: If ``iterations <= 0`` or a series is shorter
                than the smoothing window
            NumericInputError: If a series is empty or non-finite
        """
        return self.simulate(before, after, iterations).result()

    detect = estimate


def detect_impact(before, after, iterations: int, half_window: int = SMOOTH_HALF_WINDOW,
                  seed: SeedLike = None, n_jobs: Optional[int] = None) -> ImpactResult:
    """
    Monte Carlo impact detection between two disjoint, adjacent sub-series.

    The sub-series must be chosen a priori. Increase ``iterations`` to
    improve the accuracy of the probability.
    """
    estimator = ImpactEstimator(half_window=half_window, n_jobs=n_jobs, seed=seed)
    return estimator.estimate(before, after, iterations)
