"""
Divisive (E-Divisive) changepoint detection.

The detector repeatedly proposes the split releasing the most energy over all
current clusters and keeps it only while the permutation test finds it
significant. Complexity is O(k n^2) for k changepoints, plus the permutation
repetitions.
"""

import bisect
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from ..base.errors import InvalidArgumentError
from ..base.numeric import as_vector
from ..base.utils import SeedLike
from .distance import DistanceMatrix
from .energy import SplitCache, best_cluster_split
from .permutation import PermutationTester

logger = logging.getLogger(__name__)


class ChangepointSet:
    """Sorted, deduplicated changepoints bounded by the 0 and n sentinels."""

    def __init__(self, n: int):
        self.n = n
        self._points = [0, n]

    def add(self, index: int) -> None:
        if not 0 < index < self.n:
            raise ValueError(f"changepoint {index} outside (0, {self.n})")
        pos = bisect.bisect_left(self._points, index)
        if self._points[pos] != index:
            self._points.insert(pos, index)

    def clusters(self) -> List[Tuple[int, int]]:
        return list(zip(self._points[:-1], self._points[1:]))

    def to_list(self) -> List[int]:
        return list(self._points)

    def __iter__(self) -> Iterator[int]:
        return iter(self._points)

    def __contains__(self, index: int) -> bool:
        return index in self._points

    def __len__(self) -> int:
        return len(self._points)


@dataclass
class ChangeSummary:
    changepoints: List[int]
    candidates: List[int] = field(default_factory=list)       # accepted, in discovery order
    energies: List[float] = field(default_factory=list)
    p_values: List[float] = field(default_factory=list)
    rejected: Optional[int] = None
    rejected_p_value: Optional[float] = None
    permutations: int = 0

    @property
    def n_changes(self) -> int:
        """Number of interior changepoints (sentinels excluded)."""
        return len(self.changepoints) - 2


def validate_parameters(significance: float, permutations: int, min_size: int) -> None:
    if not 0.0 <= significance <= 1.0:
        raise InvalidArgumentError(f"significance ({significance}) should be bound [0, 1]")
    if min_size < 2:
        raise InvalidArgumentError(f"min_size ({min_size}) must be greater than 1")
    if permutations < 0:
        raise InvalidArgumentError(f"permutations ({permutations}) must be non-negative")


class DivisiveDetector:
    """
    Hierarchical divisive changepoint detector based on energy statistics.

    Args:
        significance: Accept a proposed split when its p-value is at most this
        permutations: Permutation test repetitions per proposed split
        min_size: Minimum number of observations between changepoints
        seed: Seed for the permutation test generators
        n_jobs: joblib workers for the permutation repetitions
    """

    def __init__(self, significance: float, permutations: int, min_size: int,
                 seed: SeedLike = None, n_jobs: int = 1):
        validate_parameters(significance, permutations, min_size)
        self.significance = significance
        self.permutations = permutations
        self.min_size = min_size
        self.tester = PermutationTester(seed=seed, n_jobs=n_jobs)

    def run(self, sequence) -> ChangeSummary:
        x = as_vector(sequence)
        n = len(x)
        distance = DistanceMatrix.build(x)
        changes = ChangepointSet(n)
        cache = SplitCache()
        summary = ChangeSummary(changepoints=changes.to_list(), permutations=self.permutations)

        for iteration in range(n):
            split, interval_start = best_cluster_split(changes, distance, self.min_size, cache)

            # not able to meet minimum size constraint
            if not split.found:
                logger.debug(f"Iteration {iteration}: no interval can be split further")
                break

            result = self.tester.test(distance, changes, self.min_size, split.energy, self.permutations)
            if not result.is_significant(self.significance):
                logger.debug(f"Iteration {iteration}: candidate {split.index} rejected (p={result.p_value})")
                summary.rejected = split.index
                summary.rejected_p_value = result.p_value
                break

            changes.add(split.index)
            cache.invalidate(interval_start)
            summary.candidates.append(split.index)
            summary.energies.append(split.energy)
            summary.p_values.append(result.p_value)
            logger.debug(f"Iteration {iteration}: accepted {split.index} "
                         f"(energy={split.energy:.6g}, p={result.p_value:.4f})")

        summary.changepoints = changes.to_list()
        logger.info(f"Detected {summary.n_changes} changepoints in {n} observations")
        return summary


def detect_changes(sequence, significance: float, permutations: int, min_size: int,
                   seed: SeedLike = None, n_jobs: int = 1) -> List[int]:
    """
    Divisive changepoint detection of structural changes in ``sequence``.

    Args:
        sequence: Ordered real-valued observations
        significance: Significance level for accepting a changepoint, in [0, 1]
        permutations: Permutations run by each significance test
        min_size: Minimum cluster size, at least 2
        seed: Seed for the permutation test
        n_jobs: joblib workers for the permutation repetitions

    Returns:
        Ascending changepoints, always starting with 0 and ending with n

    Raises:
        InvalidArgumentError: If a parameter is out of range
        NumericInputError: If the sequence is empty or non-finite
    """
    detector = DivisiveDetector(significance, permutations, min_size, seed=seed, n_jobs=n_jobs)
    return detector.run(sequence).changepoints
