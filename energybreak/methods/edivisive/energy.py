"""
Energy-statistic split search for E-Divisive changepoint detection.

For an interval the best split is the boundary ``tau1`` (paired with some
right-cluster end ``tau2``) that maximizes the scaled two-sample energy
distance between ``[0, tau1)`` and ``[tau1, tau2)``. Within-cluster and
between-cluster distance sums are carried from one candidate to the next, so
one interval costs O(n^2) instead of O(n^3).
"""

import math
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

import numpy as np

from .distance import DistanceMatrix


@dataclass
class Splitter:
    """Best known split of an interval: absolute index and energy released."""
    index: int = -1
    energy: float = -math.inf

    @property
    def found(self) -> bool:
        return self.index != -1


def calculate_energy(a, b, ab, tau1, tau2):
    """Scaled energy statistic; ``b``, ``ab`` and ``tau2`` may be arrays."""
    tau1 = float(tau1)
    tau2 = np.asarray(tau2, dtype=float)
    scale_a = 2.0 * a / (tau1 * (tau1 - 1))
    scale_b = 2.0 * b / ((tau2 - tau1 - 1) * (tau2 - tau1))
    scale_ab = 2.0 * ab / ((tau2 - tau1) * tau1)
    info = scale_ab - scale_b - scale_a
    return info * (tau1 * (tau2 - tau1) / tau2)


def _consider(best: Splitter, energies: np.ndarray, tau1: int, start: int) -> None:
    i = int(np.argmax(energies))
    if energies[i] > best.energy:
        best.index = tau1 + start
        best.energy = float(energies[i])


def find_best_split(start: int, stop: int, distance: DistanceMatrix, min_size: int) -> Splitter:
    """
    Best split of the half-open interval ``[start, stop)``.

    Args:
        start: First index of the interval
        stop: One past the last index of the interval
        distance: Distance matrix of the whole series
        min_size: Minimum number of observations per cluster

    Returns:
        Splitter with the absolute index of the split, or the default
        Splitter when the interval is shorter than ``2 * min_size``
    """
    n = stop - start
    best = Splitter()
    if n < 2 * min_size:
        return best

    d = distance.block(start, stop)

    tau1 = min_size
    tau2 = 2 * min_size

    # within distance for left cluster
    a = d[:tau1, :tau1].sum() / 2.0
    # within distance for right cluster, indexed by tau2
    b = np.full(n + 1, d[tau1:tau2, tau1:tau2].sum() / 2.0)
    # between distance for both clusters, indexed by tau2
    ab = np.full(n + 1, d[:tau1, tau1:tau2].sum())

    # grow the right cluster one row at a time
    for t2 in range(tau2 + 1, n + 1):
        b[t2] = b[t2 - 1] + d[t2 - 1, tau1:t2 - 1].sum()
        ab[t2] = ab[t2 - 1] + d[t2 - 1, :tau1].sum()

    tau2s = np.arange(tau2, n + 1)
    _consider(best, calculate_energy(a, b[tau2s], ab[tau2s], tau1, tau2s), tau1, start)

    # shift the boundary: point tau1-1 leaves the right cluster for the left
    for tau1 in range(min_size + 1, n - min_size + 1):
        row = d[tau1 - 1]
        add_a = row[:tau1 - 1].sum()
        a += add_a

        tau2s = np.arange(tau1 + min_size, n + 1)
        add_b = np.cumsum(row[tau1:n])[min_size - 1:]
        b[tau2s] -= add_b
        ab[tau2s] += add_b - add_a

        _consider(best, calculate_energy(a, b[tau2s], ab[tau2s], tau1, tau2s), tau1, start)

    return best


class SplitCache:
    """Best split per open interval, keyed by the interval's left boundary."""

    def __init__(self):
        self._store: Dict[int, Splitter] = {}

    def get(self, start: int) -> Optional[Splitter]:
        return self._store.get(start)

    def set(self, start: int, splitter: Splitter) -> None:
        self._store[start] = splitter

    def invalidate(self, start: int) -> None:
        self._store.pop(start, None)

    def __contains__(self, start: int) -> bool:
        return start in self._store

    def __len__(self) -> int:
        return len(self._store)


def best_cluster_split(bounds: Iterable[int], distance: DistanceMatrix, min_size: int,
                       cache: Optional[SplitCache] = None) -> Tuple[Splitter, int]:
    """
    Best split over every interval delimited by consecutive ``bounds``.

    Intervals with a cached splitter are not rescanned. Without a cache (the
    permutation test) every interval is searched.

    Returns:
        Tuple of (best splitter, left boundary of the interval it splits);
        the boundary is -1 when no interval can be split
    """
    points = sorted(bounds)
    best = Splitter()
    best_start = -1
    for start, stop in zip(points[:-1], points[1:]):
        splitter = cache.get(start) if cache is not None else None
        if splitter is None:
            splitter = find_best_split(start, stop, distance, min_size)
            if cache is not None:
                cache.set(start, splitter)
        if splitter.energy > best.energy:
            best = splitter
            best_start = start
    return best, best_start
