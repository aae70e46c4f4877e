"""
Tests for the energy-statistic split search.
"""

import math

import numpy as np
import pytest

from energybreak.methods.edivisive import (
    DistanceMatrix, SplitCache, Splitter, best_cluster_split, calculate_energy, find_best_split
)


def brute_force_split(x, start, stop, min_size):
    """Direct O(n^3) search over every (tau1, tau2) pair of the interval."""
    d = np.abs(np.subtract.outer(x, x))[start:stop, start:stop]
    n = stop - start
    best_index, best_energy = -1, -math.inf
    for tau1 in range(min_size, n - min_size + 1):
        for tau2 in range(tau1 + min_size, n + 1):
            a = d[:tau1, :tau1].sum() / 2.0
            b = d[tau1:tau2, tau1:tau2].sum() / 2.0
            ab = d[:tau1, tau1:tau2].sum()
            energy = float(calculate_energy(a, b, ab, tau1, tau2))
            if energy > best_energy:
                best_index, best_energy = tau1 + start, energy
    return best_index, best_energy


class TestFindBestSplit:

    def test_reference_series_first_split(self, mock_short):
        splitter = find_best_split(0, 20, DistanceMatrix.build(mock_short), 3)
        assert splitter.found
        assert splitter.index == 8
        assert splitter.energy == pytest.approx(0.26494, abs=1e-5)

    @pytest.mark.parametrize("seed,start,stop,min_size", [
        (0, 0, 25, 2),
        (1, 0, 30, 4),
        (2, 5, 28, 3),
        (3, 10, 40, 5),
    ])
    def test_matches_direct_search(self, seed, start, stop, min_size):
        x = np.random.default_rng(seed).normal(size=40)
        splitter = find_best_split(start, stop, DistanceMatrix.build(x), min_size)
        index, energy = brute_force_split(x, start, stop, min_size)
        assert splitter.index == index
        assert splitter.energy == pytest.approx(energy, rel=1e-9)

    def test_interval_too_short(self):
        splitter = find_best_split(0, 5, DistanceMatrix.build(np.arange(5.0)), 3)
        assert not splitter.found
        assert splitter.energy == -math.inf

    def test_interval_of_exactly_two_clusters(self):
        x = np.array([0.0, 0.1, 0.2, 5.0, 5.1, 5.2, 9.0])
        splitter = find_best_split(0, 6, DistanceMatrix.build(x), 3)
        assert splitter.index == 3

    def test_index_is_absolute(self):
        x = np.concatenate([np.zeros(10), np.zeros(6), np.full(6, 4.0)])
        x = x + np.random.default_rng(7).normal(0, 0.01, len(x))
        splitter = find_best_split(10, 22, DistanceMatrix.build(x), 3)
        assert splitter.index == 16


class TestBestClusterSplit:

    def test_picks_interval_with_most_energy(self):
        rng = np.random.default_rng(3)
        x = np.concatenate([rng.normal(0, 0.1, 20), rng.normal(0, 0.1, 10), rng.normal(6, 0.1, 10)])
        best, start = best_cluster_split([0, 20, 40], DistanceMatrix.build(x), 3)
        assert start == 20
        assert best.index == 30

    def test_nothing_to_split(self):
        best, start = best_cluster_split([0, 4, 8], DistanceMatrix.build(np.arange(8.0)), 3)
        assert not best.found
        assert start == -1

    def test_uses_cached_splitters(self):
        d = DistanceMatrix.build(np.arange(12.0))
        cache = SplitCache()
        cache.set(0, Splitter(index=2, energy=1e9))
        best, start = best_cluster_split([0, 12], d, 3, cache)
        assert best.index == 2
        assert start == 0

    def test_fills_cache(self):
        d = DistanceMatrix.build(np.random.default_rng(0).normal(size=20))
        cache = SplitCache()
        best, _ = best_cluster_split([0, 10, 20], d, 3, cache)
        assert len(cache) == 2
        assert 0 in cache and 10 in cache
        assert best.energy == max(cache.get(0).energy, cache.get(10).energy)


class TestSplitCache:

    def test_invalidate(self):
        cache = SplitCache()
        cache.set(5, Splitter(7, 0.5))
        cache.invalidate(5)
        cache.invalidate(99)
        assert cache.get(5) is None
        assert len(cache) == 0
