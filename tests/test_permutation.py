"""
Tests for the within-cluster permutation test.
"""

import math

import numpy as np
import pytest

from energybreak.methods.base import InvalidArgumentError
from energybreak.methods.edivisive import (
    DistanceMatrix, PermutationSummary, PermutationTester, cluster_permutation, find_best_split
)


def test_permutation_stays_within_clusters():
    rng = np.random.default_rng(0)
    bounds = [0, 4, 11, 20]
    order = cluster_permutation(bounds, rng)
    assert sorted(order) == list(range(20))
    for lo, hi in zip(bounds[:-1], bounds[1:]):
        assert sorted(order[lo:hi]) == list(range(lo, hi))


def test_canonical_matrix_is_not_modified(mock_short):
    d = DistanceMatrix.build(mock_short)
    before = d.as_array().copy()
    observed = find_best_split(0, 20, d, 3).energy
    PermutationTester(seed=1).test(d, [0, 20], 3, observed, 25)
    assert np.array_equal(d.as_array(), before)


def test_p_value_bounds(mock_short):
    d = DistanceMatrix.build(mock_short)
    observed = find_best_split(0, 20, d, 3).energy
    result = PermutationTester(seed=2).test(d, [0, 20], 3, observed, 49)
    assert 1.0 / 50 <= result.p_value <= 1.0
    assert result.p_value == pytest.approx((result.over + 1) / 50)


def test_reference_series_split_is_not_significant(mock_short):
    d = DistanceMatrix.build(mock_short)
    observed = find_best_split(0, 20, d, 3).energy
    result = PermutationTester(seed=3).test(d, [0, 20], 3, observed, 199)
    assert not result.is_significant(0.05)


def test_clear_shift_is_significant(step_series):
    d = DistanceMatrix.build(step_series)
    observed = find_best_split(0, 80, d, 5).energy
    result = PermutationTester(seed=4).test(d, [0, 80], 5, observed, 99)
    assert result.over == 0
    assert result.p_value == pytest.approx(0.01)
    assert result.is_significant(0.05)


def test_zero_permutations_is_never_significant():
    d = DistanceMatrix.build(np.arange(10.0))
    result = PermutationTester(seed=0).test(d, [0, 10], 2, 1.0, 0)
    assert result.skipped
    assert math.isnan(result.p_value)
    assert not result.is_significant(1.0)


def test_negative_permutations():
    d = DistanceMatrix.build(np.arange(10.0))
    with pytest.raises(InvalidArgumentError):
        PermutationTester().test(d, [0, 10], 2, 1.0, -1)


def test_seeded_runs_are_reproducible(mock_short):
    d = DistanceMatrix.build(mock_short)
    observed = find_best_split(0, 20, d, 3).energy
    first = PermutationTester(seed=11).test(d, [0, 20], 3, observed, 30)
    second = PermutationTester(seed=11).test(d, [0, 20], 3, observed, 30)
    assert first == second


def test_parallel_repetitions_match_sequential(mock_short):
    d = DistanceMatrix.build(mock_short)
    observed = find_best_split(0, 20, d, 3).energy
    sequential = PermutationTester(seed=5, n_jobs=1).test(d, [0, 20], 3, observed, 20)
    parallel = PermutationTester(seed=5, n_jobs=2).test(d, [0, 20], 3, observed, 20)
    assert sequential == parallel


def test_summary_significance_rule():
    assert PermutationSummary(p_value=0.05, permutations=99).is_significant(0.05)
    assert not PermutationSummary(p_value=0.06, permutations=99).is_significant(0.05)
