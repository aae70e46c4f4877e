"""
Tests for divisive changepoint detection.
"""

import math

import numpy as np
import pytest

from energybreak import InvalidArgumentError, NumericInputError, detect_changes
from energybreak.methods.edivisive import ChangepointSet, DivisiveDetector
from energybreak.methods.edivisive import energy


class TestDetectChanges:
    """End-to-end behaviour of detect_changes."""

    def test_reference_series(self, mock_short):
        """The first candidate (8) is proposed but fails the permutation test."""
        summary = DivisiveDetector(0.05, 1000, 3, seed=123).run(mock_short)
        assert summary.changepoints == [0, 20]
        assert summary.rejected == 8
        assert summary.rejected_p_value > 0.05
        assert summary.n_changes == 0

    def test_detects_clear_shift(self, step_series):
        changes = detect_changes(step_series, 0.05, 99, 5, seed=1)
        assert 40 in changes
        assert changes[0] == 0 and changes[-1] == 80

    def test_two_shifts(self):
        rng = np.random.default_rng(9)
        x = np.concatenate([rng.normal(0, 0.5, 30), rng.normal(6, 0.5, 30), rng.normal(-6, 0.5, 30)])
        changes = detect_changes(x, 0.05, 99, 5, seed=2)
        assert 30 in changes
        assert 60 in changes

    def test_changepoints_respect_min_size(self, step_series):
        changes = detect_changes(step_series, 0.5, 19, 7, seed=3)
        assert changes == sorted(set(changes))
        assert all(hi - lo >= 7 for lo, hi in zip(changes[:-1], changes[1:]))

    def test_significance_one_splits_until_too_small(self):
        x = np.random.default_rng(4).normal(size=30)
        changes = detect_changes(x, 1.0, 5, 3, seed=4)
        for lo, hi in zip(changes[:-1], changes[1:]):
            assert 3 <= hi - lo < 6

    def test_zero_permutations_accepts_nothing(self, step_series):
        summary = DivisiveDetector(0.05, 0, 5).run(step_series)
        assert summary.changepoints == [0, 80]
        assert summary.rejected == 40
        assert math.isnan(summary.rejected_p_value)

    def test_short_series_returns_sentinels(self):
        assert detect_changes([1.0, 2.0, 3.0], 0.05, 10, 2) == [0, 3]

    def test_seeded_runs_are_reproducible(self):
        x = np.random.default_rng(5).normal(size=60)
        assert detect_changes(x, 0.3, 30, 4, seed=8) == detect_changes(x, 0.3, 30, 4, seed=8)

    def test_summary_records_accepted_splits(self, step_series):
        summary = DivisiveDetector(0.05, 99, 5, seed=6).run(step_series)
        assert summary.candidates[0] == 40
        assert len(summary.candidates) == len(summary.energies) == len(summary.p_values)
        assert summary.n_changes == len(summary.candidates)
        assert all(p <= 0.05 for p in summary.p_values)


class TestSplitCacheReuse:

    def test_only_consumed_interval_is_rescanned(self, monkeypatch):
        """Each interval of the canonical matrix is searched exactly once."""
        scanned = []
        canonical = []
        original = energy.find_best_split

        def spy(start, stop, distance, min_size):
            if not canonical:
                canonical.append(distance)
            if distance is canonical[0]:
                scanned.append((start, stop))
            return original(start, stop, distance, min_size)

        monkeypatch.setattr(energy, "find_best_split", spy)
        rng = np.random.default_rng(9)
        x = np.concatenate([rng.normal(0, 0.5, 30), rng.normal(6, 0.5, 30), rng.normal(-6, 0.5, 30)])
        summary = DivisiveDetector(0.05, 99, 5, seed=2).run(x)

        assert summary.n_changes >= 2
        assert scanned[0] == (0, 90)
        assert len(scanned) == len(set(scanned))
        assert len(scanned) == 1 + 2 * summary.n_changes


class TestParameterValidation:

    @pytest.mark.parametrize("significance", [-0.1, 1.5])
    def test_significance_out_of_range(self, significance):
        with pytest.raises(InvalidArgumentError):
            detect_changes([1.0, 2.0, 3.0, 4.0], significance, 10, 2)

    def test_min_size_too_small(self):
        with pytest.raises(InvalidArgumentError):
            detect_changes([1.0, 2.0, 3.0, 4.0], 0.05, 10, 1)

    def test_negative_permutations(self):
        with pytest.raises(InvalidArgumentError):
            detect_changes([1.0, 2.0, 3.0, 4.0], 0.05, -1, 2)

    @pytest.mark.parametrize("sequence", [[], [1.0, float("nan"), 2.0], [1.0, float("inf")]])
    def test_invalid_sequence(self, sequence):
        with pytest.raises(NumericInputError):
            detect_changes(sequence, 0.05, 10, 2)


class TestChangepointSet:

    def test_sorted_and_deduplicated(self):
        changes = ChangepointSet(20)
        for index in (12, 5, 12, 8):
            changes.add(index)
        assert changes.to_list() == [0, 5, 8, 12, 20]
        assert changes.clusters() == [(0, 5), (5, 8), (8, 12), (12, 20)]
        assert 8 in changes and len(changes) == 5

    @pytest.mark.parametrize("index", [0, 20, -3, 25])
    def test_rejects_out_of_range(self, index):
        with pytest.raises(ValueError):
            ChangepointSet(20).add(index)
