"""
Tests for Monte Carlo impact estimation.
"""

import numpy as np
import pytest

from energybreak import (
    ImpactEstimator, InvalidArgumentError, NumericInputError, Operator,
    count_greater, count_less, detect_impact
)

POPULATION = [0.2, 0, 0.4, 0, 0.1, 0.5, 0.2, 0.4, 0, 0, 0.1, 0.6, 0.1, 0.3, 0.1, 0.1, 0.2, 0.3, 0.1, 0.1]


class TestCounts:

    def test_reference_population(self):
        assert count_greater(0.3, POPULATION) == 4
        assert count_less(0.3, POPULATION) == 14

    @pytest.mark.parametrize("x", [-1.0, 0.0, 0.15, 0.3, 0.6, 2.0])
    def test_ties_are_excluded(self, x):
        ties = sum(1 for v in POPULATION if v == x)
        assert count_greater(x, POPULATION) + count_less(x, POPULATION) + ties == len(POPULATION)

    def test_monotone_in_threshold(self):
        thresholds = np.linspace(-0.1, 0.7, 17)
        greater = [count_greater(t, POPULATION) for t in thresholds]
        less = [count_less(t, POPULATION) for t in thresholds]
        assert greater == sorted(greater, reverse=True)
        assert less == sorted(less)


class TestDetectImpact:

    def test_reference_series_decrease(self, mock_short):
        probability, direction = detect_impact(mock_short[:14], mock_short[14:], 1000, seed=42)
        assert direction == Operator.LESS_THAN
        assert 0.0 <= probability < 0.1

    def test_clear_increase(self):
        rng = np.random.default_rng(0)
        before = rng.normal(0.0, 0.1, 200)
        after = rng.normal(5.0, 0.1, 20)
        result = detect_impact(before, after, 2000, seed=1)
        assert result.direction == Operator.GREATER_THAN
        assert result.probability < 0.05

    def test_clear_decrease(self):
        rng = np.random.default_rng(1)
        before = rng.normal(0.0, 0.1, 200)
        after = rng.normal(-5.0, 0.1, 20)
        result = detect_impact(before, after, 2000, seed=1)
        assert result.direction == Operator.LESS_THAN
        assert result.probability < 0.05

    def test_flat_series_reports_equals(self):
        result = detect_impact(np.ones(10), np.ones(6), 100, seed=0)
        assert result.probability == 1.0
        assert result.direction == Operator.EQUALS

    def test_probability_is_bounded(self):
        rng = np.random.default_rng(3)
        for _ in range(5):
            probability, _ = detect_impact(rng.normal(size=30), rng.normal(size=10), 200,
                                           seed=int(rng.integers(1000)))
            assert 0.0 <= probability <= 1.0


class TestImpactEstimator:

    def test_same_seed_same_result(self, mock_short):
        first = ImpactEstimator(seed=9).estimate(mock_short[:14], mock_short[14:], 500)
        second = ImpactEstimator(seed=9).detect(mock_short[:14], mock_short[14:], 500)
        assert first == second

    def test_simulation_details(self, mock_short):
        sim = ImpactEstimator(half_window=2, seed=0).simulate(mock_short[:14], mock_short[14:], 300)
        assert len(sim.destinations) == 300
        assert sim.observed == pytest.approx(0.1)
        assert sim.start == pytest.approx(np.mean(mock_short[11:16]))
        assert sim.p_lower + sim.p_upper <= 1.0

    def test_zero_half_window_uses_raw_values(self):
        before = [1.0, 2.0, 4.0]
        sim = ImpactEstimator(half_window=0, seed=0).simulate(before, [5.0], 50)
        assert sim.start == pytest.approx(4.0)
        assert set(np.round(sim.destinations - 4.0, 9)) <= {1.0, 2.0}

    def test_iterations_must_be_positive(self, mock_short):
        with pytest.raises(InvalidArgumentError):
            detect_impact(mock_short[:14], mock_short[14:], 0)

    def test_after_shorter_than_window(self):
        with pytest.raises(InvalidArgumentError):
            detect_impact(np.arange(10.0), np.arange(4.0), 100, half_window=2)

    def test_before_too_short_for_steps(self):
        with pytest.raises(InvalidArgumentError):
            detect_impact([1.0], [2.0], 100, half_window=0)

    def test_negative_half_window(self):
        with pytest.raises(InvalidArgumentError):
            ImpactEstimator(half_window=-1)

    def test_non_finite_input(self):
        with pytest.raises(NumericInputError):
            detect_impact([1.0, np.nan, 2.0, 3.0, 4.0], [1.0, 2.0, 3.0, 4.0, 5.0], 100)
