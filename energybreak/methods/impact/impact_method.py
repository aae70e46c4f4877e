"""
Impact method implementation for level-shift estimation.

This class wraps the bootstrap impact estimator to conform to the BaseMethod
interface; the period column selects the before (0) and after (1) sub-series.
"""

import numpy as np
from typing import Dict, Any, Tuple, Optional

from ..base import BaseMethod
from ..base.utils import split_by_period
from .estimator import ImpactEstimator, Operator
from .config import N_ITERATIONS, SMOOTH_HALF_WINDOW, IMPACT_SEED


class ImpactMethod(BaseMethod):
    """
    Bootstrap impact method for level-shift estimation.

    Simulates the continuation of the pre-change series as a random walk with
    resampled steps and reports how extreme the final post-change value is.
    """

    name = 'impact'
    version = "1.0.0"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize impact method.

        Args:
            config: Method-specific configuration dictionary
        """
        super().__init__(config)

        self.iterations = self.config.get('iterations', N_ITERATIONS)
        self.half_window = self.config.get('half_window', SMOOTH_HALF_WINDOW)
        self.seed = self.config.get('seed', IMPACT_SEED)
        # the batch pipeline already parallelizes over series
        self.n_jobs = self.config.get('walk_jobs', 1)

    def _compute(self, values: np.ndarray, periods: Optional[np.ndarray],
                 **kwargs) -> Tuple[Dict[str, float], Dict[str, Any]]:
        if periods is None:
            raise ValueError("impact method requires period indicators")
        iterations = kwargs.get('iterations', self.iterations)
        half_window = kwargs.get('half_window', self.half_window)
        seed = kwargs.get('seed', self.seed)

        before, after = split_by_period(values, periods)
        estimator = ImpactEstimator(half_window=half_window, n_jobs=self.n_jobs, seed=seed)
        sim = estimator.simulate(before, after, iterations)
        probability, direction = sim.result()

        spread = float(np.std(sim.destinations))
        expected = float(np.mean(sim.destinations))
        predictors = {
            'p_impact': float(probability),
            'direction': float(direction),
            'shift': sim.observed - sim.start,
            'expected_shift': expected - sim.start,
            'z_shift': (sim.observed - expected) / spread if spread > 0 else 0.0,
        }
        metadata = {
            'direction_label': Operator(direction).name,
            'start': sim.start,
            'observed': sim.observed,
            'p_lower': sim.p_lower,
            'p_upper': sim.p_upper,
            'iterations': iterations,
            'half_window': half_window,
            'n_before': len(before),
            'n_after': len(after),
        }
        return predictors, metadata

    def default_predictors(self) -> Dict[str, float]:
        return {
            'p_impact': 1.0,
            'direction': float(Operator.EQUALS),
            'shift': 0.0,
            'expected_shift': 0.0,
            'z_shift': 0.0,
        }

    def validate_config(self) -> None:
        """
        Validate impact configuration parameters.

        Raises:
            ValueError: If configuration is invalid
        """
        if self.iterations <= 0:
            raise ValueError("iterations must be positive")

        if self.half_window < 0:
            raise ValueError("half_window must be non-negative")

        if self.seed is not None and self.seed < 0:
            raise ValueError("seed must be non-negative")

    def get_method_info(self) -> Dict[str, str]:
        """
        Get information about the impact method.

        Returns:
            Dictionary with method information
        """
        info = super().get_method_info()
        info.update({
            'approach': 'Bootstrapped random walk continuation of the pre-change series',
            'features': 'Tail probability, shift direction, observed and expected shift',
            'half_window': str(self.half_window),
            'iterations': str(self.iterations)
        })
        return info
