"""
Impact method for level-shift estimation.

Monte Carlo comparison of the post-change series against bootstrapped random
walk continuations of the pre-change series.
"""

from .impact_method import ImpactMethod
from .config import (
    N_ITERATIONS, SMOOTH_HALF_WINDOW, BLOCK_ELEMENTS, IMPACT_SEED, IMPACT_N_JOBS,
    validate_config
)
from .smoothing import smooth_joint
from .bootstrap import simulate, simulate_many, walks
from .estimator import (
    Operator, ImpactResult, ImpactSimulation, ImpactEstimator,
    count_greater, count_less, detect_impact
)

__all__ = [
    'ImpactMethod',
    'N_ITERATIONS', 'SMOOTH_HALF_WINDOW', 'BLOCK_ELEMENTS', 'IMPACT_SEED', 'IMPACT_N_JOBS',
    'validate_config',
    'smooth_joint', 'simulate', 'simulate_many', 'walks',
    'Operator', 'ImpactResult', 'ImpactSimulation', 'ImpactEstimator',
    'count_greater', 'count_less', 'detect_impact'
]
