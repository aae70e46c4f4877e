"""
Configuration for the bootstrap impact estimation method.

The continuation of the pre-change series is modelled as a random walk whose
steps are resampled from the smoothed pre-change differences.
"""

from typing import Final

from ...config import ITERATIONS, HALF_WINDOW, SEED, N_JOBS

# Monte Carlo parameters
N_ITERATIONS: Final[int] = ITERATIONS      # simulated walks per estimate
SMOOTH_HALF_WINDOW: Final[int] = HALF_WINDOW  # moving-average points on either side

# Walks are simulated in blocks of at most this many draws per generator
BLOCK_ELEMENTS: Final[int] = 1 << 20

# Random seed and workers
IMPACT_SEED: Final[int] = SEED
IMPACT_N_JOBS: Final[int] = N_JOBS

def validate_config() -> None:
    """Validate impact configuration parameters."""
    if N_ITERATIONS <= 0:
        raise ValueError("N_ITERATIONS must be positive")
    if SMOOTH_HALF_WINDOW < 0:
        raise ValueError("SMOOTH_HALF_WINDOW must be non-negative")
    if BLOCK_ELEMENTS <= 0:
        raise ValueError("BLOCK_ELEMENTS must be positive")

# Validate configuration on import
validate_config()
