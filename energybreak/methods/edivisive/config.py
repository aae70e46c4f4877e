"""
Configuration for the E-Divisive changepoint detection method.

Divisive hierarchical segmentation with energy statistics and a
within-cluster permutation test for each proposed changepoint.
"""

from typing import Final

from ...config import SIGNIFICANCE, PERMUTATIONS, MIN_SIZE, SEED

# Significance testing
SIG_LEVEL: Final[float] = SIGNIFICANCE        # accept splits with p <= SIG_LEVEL
N_PERMUTATIONS: Final[int] = PERMUTATIONS     # repetitions per permutation test

# Segmentation
MIN_CLUSTER_SIZE: Final[int] = MIN_SIZE       # minimum observations per cluster
BOUNDARY_TOLERANCE: Final[int] = 5            # max distance to the period boundary to count as a hit

# Random seed for reproducibility
EDIVISIVE_SEED: Final[int] = SEED

def validate_config() -> None:
    """Validate E-Divisive configuration parameters."""
    if not 0.0 <= SIG_LEVEL <= 1.0:
        raise ValueError("SIG_LEVEL must be within [0, 1]")
    if N_PERMUTATIONS < 0:
        raise ValueError("N_PERMUTATIONS must be non-negative")
    if MIN_CLUSTER_SIZE < 2:
        raise ValueError("MIN_CLUSTER_SIZE must be at least 2")
    if BOUNDARY_TOLERANCE < 0:
        raise ValueError("BOUNDARY_TOLERANCE must be non-negative")

# Validate configuration on import
validate_config()
