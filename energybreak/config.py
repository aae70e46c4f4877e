"""
Configuration module for energybreak changepoint and impact detection.

This module contains the runtime parameters and constants shared by the
E-Divisive changepoint detector and the bootstrap impact estimator. Every
value here is only a default: each call accepts its own explicit setting.
"""

import os
from typing import Final

from joblib import effective_n_jobs

# ==================== Runtime Configuration ====================

# Random seed for reproducibility
SEED: Final[int] = 123

# Parallel processing; ENERGYBREAK_N_JOBS overrides the detected CPU count and
# follows joblib conventions (-1 for all CPUs, 0 or unset for the default)
_ENV_N_JOBS = int(os.getenv("ENERGYBREAK_N_JOBS", "0"))
N_JOBS: Final[int] = effective_n_jobs(_ENV_N_JOBS) if _ENV_N_JOBS else (os.cpu_count() or 1)

# ==================== File Paths ====================
# These can be overridden via command line arguments
DEFAULT_INPUT_PATH: Final[str] = 'input.parquet'
DEFAULT_OUTPUT_PRED_PATH: Final[str] = 'predictors.parquet'
DEFAULT_OUTPUT_META_PATH: Final[str] = 'metadata.parquet'

# ==================== Changepoint Detection ====================
SIGNIFICANCE: Final[float] = 0.05     # accept a split when p <= SIGNIFICANCE
PERMUTATIONS: Final[int] = 199        # permutation test repetitions per split
MIN_SIZE: Final[int] = 30             # minimum observations per cluster

# ==================== Impact Estimation ====================
ITERATIONS: Final[int] = 1000         # bootstrap random walks per estimate
HALF_WINDOW: Final[int] = 2           # moving-average points on either side

# ==================== Validation Functions ====================

def validate_config() -> None:
    """Validate configuration parameters."""
    if SEED < 0:
        raise ValueError("SEED must be non-negative")
    if N_JOBS <= 0:
        raise ValueError("N_JOBS must be positive")
    if not 0.0 <= SIGNIFICANCE <= 1.0:
        raise ValueError("SIGNIFICANCE must be within [0, 1]")
    if PERMUTATIONS < 0:
        raise ValueError("PERMUTATIONS must be non-negative")
    if MIN_SIZE < 2:
        raise ValueError("MIN_SIZE must be at least 2")
    if ITERATIONS <= 0:
        raise ValueError("ITERATIONS must be positive")
    if HALF_WINDOW < 0:
        raise ValueError("HALF_WINDOW must be non-negative")

# Validate configuration on import
validate_config()
