"""
Common utility functions for changepoint detection methods.
"""

import numpy as np
from typing import Dict, Any, List, Optional, Tuple, Union

SeedLike = Union[None, int, np.random.SeedSequence]


def validate_input_data(values: np.ndarray, periods: np.ndarray) -> None:
    """
    Validate a series split into a before (0) and after (1) period.

    Args:
        values: Time series values
        periods: Period indicators

    Raises:
        ValueError: If data is invalid
    """
    if len(values) != len(periods):
        raise ValueError("Values and periods must have the same length")

    if not np.all(np.isfinite(values)):
        raise ValueError("Values must be finite")

    unique_periods = np.unique(periods)
    if len(unique_periods) < 2:
        raise ValueError("Must have at least 2 different periods")

    if not np.all(np.isin(unique_periods, [0, 1])):
        raise ValueError("Periods must be 0 or 1")

    if np.any(np.diff(periods) < 0):
        raise ValueError("Period 0 must precede period 1")


def split_by_period(values: np.ndarray, periods: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Return the (before, after) sub-series of a validated 0/1 split."""
    validate_input_data(values, periods)
    return values[periods == 0], values[periods == 1]


def first_boundary_index(periods: np.ndarray) -> int:
    """Return first index of period 1 (boundary position in the series)."""
    d = np.diff(np.asarray(periods).astype(int))
    idx = np.flatnonzero(d != 0)
    if len(idx) == 0:
        return -1
    return int(idx[0] + 1)


def as_seed_sequence(seed: SeedLike) -> np.random.SeedSequence:
    """Wrap an int (or None for fresh OS entropy) in a SeedSequence."""
    if isinstance(seed, np.random.SeedSequence):
        return seed
    return np.random.SeedSequence(seed)


def spawn_generators(seed_seq: np.random.SeedSequence, n: int) -> List[np.random.Generator]:
    """Independent generators, one per task, spawned from ``seed_seq``."""
    return [np.random.default_rng(s) for s in seed_seq.spawn(n)]


def standardize_output(predictors: Dict[str, Any], metadata: Dict[str, Any],
                       series_id: Optional[Any] = None) -> Tuple[Dict[str, float], Dict[str, Any]]:
    """
    Standardize output format across methods.

    Args:
        predictors: Raw predictor dictionary
        metadata: Raw metadata dictionary
        series_id: Optional series identifier

    Returns:
        Tuple of (standardized_predictors, standardized_metadata)
    """
    # Ensure predictors are floats
    std_predictors = {}
    for key, value in predictors.items():
        if isinstance(value, (bool, np.bool_)):
            std_predictors[key] = float(value)
        elif isinstance(value, (int, float, np.integer, np.floating)):
            std_predictors[key] = float(value)
        else:
            std_predictors[key] = float('nan')

    metadata = dict(metadata)
    if series_id is not None:
        std_predictors['id'] = series_id
        metadata['id'] = series_id

    if 'method' not in metadata:
        metadata['method'] = 'unknown'

    return std_predictors, metadata
