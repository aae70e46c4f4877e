"""
Dense numeric helpers shared by the detection methods.

Only the handful of vector operations the methods need live here:
validated construction, centered moving-average smoothing and
successive differencing.
"""

import numpy as np
from scipy.ndimage import uniform_filter1d

from .errors import InvalidArgumentError, NumericInputError


def as_vector(values) -> np.ndarray:
    """
    Build a read-only float vector from a raw numeric sequence.

    Args:
        values: Any one-dimensional sequence of numbers

    Returns:
        A private float64 copy of the values, flagged non-writeable

    Raises:
        NumericInputError: If the sequence is empty, not one-dimensional
            or contains NaN/inf
    """
    try:
        x = np.array(values, dtype=float)
    except (TypeError, ValueError) as e:
        raise NumericInputError(f"values are not numeric: {e}") from e
    if x.ndim != 1:
        raise NumericInputError(f"expected a one-dimensional sequence, got shape {x.shape}")
    if x.size == 0:
        raise NumericInputError("sequence must not be empty")
    if not np.all(np.isfinite(x)):
        raise NumericInputError("sequence must contain only finite values")
    x.setflags(write=False)
    return x


def moving_average(x: np.ndarray, half_window: int) -> np.ndarray:
    """
    Centered moving average with edge replication.

    Interior points average ``half_window`` neighbours on each side. The first
    and last ``half_window`` points repeat the nearest interior average rather
    than averaging over a truncated window.
    """
    if half_window < 0:
        raise InvalidArgumentError(f"half_window ({half_window}) must be non-negative")
    x = np.asarray(x, dtype=float)
    width = 2 * half_window + 1
    if len(x) < width:
        raise InvalidArgumentError(
            f"sequence of length {len(x)} is shorter than the smoothing window ({width})")
    if half_window == 0:
        return x.copy()

    smoothed = uniform_filter1d(x, size=width, mode='nearest')
    smoothed[:half_window] = smoothed[half_window]
    smoothed[-half_window:] = smoothed[-half_window - 1]
    return smoothed


def diff(x: np.ndarray) -> np.ndarray:
    """Successive differences ``x[i+1] - x[i]``; one element shorter than ``x``."""
    return np.diff(np.asarray(x, dtype=float))
