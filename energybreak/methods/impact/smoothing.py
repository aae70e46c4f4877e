"""
Joint smoothing of two adjacent sub-series.
"""

from typing import Tuple

import numpy as np

from ..base.numeric import as_vector, moving_average


def smooth_joint(seq_a, seq_b, half_window: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Smooth two adjacent sequences as one series and split the result.

    Points near the join average values from both sides, so the end of
    ``seq_a`` is not distorted by edge replication of a separate smooth.

    Args:
        seq_a: Earlier sub-series
        seq_b: Later sub-series, starting right after ``seq_a``
        half_window: Moving-average points on either side

    Returns:
        Tuple of (smoothed_a, smoothed_b) with the original lengths
    """
    a = as_vector(seq_a)
    b = as_vector(seq_b)
    smoothed = moving_average(np.concatenate([a, b]), half_window)
    return smoothed[:len(a)], smoothed[len(a):]
