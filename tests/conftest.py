import numpy as np
import pytest


MOCK_SHORT = [0.2, 0, 0.4, 0, 0.1, 0.5, 0.2, 0.4, 0, 0, 0.1, 0.6, 0.1, 0.3, 0.1, 0.1, 0.2, 0.3, 0.1, 0.1]


@pytest.fixture
def mock_short():
    """Reference 20-point series used throughout the detection tests."""
    return list(MOCK_SHORT)


@pytest.fixture
def step_series():
    """Two regimes of 40 points, 8 standard deviations apart."""
    rng = np.random.default_rng(0)
    return np.concatenate([rng.normal(0.0, 1.0, 40), rng.normal(8.0, 1.0, 40)])
