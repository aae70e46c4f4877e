"""
Pairwise absolute-difference matrix used by the energy statistics.
"""

import numpy as np

from ..base.numeric import as_vector


class DistanceMatrix:
    """
    Symmetric n x n matrix of ``|x[i] - x[j]|`` with a zero diagonal.

    The backing array is private to the instance. ``permuted`` and ``copy``
    always return new matrices, so the canonical matrix of a detection run is
    never written by a permutation step.
    """

    def __init__(self, values: np.ndarray):
        self._d = np.asarray(values, dtype=float)
        if self._d.ndim != 2 or self._d.shape[0] != self._d.shape[1]:
            raise ValueError(f"distance matrix must be square, got shape {self._d.shape}")

    @classmethod
    def build(cls, sequence) -> "DistanceMatrix":
        x = as_vector(sequence)
        return cls(np.abs(x[:, None] - x[None, :]))

    def __len__(self) -> int:
        return self._d.shape[0]

    @property
    def shape(self):
        return self._d.shape

    def get(self, i: int, j: int) -> float:
        return float(self._d[i, j])

    def set(self, i: int, j: int, value: float) -> None:
        self._d[i, j] = value

    def copy(self) -> "DistanceMatrix":
        return DistanceMatrix(self._d.copy())

    def column_sum(self, j: int) -> float:
        return float(self._d[:, j].sum())

    def block(self, start: int, stop: int) -> np.ndarray:
        """Read-only view of the sub-matrix for the interval ``[start, stop)``."""
        view = self._d[start:stop, start:stop]
        view.flags.writeable = False
        return view

    def permuted(self, order: np.ndarray) -> "DistanceMatrix":
        """New matrix whose rows and columns follow ``order``."""
        order = np.asarray(order, dtype=int)
        return DistanceMatrix(self._d[np.ix_(order, order)])

    def as_array(self) -> np.ndarray:
        """Read-only view of the full matrix."""
        view = self._d.view()
        view.flags.writeable = False
        return view
