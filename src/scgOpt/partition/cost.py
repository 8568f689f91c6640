"""
Interval cost kernels.

A kernel prices a run of consecutive sorted values treated as one group. Two
kernels are available:

- Deviation kernel (symmetric and laplacian matrices): the sum of squared
  deviations from the group mean, computed from prefix sums in O(1) per
  interval.
- Weighted kernel (stochastic matrices): the sum of squared deviations from
  the weight-adjusted group mean. Only the centering mean is weighted. Each
  interval is evaluated by a direct scan, so the full matrix costs O(n^3).
"""

from abc import ABC, abstractmethod
from typing import Optional

import numba
import numpy as np

from .constants import MatrixType
from .exceptions import InvalidArgumentError


@numba.njit
def deviation_cost_matrix(v: np.ndarray) -> np.ndarray:
    """
    Sum-of-squared-deviations cost of every interval [i, j] of sorted values.

    Parameters
    ----------
    v : np.ndarray
        Sorted values, shape (n,)

    Returns
    -------
    np.ndarray
        Cost matrix, shape (n, n). Only the upper triangle (i <= j) is filled;
        the diagonal is zero.
    """
    n = len(v)
    w = np.zeros(n + 1)
    w2 = np.zeros(n + 1)
    for i in range(1, n + 1):
        w[i] = w[i - 1] + v[i - 1]
        w2[i] = w2[i - 1] + v[i - 1] * v[i - 1]

    cv = np.zeros((n, n))
    for i in range(n):
        for j in range(i + 1, n):
            s = w[j + 1] - w[i]
            cv[i, j] = (w2[j + 1] - w2[i]) - s * s / (j - i + 1)
    return cv


@numba.njit(error_model="numpy")
def weighted_cost_matrix(v: np.ndarray, p: np.ndarray) -> np.ndarray:
    """
    Cost of every interval [i, j] around its weight-adjusted mean.

    Parameters
    ----------
    v : np.ndarray
        Sorted values, shape (n,)
    p : np.ndarray
        Weights aligned to ``v``, shape (n,)

    Returns
    -------
    np.ndarray
        Cost matrix, shape (n, n), upper triangle only.
    """
    n = len(v)
    cv = np.zeros((n, n))
    for i in range(n):
        for j in range(i + 1, n):
            t1 = 0.0
            t2 = 0.0
            for k in range(i, j + 1):
                t1 += p[k]
                t2 += p[k] * v[k]
            mean = t2 / t1
            t2 = 0.0
            for k in range(i, j + 1):
                t2 += (v[k] - mean) * (v[k] - mean)
            cv[i, j] = t2
    return cv


class CostKernel(ABC):
    """
    Cost of treating an interval of the sorted sequence as a single group.

    Parameters
    ----------
    values : np.ndarray
        Sorted values the interval indices refer to
    """

    matrix_type: MatrixType

    def __init__(self, values: np.ndarray):
        self.values = values

    @abstractmethod
    def segment_cost(self, values: np.ndarray, weights: Optional[np.ndarray] = None) -> float:
        """Cost of one group given its members' values (and weights)."""

    @abstractmethod
    def cost_matrix(self) -> np.ndarray:
        """Costs of all intervals, shape (n, n), upper triangle only."""

    def interval_cost(self, i: int, j: int) -> float:
        """Cost of the sorted positions ``[i..j]`` (inclusive) as one group."""
        if i == j:
            return 0.0
        return self.segment_cost(self.values[i:j + 1])


class DeviationKernel(CostKernel):
    """Sum of squared values minus squared sum over count."""

    def __init__(self, values: np.ndarray, matrix_type: MatrixType = MatrixType.SYMMETRIC):
        super().__init__(values)
        self.matrix_type = matrix_type

    def segment_cost(self, values, weights=None):
        if len(values) <= 1:
            return 0.0
        s = float(np.sum(values))
        return float(np.sum(values * values)) - s * s / len(values)

    def cost_matrix(self):
        return deviation_cost_matrix(self.values)


class WeightedKernel(CostKernel):
    """Sum of squared deviations from the weighted mean of the interval."""

    matrix_type = MatrixType.STOCHASTIC

    def __init__(self, values: np.ndarray, weights: np.ndarray):
        super().__init__(values)
        self.weights = weights

    def segment_cost(self, values, weights=None):
        if len(values) <= 1:
            return 0.0
        if weights is None:
            raise InvalidArgumentError("The weighted kernel needs the members' weights")
        mean = float(np.sum(weights * values)) / float(np.sum(weights))
        return float(np.sum((values - mean) ** 2))

    def interval_cost(self, i, j):
        if i == j:
            return 0.0
        return self.segment_cost(self.values[i:j + 1], self.weights[i:j + 1])

    def cost_matrix(self):
        return weighted_cost_matrix(self.values, self.weights)


def make_kernel(
    matrix_type, values: np.ndarray, weights: Optional[np.ndarray] = None
) -> CostKernel:
    """
    Select the cost kernel for a matrix type.

    Parameters
    ----------
    matrix_type : MatrixType or str
        ``symmetric``, ``laplacian`` or ``stochastic``
    values : np.ndarray
        Sorted values
    weights : np.ndarray, optional
        Weights in sorted order; required for ``stochastic``

    Returns
    -------
    CostKernel
    """
    matrix_type = MatrixType.parse(matrix_type)
    if matrix_type.is_weighted:
        if weights is None:
            raise InvalidArgumentError("Weights are required for the stochastic matrix type")
        return WeightedKernel(values, weights)
    return DeviationKernel(values, matrix_type)
