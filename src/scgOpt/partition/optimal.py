"""
Optimal partition of a real sequence into contiguous groups.

This module drives the whole computation:
1. Sort the values and check the requested number of groups
2. Build the interval cost matrix for the selected kernel
3. Fill the dynamic programming tables
4. Backtrack the labels into the caller's index space

The result minimizes the summed per-group cost over every partition of the
sorted values into ``n_groups`` contiguous, non-empty groups, in
O(n^2 * n_groups) time.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .backtrack import backtrack_labels
from .constants import FIRST_GROUP_NB, MatrixType
from .cost import make_kernel
from .dp import fill_tables
from .exceptions import InvalidArgumentError
from .sorting import as_group_count, as_vector, sort_values, validate_n_groups

logger = logging.getLogger(__name__)


@dataclass
class PartitionResult:
    """
    Output of :func:`optimal_partition`.

    Attributes
    ----------
    cost : float
        Minimal total cost over all groups
    labels : np.ndarray
        Group label of every input position, in
        ``[FIRST_GROUP_NB, FIRST_GROUP_NB + n_groups)``
    n_groups : int
        Number of groups
    matrix_type : MatrixType
        Kernel the cost was computed with
    """

    cost: float
    labels: np.ndarray
    n_groups: int
    matrix_type: MatrixType


def _prepare_inputs(values, matrix_type, weights):
    matrix_type = MatrixType.parse(matrix_type)
    values = as_vector(values, "values")
    if matrix_type.is_weighted:
        if weights is None:
            raise InvalidArgumentError("Weights are required for the stochastic matrix type")
        weights = as_vector(weights, "weights", len(values))
    else:
        weights = None
    return values, matrix_type, weights


def optimal_partition(
    values,
    n_groups: int,
    matrix_type: Union[MatrixType, str] = MatrixType.SYMMETRIC,
    weights=None,
    out: Optional[np.ndarray] = None,
) -> PartitionResult:
    """
    Split the sorted values into ``n_groups`` contiguous groups of minimal cost.

    Parameters
    ----------
    values : array-like
        Values to partition, shape (n,)
    n_groups : int
        Number of groups, strictly smaller than the number of distinct values
    matrix_type : MatrixType or str
        ``symmetric`` and ``laplacian`` price a group by its sum of squared
        deviations from the mean; ``stochastic`` centers on the weighted mean
    weights : array-like, optional
        Probability-like weights aligned to ``values``; only used (and then
        required) for ``stochastic``
    out : np.ndarray, optional
        Integer array of shape (n,) receiving the labels in place. Left
        untouched when validation fails.

    Returns
    -------
    PartitionResult

    Raises
    ------
    InvalidArgumentError
        If ``n_groups`` is not in ``[1, distinct values)``, or the inputs are
        malformed.

    Examples
    --------
    >>> result = optimal_partition([5, 1, 3, 2, 4], n_groups=2)
    >>> result.cost
    2.5
    >>> result.labels
    array([1, 0, 1, 0, 1])
    """
    values, matrix_type, weights = _prepare_inputs(values, matrix_type, weights)
    n = len(values)

    n_groups = as_group_count(n_groups)
    seq = sort_values(values)
    distinct = validate_n_groups(seq, n_groups)

    if out is not None:
        if out.shape != (n,) or not np.issubdtype(out.dtype, np.integer):
            raise InvalidArgumentError(
                f"'out' must be an integer array of shape ({n},), got {out.dtype} {out.shape}"
            )
        info = np.iinfo(out.dtype)
        if FIRST_GROUP_NB < info.min or FIRST_GROUP_NB + n_groups - 1 > info.max:
            raise InvalidArgumentError(
                f"'out' of dtype {out.dtype} cannot hold labels up to {FIRST_GROUP_NB + n_groups - 1}"
            )

    logger.debug(
        f"Optimal partition: n={n}, distinct={distinct}, n_groups={n_groups}, "
        f"matrix_type={matrix_type.value}"
    )

    sorted_weights = seq.permute(weights) if weights is not None else None
    kernel = make_kernel(matrix_type, seq.values, sorted_weights)
    cv = kernel.cost_matrix()
    del kernel, sorted_weights

    tables = fill_tables(cv, n_groups)
    del cv

    labels = out if out is not None else np.empty(n, dtype=np.int64)
    backtrack_labels(tables, seq, labels)
    cost = tables.total_cost

    logger.debug(f"Optimal partition cost: {cost}")
    return PartitionResult(cost=cost, labels=labels, n_groups=n_groups, matrix_type=matrix_type)


def partition_cost(
    values,
    labels,
    matrix_type: Union[MatrixType, str] = MatrixType.SYMMETRIC,
    weights=None,
) -> float:
    """
    Total cost of an arbitrary labeling, evaluated group by group.

    Each group's members are taken in sorted order and priced with the same
    kernel :func:`optimal_partition` uses.
    """
    values, matrix_type, weights = _prepare_inputs(values, matrix_type, weights)
    labels = np.asarray(labels)
    if labels.shape != values.shape:
        raise InvalidArgumentError(
            f"'labels' has shape {labels.shape} but 'values' has shape {values.shape}"
        )

    kernel = make_kernel(matrix_type, values, weights)
    total = 0.0
    for group in np.unique(labels):
        members = np.flatnonzero(labels == group)
        members = members[np.argsort(values[members], kind="stable")]
        group_weights = weights[members] if weights is not None else None
        total += kernel.segment_cost(values[members], group_weights)
    return total


def group_boundaries(values, labels) -> List[Tuple[float, float]]:
    """(min, max) of the values in each group, in label order."""
    values = as_vector(values, "values")
    labels = np.asarray(labels)
    if labels.shape != values.shape:
        raise InvalidArgumentError(
            f"'labels' has shape {labels.shape} but 'values' has shape {values.shape}"
        )
    return [
        (float(values[labels == group].min()), float(values[labels == group].max()))
        for group in np.unique(labels)
    ]


def optimal_partition_many(
    vectors,
    n_groups: Union[int, Sequence[int]],
    matrix_type: Union[MatrixType, str] = MatrixType.SYMMETRIC,
    weights=None,
) -> List[PartitionResult]:
    """
    Partition every column of ``vectors`` independently.

    Parameters
    ----------
    vectors : array-like
        Values, shape (n, m); one partition per column
    n_groups : int or sequence of int
        Number of groups for all columns, or one per column
    matrix_type : MatrixType or str
        Kernel shared by all columns
    weights : array-like, optional
        Weights shared by all columns, shape (n,)

    Returns
    -------
    List[PartitionResult]
    """
    vectors = np.asarray(vectors, dtype=np.float64)
    if vectors.ndim != 2:
        raise InvalidArgumentError(f"'vectors' must be two-dimensional, got shape {vectors.shape}")
    n_columns = vectors.shape[1]

    if np.ndim(n_groups) == 0:
        groups_per_column = [n_groups] * n_columns
    else:
        groups_per_column = list(n_groups)
        if len(groups_per_column) != n_columns:
            raise InvalidArgumentError(
                f"Got {len(groups_per_column)} group counts for {n_columns} vectors"
            )

    results = []
    for col, k in enumerate(groups_per_column):
        try:
            result = optimal_partition(vectors[:, col], k, matrix_type, weights)
        except InvalidArgumentError as e:
            raise InvalidArgumentError(f"Vector {col}: {e}") from e
        logger.info(f"Vector {col}: {k} groups, cost {result.cost:.6g}")
        results.append(result)
    return results


__all__ = [
    "FIRST_GROUP_NB",
    "PartitionResult",
    "optimal_partition",
    "optimal_partition_many",
    "partition_cost",
    "group_boundaries",
]
