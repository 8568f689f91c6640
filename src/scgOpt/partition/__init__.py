"""
Optimal partition of real sequences into contiguous groups.

This package provides:
- Interval cost kernels (deviation and weighted)
- The dynamic program and its backtracking
- The driver returning the minimal cost and the group labels
"""

from .constants import FIRST_GROUP_NB, MatrixType
from .exceptions import InvalidArgumentError
from .optimal import (
    PartitionResult,
    group_boundaries,
    optimal_partition,
    optimal_partition_many,
    partition_cost,
)

__all__ = [
    "FIRST_GROUP_NB",
    "MatrixType",
    "InvalidArgumentError",
    "PartitionResult",
    "optimal_partition",
    "optimal_partition_many",
    "partition_cost",
    "group_boundaries",
]
