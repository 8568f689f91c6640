"""Optimal partitions of real sequences for spectral coarse graining."""

import logging
from importlib.metadata import version

# Package name and version
package_name = "scgOpt"
__version__ = version(package_name)

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("scgOpt")
logger.propagate = False

from .partition import (  # noqa: E402
    InvalidArgumentError,
    MatrixType,
    PartitionResult,
    optimal_partition,
    optimal_partition_many,
    partition_cost,
)

__all__ = [
    "InvalidArgumentError",
    "MatrixType",
    "PartitionResult",
    "optimal_partition",
    "optimal_partition_many",
    "partition_cost",
]
