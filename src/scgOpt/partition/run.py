"""
File-to-file optimal partition used by the ``partition`` command.
"""

import logging

from .constants import FIRST_GROUP_NB
from .io import load_vector, save_labels
from .optimal import PartitionResult, group_boundaries, optimal_partition

logger = logging.getLogger(__name__)


def run_partition(config) -> PartitionResult:
    """
    Load the inputs named by ``config``, partition them and save the labels.

    Parameters
    ----------
    config : PartitionConfig

    Returns
    -------
    PartitionResult
    """
    values = load_vector(config.values_file, config.column)
    weights = None
    if config.weights_file is not None:
        weights = load_vector(config.weights_file)

    result = optimal_partition(values, config.n_groups, config.matrix_type, weights)

    logger.info(f"Optimal cost ({config.matrix_type.value}): {result.cost:.6g}")
    for group, (lo, hi) in enumerate(group_boundaries(values, result.labels), start=FIRST_GROUP_NB):
        size = int((result.labels == group).sum())
        logger.info(f"  Group {group}: {size} values in [{lo:.6g}, {hi:.6g}]")

    save_labels(config.labels_path, result.labels, values)
    return result
