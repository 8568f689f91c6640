"""
Recover the optimal grouping from the choice table.
"""

import numpy as np

from .constants import FIRST_GROUP_NB
from .dp import ChoiceKind, DPTables
from .sorting import SortedSequence


def backtrack_labels(
    tables: DPTables,
    seq: SortedSequence,
    labels: np.ndarray,
    first_group: int = FIRST_GROUP_NB,
) -> np.ndarray:
    """
    Walk the choice table from the last group back to the first.

    Parameters
    ----------
    tables : DPTables
        Completed cost and choice tables
    seq : SortedSequence
        Sorted sequence the tables were built on
    labels : np.ndarray
        Output array indexed by original position, filled in place
    first_group : int
        Label of the group holding the smallest values

    Returns
    -------
    np.ndarray
        ``labels``
    """
    col = tables.n - 1
    for row in range(tables.n_groups - 1, -1, -1):
        choice = tables.choice(row, col)
        group = first_group + row

        if choice.kind is ChoiceKind.NO_SPLIT:
            labels[seq.order[:col + 1]] = group
            break

        if choice.kind is ChoiceKind.TRIVIAL_PREFIX:
            # [0..row-1] are singletons, the rest of the prefix is one group
            labels[seq.order[row:col + 1]] = group
            labels[seq.order[:row]] = first_group + np.arange(row)
            break

        labels[seq.order[choice.index + 1:col + 1]] = group
        col = choice.index

    return labels
