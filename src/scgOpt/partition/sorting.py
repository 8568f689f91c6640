"""
Sorting and validation of the input sequence.

The values are ordered ascending once, keeping their original positions so
that labels computed on sorted positions can be written back in the caller's
index space.
"""

import logging
import operator
from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional

import numpy as np

from .exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


class IndexedValue(NamedTuple):
    value: float
    position: int


@dataclass(frozen=True)
class SortedSequence:
    """
    Input values in ascending order paired with their original positions.

    Attributes
    ----------
    values : np.ndarray
        Sorted values, shape (n,)
    order : np.ndarray
        Original position of each sorted value, shape (n,)
    """

    values: np.ndarray
    order: np.ndarray

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, i: int) -> IndexedValue:
        return IndexedValue(float(self.values[i]), int(self.order[i]))

    def __iter__(self) -> Iterator[IndexedValue]:
        for i in range(len(self)):
            yield self[i]

    def permute(self, array: np.ndarray) -> np.ndarray:
        """Reorder an array aligned to the original positions into sorted order."""
        return np.ascontiguousarray(array[self.order], dtype=np.float64)


def sort_values(values: np.ndarray) -> SortedSequence:
    """
    Sort values ascending; ties keep their input order.

    Parameters
    ----------
    values : np.ndarray
        1-D array of values

    Returns
    -------
    SortedSequence
    """
    order = np.argsort(values, kind="stable")
    sorted_values = np.ascontiguousarray(values[order], dtype=np.float64)
    sorted_values.flags.writeable = False
    order.flags.writeable = False
    return SortedSequence(values=sorted_values, order=order)


def count_distinct(seq: SortedSequence) -> int:
    """Number of value-equality classes, counted on adjacent sorted entries."""
    if len(seq) == 0:
        return 0
    return int(np.count_nonzero(seq.values[1:] != seq.values[:-1])) + 1


def as_group_count(n_groups) -> int:
    """Coerce ``n_groups`` to a Python int; floats and other non-integers are rejected."""
    try:
        return operator.index(n_groups)
    except TypeError:
        raise InvalidArgumentError(
            f"The number of groups must be an integer, got {n_groups!r}"
        ) from None


def validate_n_groups(seq: SortedSequence, n_groups: int) -> int:
    """
    Check that ``n_groups`` groups can be formed from the sequence.

    Raises
    ------
    InvalidArgumentError
        If ``n_groups`` is not strictly smaller than the number of distinct
        values, or is smaller than one.

    Returns
    -------
    int
        The distinct count.
    """
    n_groups = as_group_count(n_groups)
    distinct = count_distinct(seq)
    if n_groups < 1:
        raise InvalidArgumentError(f"The number of groups must be at least 1, got {n_groups}")
    if n_groups >= distinct:
        raise InvalidArgumentError(
            "When the optimal method is chosen, the number of groups "
            f"({n_groups}) must be smaller than the number of unique values ({distinct})"
        )
    logger.debug(f"{len(seq)} values, {distinct} distinct, {n_groups} groups requested")
    return distinct


def as_vector(array, name: str, length: Optional[int] = None) -> np.ndarray:
    """Coerce ``array`` to a contiguous 1-D float64 vector."""
    vector = np.ascontiguousarray(array, dtype=np.float64)
    if vector.ndim != 1:
        raise InvalidArgumentError(f"'{name}' must be one-dimensional, got shape {vector.shape}")
    if length is not None and len(vector) != length:
        raise InvalidArgumentError(
            f"'{name}' has length {len(vector)} but {length} values were given"
        )
    return vector
