"""
Dynamic programming over prefixes of the sorted sequence.

``cost[g, j]`` is the minimal total cost of splitting sorted positions
``[0..j]`` into ``g + 1`` contiguous groups. The accompanying choice table
records, for each cell, how the last group was formed:

- ``NO_SPLIT``: row 0, the whole prefix is a single group.
- ``TRIVIAL_PREFIX``: positions ``[0..g-1]`` are ``g`` singleton groups and the
  last group is ``[g..j]``. This is also the value on the diagonal.
- ``SPLIT_AT(q)``: the previous group ends at ``q`` and the last group is
  ``[q+1..j]``.

Split points are scanned in ascending order and only a strictly smaller
candidate replaces the current optimum, so ties resolve to the earliest split.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

import numba
import numpy as np

from .constants import NO_INDEX, NO_SPLIT, SPLIT_AT, TRIVIAL_PREFIX


class ChoiceKind(IntEnum):
    NO_SPLIT = NO_SPLIT
    TRIVIAL_PREFIX = TRIVIAL_PREFIX
    SPLIT_AT = SPLIT_AT


@dataclass(frozen=True)
class Choice:
    """How the last group of a choice-table cell was formed."""

    kind: ChoiceKind
    index: Optional[int] = None

    @classmethod
    def no_split(cls) -> "Choice":
        return cls(ChoiceKind.NO_SPLIT)

    @classmethod
    def trivial_prefix(cls) -> "Choice":
        return cls(ChoiceKind.TRIVIAL_PREFIX)

    @classmethod
    def split_at(cls, q: int) -> "Choice":
        return cls(ChoiceKind.SPLIT_AT, q)


@numba.njit
def _fill_tables(cv: np.ndarray, n_groups: int):
    n = cv.shape[0]
    cost = np.zeros((n_groups, n))
    kind = np.zeros((n_groups, n), dtype=np.int8)
    split = np.empty((n_groups, n), dtype=np.int64)
    split[:, :] = NO_INDEX

    for j in range(n):
        cost[0, j] = cv[0, j]
        kind[0, j] = NO_SPLIT
    for g in range(1, n_groups):
        kind[g, g] = TRIVIAL_PREFIX

    for g in range(1, n_groups):
        for j in range(g + 1, n):
            best = cost[g - 1, g - 1] + cv[g, j]
            best_kind = TRIVIAL_PREFIX
            best_q = NO_INDEX
            for q in range(g - 1, j):
                candidate = cost[g - 1, q] + cv[q + 1, j]
                if candidate < best:
                    best = candidate
                    best_kind = SPLIT_AT
                    best_q = q
            cost[g, j] = best
            kind[g, j] = best_kind
            split[g, j] = best_q
    return cost, kind, split


@dataclass
class DPTables:
    """
    Minimal-cost and choice tables, shape (n_groups, n).

    Only cells with ``row <= column`` are meaningful.
    """

    cost: np.ndarray
    kind: np.ndarray
    split: np.ndarray

    @property
    def n_groups(self) -> int:
        return self.cost.shape[0]

    @property
    def n(self) -> int:
        return self.cost.shape[1]

    @property
    def total_cost(self) -> float:
        return float(self.cost[-1, -1])

    def choice(self, row: int, col: int) -> Choice:
        kind = ChoiceKind(int(self.kind[row, col]))
        if kind is ChoiceKind.SPLIT_AT:
            return Choice.split_at(int(self.split[row, col]))
        return Choice(kind)


def fill_tables(cv: np.ndarray, n_groups: int) -> DPTables:
    """
    Build the cost and choice tables from an interval cost matrix.

    Parameters
    ----------
    cv : np.ndarray
        Interval cost matrix, shape (n, n), upper triangle filled
    n_groups : int
        Number of groups, ``1 <= n_groups < n``

    Returns
    -------
    DPTables
    """
    cost, kind, split = _fill_tables(cv, n_groups)
    return DPTables(cost=cost, kind=kind, split=split)
