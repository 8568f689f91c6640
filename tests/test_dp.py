import numpy as np
import pytest

from scgOpt.partition.backtrack import backtrack_labels
from scgOpt.partition.cost import deviation_cost_matrix
from scgOpt.partition.dp import Choice, ChoiceKind, fill_tables
from scgOpt.partition.sorting import sort_values


def tables_for(values, n_groups):
    seq = sort_values(np.asarray(values, dtype=float))
    return seq, fill_tables(deviation_cost_matrix(seq.values), n_groups)


def test_first_row_is_the_whole_prefix():
    seq, tables = tables_for([1, 2, 3, 4, 5], 3)
    cv = deviation_cost_matrix(seq.values)
    np.testing.assert_array_equal(tables.cost[0], cv[0])
    assert all(tables.choice(0, j) == Choice.no_split() for j in range(5))


def test_diagonal_is_trivial_prefix():
    _, tables = tables_for([1, 2, 3, 4, 5, 6], 4)
    for g in range(1, 4):
        assert tables.choice(g, g).kind is ChoiceKind.TRIVIAL_PREFIX
        assert tables.cost[g, g] == 0.0


def test_tie_resolves_to_earliest_split():
    # {1,2}|{3,4,5} and {1,2,3}|{4,5} both cost 2.5
    _, tables = tables_for([1, 2, 3, 4, 5], 2)
    assert tables.total_cost == 2.5
    assert tables.choice(1, 4) == Choice.split_at(1)


def test_seed_split_kept_on_equal_candidate():
    # the seed [0] | [10, 11, 12] is not replaced by the equal q=0 candidate
    _, tables = tables_for([0, 10, 11, 12], 2)
    assert tables.choice(1, 3).kind is ChoiceKind.TRIVIAL_PREFIX
    assert tables.total_cost == pytest.approx(2.0)


def test_cost_table_is_monotone_in_groups(rng):
    _, tables = tables_for(rng.normal(size=15), 6)
    for g in range(1, 6):
        assert tables.cost[g, -1] <= tables.cost[g - 1, -1] + 1e-12


def test_backtrack_split_at():
    seq, tables = tables_for([5, 1, 3, 2, 4], 2)
    labels = backtrack_labels(tables, seq, np.full(5, -1))
    np.testing.assert_array_equal(labels, [1, 0, 1, 0, 1])


def test_backtrack_trivial_prefix_beyond_first_row():
    # best 3-group split of [0, 5, 100, 101, 102] keeps 0 and 5 as singletons
    seq, tables = tables_for([100, 0, 101, 5, 102], 3)
    assert tables.choice(2, 4).kind is ChoiceKind.TRIVIAL_PREFIX
    labels = backtrack_labels(tables, seq, np.full(5, -1))
    np.testing.assert_array_equal(labels, [2, 0, 2, 1, 2])


def test_backtrack_groups_the_closest_pair():
    seq, tables = tables_for([0.0, 1.0, 50.0, 51.0], 3)
    labels = backtrack_labels(tables, seq, np.full(4, -1))
    np.testing.assert_array_equal(labels, [0, 1, 2, 2])


def test_backtrack_respects_first_group():
    seq, tables = tables_for([5, 1, 3, 2, 4], 2)
    labels = backtrack_labels(tables, seq, np.zeros(5, dtype=int), first_group=1)
    np.testing.assert_array_equal(labels, [2, 1, 2, 1, 2])
