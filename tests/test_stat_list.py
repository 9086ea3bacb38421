import math

from reduced_tsp.candidates import CellCoords
from reduced_tsp.no_path import NoPathMatrix
from reduced_tsp.stat_list import Stat, StatList


def test_term_is_zero_for_tied_minimum():
    stat = Stat(0, min=1.0, min2=5.0, min_count=2)
    assert stat.update_term() == 0.0


def test_term_is_gap_to_second_minimum():
    stat = Stat(0, min=1.0, min2=5.0, min_count=1)
    assert stat.update_term() == 4.0
    assert stat.term == 4.0


def test_term_without_second_minimum_is_nan():
    stat = Stat(0, min=1.0, min_count=1)
    assert math.isnan(stat.update_term())


def test_get_sum_adds_row_and_column_terms():
    stats = StatList(3, NoPathMatrix(3))
    stats.get_row(0).term = 2.0
    stats.get_column(1).term = 3.5
    assert stats.get_sum(CellCoords(0, 1)) == 5.5


def test_commit_edge_forbids_both_directions_and_compacts():
    no_path = NoPathMatrix(4)
    stats = StatList(4, no_path)
    stats.get_row(1).no_path_cell_count = 1
    stats.get_column(3).no_path_cell_count = 1

    edge = stats.commit_edge(CellCoords(1, 3))

    assert edge == (1, 3)
    assert no_path[1, 3] and no_path[3, 1]
    assert stats.row_count == 3
    assert stats.column_count == 3
    # row slot 1 takes over the last active row; column 3 was already last
    assert stats.row_snapshot().mx_index == (0, 3, 2)
    assert stats.column_snapshot().mx_index == (0, 1, 2)
    assert all(math.isnan(stats.get_row(i).min) for i in range(stats.row_count))
    assert stats.get_row(1).no_path_cell_count == 0


def test_commit_edge_keeps_slot_without_forbidden_cells():
    no_path = NoPathMatrix(3)
    stats = StatList(3, no_path)
    stats.get_column(1).no_path_cell_count = 2

    assert stats.commit_edge(CellCoords(0, 1)) == (0, 1)
    assert stats.row_count == 3
    assert stats.column_count == 2
    assert stats.column_snapshot().mx_index == (0, 2)
    assert no_path[1, 0]


def test_snapshot_covers_active_slots_only():
    stats = StatList(3, NoPathMatrix(3))
    stats.get_row(0).no_path_cell_count = 1
    stats.commit_edge(CellCoords(0, 1))
    snap = stats.row_snapshot()
    assert snap.mx_index == (2, 1)
    assert len(snap.term) == 2
