import io
import math

import pytest

from reduced_tsp.consumer import TourBuilder, format_path
from reduced_tsp.errors import TourAssemblyError
from reduced_tsp.log_sink import pretty
from reduced_tsp.solver import solve


def builder_with(size, edges, **kwargs):
    builder = TourBuilder(size, **kwargs)
    for edge in edges:
        builder.accept(edge)
    return builder


def test_closing_edge_uses_free_source_and_destination():
    builder = builder_with(4, [(3, 1), (1, 2), (0, 3)])
    assert builder.closing_edge() == (2, 0)
    assert builder.get_full_path() == [3, 2, 0, 1]


def test_tour_from_any_start():
    builder = builder_with(4, [(3, 1), (1, 2), (0, 3)])
    assert builder.tour() == [0, 3, 1, 2]
    assert builder.tour(start=1) == [1, 2, 0, 3]


def test_two_node_cycle():
    builder = builder_with(2, [(0, 1)])
    assert builder.get_full_path() == [1, 0]
    assert builder.tour() == [0, 1]


def test_wrong_edge_count():
    builder = builder_with(4, [(0, 1)])
    with pytest.raises(TourAssemblyError, match="Expected 3 edges, got 1"):
        builder.closing_edge()


def test_reused_endpoint():
    builder = builder_with(4, [(0, 1), (2, 1), (3, 0)])
    with pytest.raises(TourAssemblyError, match="reuse an endpoint"):
        builder.closing_edge()


def test_subtours_are_reported():
    builder = builder_with(4, [(0, 1), (1, 0), (2, 3)])
    assert builder.subtours() == [[0, 1], [2, 3]]
    with pytest.raises(TourAssemblyError) as info:
        builder.tour()
    assert info.value.cycles == [[0, 1], [2, 3]]


def test_three_cycle_leaves_self_loop():
    builder = builder_with(4, [(0, 1), (1, 2), (2, 0)])
    assert builder.closing_edge() == (3, 3)
    assert builder.subtours() == [[0, 1, 2], [3]]


def test_writer_receives_each_edge(matrix_a):
    out = io.StringIO()
    solve(matrix_a, TourBuilder(4, matrix_a, writer=out))
    assert out.getvalue().splitlines() == [
        "3 --[6]--> 1",
        "1 --[8]--> 2",
        "0 --[9]--> 3",
    ]


def test_format_path(matrix_a):
    text, total = format_path([3, 2, 0, 1], matrix_a)
    assert text == "0 --[9]--> 3 --[6]--> 1 --[8]--> 2 --[7]--> 0"
    assert total == 30


@pytest.mark.parametrize('value, expected', [
    (math.nan, '?'),
    (math.inf, '∞'),
    (-math.inf, '-∞'),
    (2.0, '2'),
    (1.5, '1.5'),
    (1 / 3, '0.333333'),
    (-1e-9, '0'),
])
def test_pretty(value, expected):
    assert pretty(value) == expected
