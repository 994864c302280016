# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import pytest
import numpy as np
import gridmin.common.typing as tp
from gridmin.common import errors
from gridmin.common import testing
from . import grids


@testing.parametrized(
    down_left=(0, [(0, 4), (1, 5), (3, 7), (4, 8)]),
    down=(1, [(0, 3), (1, 4), (2, 5), (3, 6), (4, 7), (5, 8)]),
    left=(3, [(0, 1), (1, 2), (3, 4), (4, 5), (6, 7), (7, 8)]),
    right=(5, [(1, 0), (2, 1), (4, 3), (5, 4), (7, 6), (8, 7)]),
    up=(7, [(3, 0), (4, 1), (5, 2), (6, 3), (7, 4), (8, 5)]),
    up_right=(8, [(4, 0), (5, 1), (7, 3), (8, 4)]),
)
def test_square_shift_tables(winner: int, expected: tp.List[tp.Tuple[int, int]]) -> None:
    testing.assert_set_equal(grids.SQUARE.shifts[winner], expected)


@testing.parametrized(
    down_left=(0, [(3, 6), (2, 5), (1, 4), (0, 3)]),
    left=(2, [(0, 1), (2, 3), (3, 4), (5, 6)]),
    right=(4, [(1, 0), (3, 2), (4, 3), (6, 5)]),
    up_right=(6, [(3, 0), (4, 1), (5, 2), (6, 3)]),
)
def test_triangular_shift_tables(winner: int, expected: tp.List[tp.Tuple[int, int]]) -> None:
    testing.assert_set_equal(grids.TRIANGULAR.shifts[winner], expected)


@pytest.mark.parametrize("topology", [grids.SQUARE, grids.TRIANGULAR])  # type: ignore
def test_shift_tables_are_exhaustive(topology: grids.GridTopology) -> None:
    testing.assert_set_equal(topology.shifts, set(range(topology.num_slots)) - {topology.center})
    for winner, table in topology.shifts.items():
        assert (winner, topology.center) in table
        sources, destinations = zip(*table)
        assert len(set(sources)) == len(sources)
        assert len(set(destinations)) == len(destinations)
        assert topology.center in sources  # the former center stays in the window


@testing.parametrized(
    square=(grids.SQUARE, 2, 2),
    square_negative=(grids.SQUARE, -3, 5),
    triangular=(grids.TRIANGULAR, 2, 2),
    triangular_odd=(grids.TRIANGULAR, 3, 7),
    triangular_negative=(grids.TRIANGULAR, -5, 4),
)
def test_shift_keeps_values_at_their_coordinates(topology: grids.GridTopology, dx: int, dy: int) -> None:
    def func(x: int, y: int) -> float:
        return 1000.0 * x + y + 0.5

    offsets = topology.offsets(dx, dy)
    for winner in topology.shifts:
        grid = grids.NeighborGrid(topology)
        for k, (ox, oy) in enumerate(offsets):
            grid.write(k, func(ox, oy))
        grid.shift(winner)
        cx, cy = offsets[winner]
        assert grid.center_value == func(cx, cy)
        for k, (ox, oy) in enumerate(offsets):
            value = grid.read(k)
            if value is not None:
                assert value == func(cx + ox, cy + oy), f"Wrong value in slot {k} after moving to {winner}"


def test_square_offsets() -> None:
    offsets = grids.SQUARE.offsets(2, 3)
    testing.printed_assert_equal(offsets[0], (-2, -3))
    testing.printed_assert_equal(offsets[4], (0, 0))
    testing.printed_assert_equal(offsets[5], (2, 0))
    testing.printed_assert_equal(offsets[7], (0, 3))
    testing.printed_assert_equal(offsets[8], (2, 3))


@testing.parametrized(
    even=(2, 2, [(-1, -2), (1, -2), (-2, 0), (0, 0), (2, 0), (-1, 2), (1, 2)]),
    odd=(3, 5, [(-1, -5), (2, -5), (-3, 0), (0, 0), (3, 0), (-2, 5), (1, 5)]),
    negative_odd=(-3, 5, [(1, -5), (-2, -5), (3, 0), (0, 0), (-3, 0), (2, 5), (-1, 5)]),
    collapsed_x=(0, 4, [(0, -4), (0, -4), (0, 0), (0, 0), (0, 0), (0, 4), (0, 4)]),
)
def test_triangular_offsets(dx: int, dy: int, expected: tp.List[tp.Coordinates]) -> None:
    testing.printed_assert_equal(grids.TRIANGULAR.offsets(dx, dy), expected)


def test_big_steps_do_not_overflow() -> None:
    step = 2**80 + 1
    offsets = grids.TRIANGULAR.offsets(step, step)
    assert offsets[6] == (2**79, step)


def test_neighbor_grid() -> None:
    grid = grids.NeighborGrid(grids.SQUARE)
    assert all(grid.read(k) is None for k in range(9))
    grid.write(4, 12.0)
    grid.write(5, -3.0)  # non-positive values are valid cache entries
    grid.write(0, 0.0)
    assert grid.center_value == 12.0
    assert grid.read(5) == -3.0
    assert grid.is_known(0)
    assert "?" in repr(grid)
    grid.reset()
    assert grid.center_value == 12.0
    assert [grid.is_known(k) for k in range(9)] == [k == 4 for k in range(9)]


def test_neighbor_grid_shift() -> None:
    grid = grids.NeighborGrid(grids.SQUARE)
    for k in range(9):
        grid.write(k, float(k + 1))
    grid.shift(7)  # up
    np.testing.assert_array_equal([grid.read(k) for k in range(3)], [4.0, 5.0, 6.0])
    np.testing.assert_array_equal([grid.read(k) for k in range(3, 6)], [7.0, 8.0, 9.0])
    assert all(grid.read(k) is None for k in range(6, 9))


def test_get_topology() -> None:
    assert grids.get_topology("triangular") is grids.TRIANGULAR
    with pytest.raises(errors.GridminValueError, match="Unknown topology"):
        grids.get_topology("hexagonal")
    with pytest.raises(ValueError, match="not available"):
        grids.TRIANGULAR.neighbors("diagonal")
    assert grids.SQUARE.connectivities == ("orthogonal", "diagonal")
    assert len(grids.SQUARE.neighbors("diagonal")) == 8
    assert len(grids.TRIANGULAR.neighbors("orthogonal")) == 6
