# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Neighbor grids used by the pattern search.

A grid is a fixed set of slots around the current center. Each slot has integer
lattice coordinates, which are mapped to objective coordinates through a basis
depending on the step vector:

- square topology, 9 slots, center 4, basis ``u=(dx, 0)``, ``v=(0, dy)``::

    6 7 8
    3 4 5
    0 1 2

- triangular topology, 7 slots, center 3, basis ``u=(dx, 0)``, ``v=(dx/2, dy)``::

     5 6
    2 3 4
     0 1

Since slots live on a lattice, moving the center to a neighbor is a pure
relabeling of the cached values: the shift tables are derived once from the
lattice coordinates.
"""

import numpy as np
import gridmin.common.typing as tp
from gridmin.common import errors
from gridmin.common import tools


ShiftTable = tp.Tuple[tp.Tuple[int, int], ...]  # (source slot, destination slot) pairs


def _make_shift_tables(positions: tp.Sequence[tp.Coordinates]) -> tp.Dict[int, ShiftTable]:
    """Creates, for each non-center slot k, the pairs (i, j) such that the value
    cached in slot i before moving the center to slot k must be stored in slot j after the move.
    """
    index = {pos: i for i, pos in enumerate(positions)}
    tables: tp.Dict[int, ShiftTable] = {}
    for k, (kx, ky) in enumerate(positions):
        if (kx, ky) == (0, 0):
            continue
        pairs = ((i, index.get((x - kx, y - ky), -1)) for i, (x, y) in enumerate(positions))
        tables[k] = tuple((i, j) for i, j in pairs if j >= 0)
    return tables


class GridTopology:
    """Layout of a neighbor grid

    Parameters
    ----------
    name: str
        name of the topology
    positions: sequence of (int, int)
        lattice coordinates of each slot, in slot order. Exactly one of them is (0, 0), the center.
    neighbors: dict
        active neighbor slots (in scan order) for each supported connectivity
    axis_neighbors: dict
        active neighbor slots when the search is restricted to one axis:
        "x" when the y step has collapsed, "y" when the x step has collapsed
    """

    def __init__(
        self,
        name: str,
        positions: tp.Sequence[tp.Coordinates],
        neighbors: tp.Dict[str, tp.Tuple[int, ...]],
        axis_neighbors: tp.Dict[str, tp.Tuple[int, ...]],
    ) -> None:
        self.name = name
        self.positions = tuple(positions)
        self.center = self.positions.index((0, 0))
        self.num_slots = len(self.positions)
        self._neighbors = dict(neighbors)
        self.axis_neighbors = dict(axis_neighbors)
        self.shifts = _make_shift_tables(self.positions)
        self._shift_arrays = {
            k: (np.array([s for s, _ in table]), np.array([d for _, d in table]))
            for k, table in self.shifts.items()
        }

    @property
    def connectivities(self) -> tp.Tuple[str, ...]:
        return tuple(self._neighbors)

    def neighbors(self, connectivity: str) -> tp.Tuple[int, ...]:
        """Active neighbor slots, in scan order, for the given connectivity"""
        if connectivity not in self._neighbors:
            raise errors.GridminValueError(
                f'Connectivity "{connectivity}" is not available for {self.name} grids '
                f"(choose among {self.connectivities})"
            )
        return self._neighbors[connectivity]

    def basis(self, dx: int, dy: int) -> tp.Tuple[tp.Coordinates, tp.Coordinates]:
        return (dx, 0), (0, dy)

    def offsets(self, dx: int, dy: int) -> tp.List[tp.Coordinates]:
        """Coordinate offset of each slot for the step vector (dx, dy)"""
        (ux, uy), (vx, vy) = self.basis(dx, dy)
        return [(a * ux + b * vx, a * uy + b * vy) for a, b in self.positions]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r}, slots={self.num_slots})"


class TriangularTopology(GridTopology):
    """Hexagonal lattice: rows are dy apart and every other row is offset by half the x step.
    For odd steps, the half step is truncated toward zero, hence slightly asymmetric rows.
    """

    def basis(self, dx: int, dy: int) -> tp.Tuple[tp.Coordinates, tp.Coordinates]:
        return (dx, 0), (tools.halve(dx), dy)


SQUARE = GridTopology(
    "square",
    positions=[(i % 3 - 1, i // 3 - 1) for i in range(9)],
    neighbors={"orthogonal": (1, 3, 5, 7), "diagonal": (0, 1, 2, 3, 5, 6, 7, 8)},
    axis_neighbors={"x": (3, 5), "y": (1, 7)},
)
TRIANGULAR = TriangularTopology(
    "triangular",
    positions=[(0, -1), (1, -1), (-1, 0), (0, 0), (1, 0), (-1, 1), (0, 1)],
    neighbors={"orthogonal": (0, 1, 2, 4, 5, 6)},  # no diagonals on this lattice
    axis_neighbors={"x": (2, 4), "y": (0, 6)},
)
TOPOLOGIES: tp.Dict[str, GridTopology] = {topo.name: topo for topo in [SQUARE, TRIANGULAR]}


def get_topology(name: str) -> GridTopology:
    if name not in TOPOLOGIES:
        raise errors.GridminValueError(f'Unknown topology "{name}" (choose among {sorted(TOPOLOGIES)})')
    return TOPOLOGIES[name]


class NeighborGrid:
    """Cache of objective values around the current center.
    Each slot holds a value and a "known" flag, so that any float (including
    zero or negative values) can be cached.

    Parameters
    ----------
    topology: GridTopology
        layout of the slots
    """

    def __init__(self, topology: GridTopology) -> None:
        self.topology = topology
        self._values = np.zeros(topology.num_slots, dtype=float)
        self._known = np.zeros(topology.num_slots, dtype=bool)

    def read(self, index: int) -> tp.Optional[float]:
        """Returns the cached value, or None if the slot is unknown"""
        return float(self._values[index]) if self._known[index] else None

    def write(self, index: int, value: float) -> None:
        self._values[index] = value
        self._known[index] = True

    def is_known(self, index: int) -> bool:
        return bool(self._known[index])

    @property
    def center_value(self) -> float:
        value = self.read(self.topology.center)
        assert value is not None, "Center value should always be known"
        return value

    def reset(self) -> None:
        """Marks all slots but the center as unknown"""
        self._known[:] = False
        self._known[self.topology.center] = True

    def shift(self, winner: int) -> None:
        """Moves the center to the winner slot, relabeling the cached values
        which remain in the window and marking all other slots as unknown
        """
        source, destination = self.topology._shift_arrays[winner]
        values = np.zeros_like(self._values)
        known = np.zeros_like(self._known)
        values[destination] = self._values[source]
        known[destination] = self._known[source]
        self._values, self._known = values, known

    def __repr__(self) -> str:
        cells = ", ".join("?" if not k else f"{v:.4g}" for v, k in zip(self._values, self._known))
        return f"{self.__class__.__name__}<{self.topology.name}>[{cells}]"
