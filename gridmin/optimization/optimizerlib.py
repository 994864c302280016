# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import gridmin.common.typing as tp
from . import base
from .base import registry as registry
from .base import SearchResult as SearchResult
from .base import split_signed_runs as split_signed_runs


class ParametrizedPatternSearch(base.ConfiguredSearch):
    """Local compass search on integer 2D grids, with step halving between runs.

    Parameters
    ----------
    topology: str
        layout of the neighbors evaluated around the current center:

        - `"square"`: 3x3 grid, with 4 (orthogonal) or 8 (diagonal) neighbors.
        - `"triangular"`: hexagonal grid with 6 neighbors. Rows are dy apart and offset by dx/2,
          so dy ~ 0.866 dx provides a nearly equilateral lattice.
    connectivity: str
        `"orthogonal"` or `"diagonal"` (square grids only).

    Notes
    -----
    Triangular grids need fewer evaluations per run than 8-connected square grids
    for a comparable resolution, at the cost of a non-square lattice.
    """

    # pylint: disable=unused-argument
    def __init__(self, *, topology: tp.Topology = "square", connectivity: tp.Connectivity = "orthogonal") -> None:
        super().__init__(base.PatternSearch, locals())


SquareSearch = ParametrizedPatternSearch().set_name("SquareSearch", register=True)
DiagonalSquareSearch = ParametrizedPatternSearch(connectivity="diagonal").set_name(
    "DiagonalSquareSearch", register=True
)
TriangularSearch = ParametrizedPatternSearch(topology="triangular").set_name("TriangularSearch", register=True)


def find_min(
    num_runs: int,
    x0: int,
    y0: int,
    dx: int,
    dy: int,
    objective: tp.Objective,
    callback: tp.Optional[tp.ProgressCallback] = None,
    connectivity: tp.Connectivity = "orthogonal",
) -> SearchResult:
    """Minimizes objective(x, y) on a square grid starting at (x0, y0) with (±dx, ±dy) steps
    for up to num_runs runs, halving the steps between runs.
    If provided, callback(x, y, value) is called with the starting point and with every new optimum.

    Returns
    -------
    SearchResult
        (x, y, value, num_evaluations) of the best point found
    """
    search = ParametrizedPatternSearch(connectivity=connectivity)(num_runs)
    return search.minimize(objective, x0, y0, dx, dy, callback=callback)


def find_min_tri(
    num_runs: int,
    x0: int,
    y0: int,
    dx: int,
    dy: int,
    objective: tp.Objective,
    callback: tp.Optional[tp.ProgressCallback] = None,
) -> SearchResult:
    """Same as find_min, on a triangular grid: neighbors are (±dx, 0) on the current row,
    and shifted by dx/2 on the rows at ±dy.
    """
    return TriangularSearch(num_runs).minimize(objective, x0, y0, dx, dy, callback=callback)
