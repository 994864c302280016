# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import math
import logging
import warnings
from numbers import Real
import gridmin.common.typing as tp
from gridmin.common import tools as gmtools
from gridmin.common import errors as errors
from gridmin.common.decorators import Registry
from . import grids


logger = logging.getLogger(__name__)
registry: Registry["ConfiguredSearch"] = Registry()


class SearchResult(tp.NamedTuple):
    """Outcome of a search: best point found, its value and the number of objective calls"""

    x: int
    y: int
    value: tp.FloatLoss
    num_evaluations: int


def split_signed_runs(runs: int) -> tp.Tuple[int, str]:
    """Converts a signed run budget (negative meaning 8-connected square grids)
    into a (num_runs, connectivity) pair
    """
    runs = gmtools.as_int(runs, "runs")
    return abs(runs), "diagonal" if runs < 0 else "orthogonal"


class _Climber:
    """State of one search: the objective, the current center, the grid around it
    and the number of objective calls so far.
    """

    def __init__(
        self,
        objective: tp.Objective,
        callbacks: tp.Sequence[tp.ProgressCallback],
        topology: grids.GridTopology,
        x0: int,
        y0: int,
    ) -> None:
        self._objective = objective
        self._callbacks = list(callbacks)
        self.grid = grids.NeighborGrid(topology)
        self.x = x0
        self.y = y0
        self.num_evaluations = 0
        self.grid.write(topology.center, self.evaluate(x0, y0))
        self._notify()

    def evaluate(self, x: int, y: int) -> float:
        loss = self._objective(x, y)
        if not isinstance(loss, Real):
            raise errors.GridminTypeError(
                f'"loss" should be a real number, got {loss!r} of type {type(loss)} at ({x}, {y})'
            )
        self.num_evaluations += 1
        loss = float(loss)
        if math.isnan(loss):
            warnings.warn(f"NaN loss at ({x}, {y}) will never be selected", errors.BadLossWarning)
        return loss

    def _notify(self) -> None:
        value = self.grid.center_value
        for callback in self._callbacks:
            callback(self.x, self.y, value)

    def evaluate_neighbors(self, offsets: tp.Sequence[tp.Coordinates], slots: tp.Iterable[int]) -> int:
        """Evaluates the unknown slots and returns the index of the best slot
        (the center if no neighbor is strictly better). Ties go to the first slot in scan order.
        """
        grid = self.grid
        best = grid.topology.center
        best_value = grid.center_value
        for slot in slots:
            if grid.is_known(slot):
                continue
            dx, dy = offsets[slot]
            value = self.evaluate(self.x + dx, self.y + dy)
            grid.write(slot, value)
            if value < best_value:
                best, best_value = slot, value
        return best

    def climb(self, offsets: tp.Sequence[tp.Coordinates], slots: tp.Sequence[int]) -> int:
        """Moves to the best neighbor until the center is a local optimum
        for the current offsets, and returns the number of accepted moves
        """
        center = self.grid.topology.center
        num_moves = 0
        while True:
            winner = self.evaluate_neighbors(offsets, slots)
            if winner == center:
                self.grid.reset()  # next offsets will differ
                return num_moves
            dx, dy = offsets[winner]
            self.x += dx
            self.y += dy
            self.grid.shift(winner)
            num_moves += 1
            self._notify()

    def result(self) -> SearchResult:
        return SearchResult(self.x, self.y, self.grid.center_value, self.num_evaluations)


class PatternSearch:
    """Compass search over integer 2D coordinates with step halving.

    Each run evaluates the neighbors of the current center on the grid, moves to the best one
    as long as it strictly improves, then halves the steps (rounding toward 0). Values already
    computed in the neighborhood are reused when the center moves, so that no point in the window
    is evaluated twice.

    Parameters
    ----------
    num_runs: int
        maximum number of runs, i.e. of step halvings
    topology: str
        "square" (3x3 grid) or "triangular" (hexagonal grid, 6 neighbors)
    connectivity: str
        "orthogonal" (4 neighbors on square grids) or "diagonal" (8 neighbors, square grids only)

    Note
    ----
    The search stops early when both steps have reached 0. When only one of them is 0,
    the run searches along the other axis only.
    """

    def __init__(
        self, num_runs: int, *, topology: tp.Topology = "square", connectivity: tp.Connectivity = "orthogonal"
    ) -> None:
        self.num_runs = gmtools.as_int(num_runs, "num_runs")
        if self.num_runs < 0:
            raise errors.GridminValueError(
                f"num_runs must be non-negative, got {num_runs} (use split_signed_runs for signed budgets)"
            )
        self.topology = grids.get_topology(topology)
        self.connectivity = connectivity
        self._neighbors = self.topology.neighbors(connectivity)
        self.name = self.__class__.__name__  # printed name in repr
        self._callbacks: tp.List[tp.ProgressCallback] = []

    def __repr__(self) -> str:
        return f"Instance of {self.name}(num_runs={self.num_runs}, topology={self.topology.name!r})"

    def register_callback(self, callback: tp.ProgressCallback) -> None:
        """Adds a callback called with (x, y, value) at the start of the search
        and then at each improving move. Callbacks are called in the order of registration.
        """
        self._callbacks.append(callback)

    def remove_all_callbacks(self) -> None:
        self._callbacks = []

    def minimize(
        self,
        objective: tp.Objective,
        x0: int,
        y0: int,
        dx: int,
        dy: int,
        callback: tp.Optional[tp.ProgressCallback] = None,
    ) -> SearchResult:
        """Minimizes the objective starting from (x0, y0) with initial steps (dx, dy)

        Parameters
        ----------
        objective: callable
            function of 2 integers returning a float. It is called once on (x0, y0) whatever the budget.
        x0, y0: int
            starting point
        dx, dy: int
            initial steps, their sign only affects the scan order
        callback: callable
            optional additional callback, called after the registered ones

        Returns
        -------
        SearchResult
            best point (x, y), its value and the number of calls to the objective
        """
        x0, y0, dx, dy = (gmtools.as_int(v, n) for v, n in zip((x0, y0, dx, dy), ("x0", "y0", "dx", "dy")))
        callbacks = self._callbacks + ([] if callback is None else [callback])
        climber = _Climber(objective, callbacks, self.topology, x0, y0)
        if self.num_runs and dx == -dx and dy == -dy:
            warnings.warn("Both steps are 0, the search will stop right away", errors.InefficientSettingsWarning)
        for run in range(self.num_runs):
            x_collapsed, y_collapsed = dx == -dx, dy == -dy
            if x_collapsed and y_collapsed:
                logger.debug("Both steps collapsed, stopping after %s run(s)", run)
                break
            if y_collapsed:
                neighbors = self.topology.axis_neighbors["x"]
                logger.debug("Step dy collapsed, searching along x only")
            elif x_collapsed:
                neighbors = self.topology.axis_neighbors["y"]
                logger.debug("Step dx collapsed, searching along y only")
            else:
                neighbors = self._neighbors
            offsets = self.topology.offsets(0 if x_collapsed else dx, 0 if y_collapsed else dy)
            logger.debug(
                "Run %s with steps (%s, %s) from (%s, %s) on slots %s", run, dx, dy, climber.x, climber.y, neighbors
            )
            num_moves = climber.climb(offsets, neighbors)
            logger.debug(
                "Run %s converged at (%s, %s) after %s move(s), %s evaluation(s) so far",
                run,
                climber.x,
                climber.y,
                num_moves,
                climber.num_evaluations,
            )
            dx, dy = gmtools.halve(dx), gmtools.halve(dy)
        return climber.result()


class ConfiguredSearch:
    """Creates search instances with a given configuration.

    Parameters
    ----------
    SearchClass: type
        class of the search to configure
    config: dict
        dictionnary of all the configurations

    Note
    ----
    This provides a default repr which can be bypassed through set_name
    """

    def __init__(self, SearchClass: tp.Type[PatternSearch], config: tp.Dict[str, tp.Any]) -> None:
        self._SearchClass = SearchClass
        config.pop("self", None)  # self comes from "locals()"
        config.pop("__class__", None)  # self comes from "locals()"
        self._config = config
        diff = gmtools.different_from_defaults(instance=self, instance_dict=config, check_mismatches=True)
        params = ", ".join(f"{x}={y!r}" for x, y in sorted(diff.items()))
        self.name = f"{self.__class__.__name__}({params})"
        self(num_runs=1)  # try instantiating for init checks

    def config(self) -> tp.Dict[str, tp.Any]:
        return dict(self._config)

    def __call__(self, num_runs: int) -> PatternSearch:
        """Creates a search with the given number of runs"""
        search = self._SearchClass(num_runs, **self._config)
        search.name = self.name
        return search

    def __repr__(self) -> str:
        return self.name

    def set_name(self, name: str, register: bool = False) -> "ConfiguredSearch":
        """Set a new representation for the instance"""
        self.name = name
        if register:
            registry.register_name(name, self)
        return self

    def __eq__(self, other: tp.Any) -> tp.Any:
        if self.__class__ == other.__class__:
            if self._config == other._config:
                return True
        return False
