# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import math
import gridmin.common.typing as tp
from gridmin.common.decorators import Registry


registry: Registry[tp.Callable[[int, int], float]] = Registry()


class Paraboloid:
    """Squared euclidean distance to a (possibly non-integer) center, plus an offset.
    With offset > 0 or a non-integer center, values are strictly positive on the integer grid.

    Parameters
    ----------
    cx, cy: float
        position of the continuous optimum
    offset: float
        value added everywhere
    """

    def __init__(self, cx: float = 3.3, cy: float = 4.4, offset: float = 0.0) -> None:
        self.cx = cx
        self.cy = cy
        self.offset = offset

    def __call__(self, x: int, y: int) -> float:
        a = x - self.cx
        b = y - self.cy
        return a * a + b * b + self.offset

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(cx={self.cx}, cy={self.cy}, offset={self.offset})"


class CountingObjective:
    """Wraps an objective and records every point it is called on

    Parameters
    ----------
    func: callable
        the objective function to wrap
    """

    def __init__(self, func: tp.Callable[[int, int], float]) -> None:
        self.func = func
        self.calls: tp.List[tp.Coordinates] = []

    @property
    def count(self) -> int:
        return len(self.calls)

    def __call__(self, x: int, y: int) -> float:
        self.calls.append((x, y))
        return self.func(x, y)


@registry.register_with_info(optimum=(3, 4))
def paraboloid(x: int, y: int) -> float:
    a = x - 3.3
    b = y - 4.4
    return a * a + b * b


@registry.register_with_info(optimum=(-7, 12))
def l1(x: int, y: int) -> float:
    return abs(x + 7) + abs(y - 12) + 1.0


@registry.register_with_info(optimum=(0, 0))
def rastrigin(x: int, y: int) -> float:
    """Multimodal on a scale of 8, with integer optimum at (0, 0)"""
    u, v = x / 8.0, y / 8.0
    return 1.0 + 20 + u * u + v * v - 10 * (math.cos(2 * math.pi * u) + math.cos(2 * math.pi * v))
