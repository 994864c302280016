# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Definitions of some convenient types.
"""
# pylint: disable=unused-import
# structures
from typing import Any as Any
from typing import Type as Type
from typing import TypeVar as TypeVar
from typing import Optional as Optional
from typing import Union as Union

# containers
from typing import Dict as Dict
from typing import Tuple as Tuple
from typing import List as List
from typing import Sequence as Sequence
from typing import NamedTuple as NamedTuple
from typing import MutableMapping as MutableMapping

# iterables
from typing import Iterator as Iterator
from typing import Iterable as Iterable

# others
from typing import Callable as Callable
from pathlib import Path as Path
from typing_extensions import Protocol
from typing_extensions import Literal


PathLike = Union[str, Path]
FloatLoss = float
Coordinates = Tuple[int, int]
Topology = Literal["square", "triangular"]
Connectivity = Literal["orthogonal", "diagonal"]


# %% Protocol definitions for objective and callback typing


class Objective(Protocol):
    # pylint: disable=pointless-statement, unused-argument

    def __call__(self, x: int, y: int) -> float:
        ...


class ProgressCallback(Protocol):
    # pylint: disable=pointless-statement, unused-argument

    def __call__(self, x: int, y: int, value: float) -> None:
        ...
