# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .common import typing as typing
from .common import errors as errors
from .optimization import optimizerlib as optimizers
from .optimization import callbacks as callbacks
from .optimization.base import PatternSearch as PatternSearch
from .optimization.base import SearchResult as SearchResult
from .optimization.optimizerlib import find_min as find_min
from .optimization.optimizerlib import find_min_tri as find_min_tri
from .optimization.optimizerlib import split_signed_runs as split_signed_runs


__all__ = [
    "optimizers",
    "callbacks",
    "errors",
    "typing",
    "PatternSearch",
    "SearchResult",
    "find_min",
    "find_min_tri",
    "split_signed_runs",
]


__version__ = "0.1.0"
