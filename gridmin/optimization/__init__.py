# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .base import PatternSearch  # for type checking
from .base import SearchResult
from . import optimizerlib
from .optimizerlib import registry
