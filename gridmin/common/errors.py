# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.


# base classes


class GridminError(Exception):
    """Base class for error raised by gridmin"""


class GridminWarning(Warning):
    pass


# errors
# pylint: disable=too-many-ancestors


class GridminValueError(ValueError, GridminError):
    """Value error raised by gridmin (invalid budget, topology or connectivity)"""


class GridminTypeError(TypeError, GridminError):
    """Type error raised by gridmin (non-integral coordinates, non-float losses)"""


# warnings


class GridminRuntimeWarning(RuntimeWarning, GridminWarning):
    """Runtime warning raised by gridmin"""


class InefficientSettingsWarning(GridminRuntimeWarning):
    """Search settings make the search useless (eg: both steps collapsed from the start)"""


class BadLossWarning(GridminRuntimeWarning):
    """Provided loss is unhelpful"""
