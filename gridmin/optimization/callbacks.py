# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import json
import time
import warnings
import datetime
import logging
from pathlib import Path
import gridmin.common.typing as tp

global_logger = logging.getLogger(__name__)


class ProgressPrinter:
    """Printer to register as callback in a search, for printing
    the current optimum regularly.

    Parameters
    ----------
    print_interval_moves: int
        max number of calls before performing another print
    print_interval_seconds: float
        max number of seconds before performing another print
    """

    def __init__(self, print_interval_moves: int = 1, print_interval_seconds: float = 60.0) -> None:
        assert print_interval_moves > 0
        assert print_interval_seconds > 0
        self._print_interval_moves = int(print_interval_moves)
        self._print_interval_seconds = print_interval_seconds
        self._num_calls = 0
        self._next_call = 1
        self._next_time = time.time() + print_interval_seconds

    def __call__(self, x: int, y: int, value: float) -> None:
        self._num_calls += 1
        if time.time() >= self._next_time or self._num_calls >= self._next_call:
            self._next_time = time.time() + self._print_interval_seconds
            self._next_call = self._num_calls + self._print_interval_moves
            print(f"After {self._num_calls - 1} move(s), optimum is f({x}, {y}) = {value}")


class ProgressLogger:
    """Logger to register as callback in a search, for logging
    the current optimum regularly.

    Parameters
    ----------
    logger:
        given logger that callback will use to log
    log_level:
        log level that logger will write to
    log_interval_moves: int
        max number of calls before performing another log
    """

    def __init__(
        self, *, logger: logging.Logger = global_logger, log_level: int = logging.INFO, log_interval_moves: int = 1
    ) -> None:
        assert log_interval_moves > 0
        self._logger = logger
        self._log_level = log_level
        self._log_interval_moves = int(log_interval_moves)
        self._num_calls = 0
        self._next_call = 1

    def __call__(self, x: int, y: int, value: float) -> None:
        self._num_calls += 1
        if self._num_calls >= self._next_call:
            self._next_call = self._num_calls + self._log_interval_moves
            self._logger.log(
                self._log_level, "After %s move(s), optimum is f(%s, %s) = %s", self._num_calls - 1, x, y, value
            )


class MovesLogger:
    """Dumps each new optimum of a search as a json line into a file.

    Parameters
    ----------
    filepath: str or pathlib.Path
        the path to dump data to
    append: bool
        whether to append the file (otherwise it replaces it)

    Example
    -------

    .. code-block:: python

        logger = MovesLogger(filepath)
        search.register_callback(logger)
        search.minimize(objective, 0, 0, 8, 8)
        list_of_dict_of_data = logger.load()
    """

    def __init__(self, filepath: tp.PathLike, append: bool = True) -> None:
        self._session = datetime.datetime.now().strftime("%y-%m-%d %H:%M:%S")
        self._filepath = Path(filepath)
        self._num_calls = 0
        if self._filepath.exists() and not append:
            self._filepath.unlink()
        self._filepath.parent.mkdir(exist_ok=True, parents=True)

    def __call__(self, x: int, y: int, value: float) -> None:
        data = {"#session": self._session, "#call": self._num_calls, "x": x, "y": y, "value": value}
        self._num_calls += 1
        try:  # avoid bugging as much as possible
            with self._filepath.open("a") as f:
                f.write(json.dumps(data) + "\n")
        except Exception as e:  # pylint: disable=broad-except
            warnings.warn(f"Failing to json data: {e}")

    def load(self) -> tp.List[tp.Dict[str, tp.Any]]:
        """Loads data from the log file"""
        data: tp.List[tp.Dict[str, tp.Any]] = []
        if self._filepath.exists():
            with self._filepath.open("r") as f:
                for line in f.readlines():
                    data.append(json.loads(line))
        return data
