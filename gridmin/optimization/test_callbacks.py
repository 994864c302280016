# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import logging
from pathlib import Path
import gridmin.common.typing as tp
from gridmin.functions import corefuncs
from . import optimizerlib
from . import callbacks


def test_moves_logger(tmp_path: Path) -> None:
    filepath = tmp_path / "subfolder" / "moves.txt"
    search = optimizerlib.SquareSearch(2)
    search.register_callback(callbacks.MovesLogger(filepath, append=False))
    result = search.minimize(corefuncs.paraboloid, 0, 0, 2, 2)
    logs = callbacks.MovesLogger(filepath).load()
    assert [d["#call"] for d in logs] == list(range(len(logs)))
    assert (logs[0]["x"], logs[0]["y"]) == (0, 0)
    assert (logs[-1]["x"], logs[-1]["y"], logs[-1]["value"]) == tuple(result[:3])
    values = [d["value"] for d in logs]
    assert values == sorted(values, reverse=True)
    # not appending removes previous data
    logger = callbacks.MovesLogger(filepath, append=False)
    assert not logger.load()
    search.minimize(corefuncs.paraboloid, 0, 0, 2, 2, callback=logger)
    assert len(logger.load()) == 2 * len(logs)  # registered logger and explicit one write the same file


def test_progress_printer(capsys: tp.Any) -> None:
    search = optimizerlib.TriangularSearch(1)
    search.register_callback(callbacks.ProgressPrinter(print_interval_moves=2))
    search.minimize(corefuncs.paraboloid, 0, 0, 2, 2)
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("After 0 move(s), optimum is f(0, 0) = 30.2")
    assert out[1].startswith("After 2 move(s), optimum is f(2, 4) = ")
    assert len(out) == 2  # 3 moves: printing after move 0 and 2


def test_progress_logger(caplog: tp.Any) -> None:
    logger = logging.getLogger(__name__)
    search = optimizerlib.SquareSearch(1)
    search.register_callback(callbacks.ProgressLogger(logger=logger, log_level=logging.INFO))
    with caplog.at_level(logging.INFO):
        search.minimize(corefuncs.paraboloid, 0, 0, 2, 2)
    assert "After 0 move(s), optimum is f(0, 0) = 30.2" in caplog.text
    assert "After 4 move(s), optimum is f(4, 4) = " in caplog.text
