"""Tests for the command-line entry point."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from geocoin.__main__ import _parse_path, main
from geocoin.core.enums import Direction
from geocoin.utils.persistence import SaveFile


class TestPathArgument:
    def test_parses_steps(self) -> None:
        assert _parse_path("NnE s") == [Direction.NORTH, Direction.NORTH, Direction.EAST, Direction.SOUTH]

    def test_rejects_unknown_step(self) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            _parse_path("NX")

    def test_bad_path_exits_with_usage_error(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as info:
            main(["walk", "--path", "NX", "--save", str(tmp_path / "save.json")])
        assert info.value.code == 2
        assert "Unknown direction" in capsys.readouterr().err
        assert not (tmp_path / "save.json").exists()


def test_walk_saves_game(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "save.json"
    main(["walk", "--path", "NE", "--seed", "cli-test", "--radius", "2", "--fresh", "--save", str(path)])
    state = SaveFile(path).load()
    assert state is not None
    assert state["seed"] == "cli-test"
    assert "holding" in capsys.readouterr().out
