"""Tests for GameConfig validation and the JSON save file."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from geocoin.config import GameConfig
from geocoin.core.errors import ConfigError, CorruptSnapshotError
from geocoin.core.session import GameSession
from geocoin.utils.persistence import SaveFile


class TestGameConfig:
    def test_defaults(self) -> None:
        cfg = GameConfig()
        assert cfg.tile_degrees == 1e-4
        assert cfg.spawn_tag == "spawn"
        assert cfg.value_tag == "initialValue"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"tile_degrees": 0.0},
            {"tile_degrees": -1.0},
            {"neighborhood_radius": -1},
            {"spawn_probability": 1.5},
            {"spawn_probability": -0.1},
            {"max_initial_tokens": -3},
            {"spawn_tag": ""},
            {"spawn_tag": "same", "value_tag": "same"},
        ],
    )
    def test_invalid_values_refused(self, overrides: dict) -> None:
        with pytest.raises(ConfigError):
            GameConfig(**overrides)

    def test_with_overrides_validates(self) -> None:
        cfg = GameConfig()
        assert cfg.with_overrides(neighborhood_radius=2).neighborhood_radius == 2
        with pytest.raises(ConfigError):
            cfg.with_overrides(tile_degrees=0)

    def test_config_error_names_parameter(self) -> None:
        with pytest.raises(ConfigError) as info:
            GameConfig(neighborhood_radius=-4)
        assert info.value.param_name == "neighborhood_radius"
        assert "neighborhood_radius" in str(info.value)


class TestSaveFile:
    def test_missing_file_loads_none(self, tmp_path: Path) -> None:
        assert SaveFile(tmp_path / "none.json").load() is None

    def test_save_then_load(self, tmp_path: Path, config: GameConfig) -> None:
        session = GameSession(config)
        session.nearby_caches()
        save = SaveFile(tmp_path / "nested" / "save.json", key="slot")
        save.save(session.export_state())

        raw = json.loads(save.path.read_text(encoding="utf-8"))
        assert list(raw) == ["slot"]
        assert save.load() == session.export_state()
        assert not (tmp_path / "nested" / "save.json.tmp").exists()

    def test_other_keys_preserved(self, tmp_path: Path) -> None:
        path = tmp_path / "save.json"
        path.write_text(json.dumps({"other": {"keep": True}}), encoding="utf-8")
        save = SaveFile(path, key="geocoin")
        save.save({"version": 1})
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["other"] == {"keep": True}
        save.clear()
        assert json.loads(path.read_text(encoding="utf-8")) == {"other": {"keep": True}}

    def test_clear_removes_file_when_empty(self, tmp_path: Path) -> None:
        save = SaveFile(tmp_path / "save.json")
        save.save({"version": 1})
        save.clear()
        assert not save.exists()
        save.clear()

    @pytest.mark.parametrize("content", ["{not json", "[1, 2]", '{"geocoin": 5}'])
    def test_corrupt_file(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "save.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(CorruptSnapshotError):
            SaveFile(path).load()

    def test_save_overwrites_unreadable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "save.json"
        path.write_text("{not json", encoding="utf-8")
        save = SaveFile(path)
        save.save({"version": 1})
        assert save.load() == {"version": 1}
