"""Tests for settings persistence."""

from __future__ import annotations

from pathlib import Path

import pytest

from logalyzer.config import (
    dict_to_settings,
    get_config_dir,
    get_config_path,
    load_config,
    load_settings,
    save_config,
    save_settings,
    settings_to_dict,
)
from logalyzer.models import FontId, GroupColoring, LogFormat, TokenColor, UserSettings
from logalyzer.presets import PresetName, get_preset


class TestConfigDir:
    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOGALYZER_CONFIG_DIR", str(tmp_path / "custom"))
        assert get_config_dir() == tmp_path / "custom"
        assert get_config_path() == tmp_path / "custom" / "config.toml"


class TestSaveLoad:
    def test_roundtrip(self, tmp_path: Path) -> None:
        settings = UserSettings(
            search_term="kernel",
            search_whole_word=True,
            filter_term="error && failed",
            filter_extended=True,
            filter_negative=True,
            log_format=get_preset(PresetName.DMESG),
            token_colors=[TokenColor(token="boot", color="#800000")],
            font=FontId(family="monospace", size=14.0),
        )
        path = save_settings(settings, tmp_path / "nested" / "settings.toml")
        assert path.exists()
        assert load_settings(path) == settings

    def test_transparent_background_survives(self, tmp_path: Path) -> None:
        settings = UserSettings(log_format=LogFormat(pattern="(.*)", pattern_coloring=[GroupColoring(background=None)]))
        path = save_settings(settings, tmp_path / "settings.toml")
        assert load_settings(path).log_format.pattern_coloring[0].background is None

    def test_file_path_not_stored(self, tmp_path: Path) -> None:
        path = save_settings(UserSettings(file_path="/var/log/syslog"), tmp_path / "settings.toml")
        assert load_settings(path).file_path == ""
        assert "syslog" not in path.read_text()

    def test_missing_keys_use_defaults(self) -> None:
        settings = dict_to_settings({"settings": {"search_term": "x", "unknown": 1}})
        assert settings == UserSettings(search_term="x")

    def test_invalid_values(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.toml"
        path.write_text('[font]\nsize = "big"\n')
        with pytest.raises(ValueError, match="Invalid settings"):
            load_settings(path)

    def test_dict_shape(self) -> None:
        data = settings_to_dict(UserSettings())
        assert set(data) == {"settings", "font", "log_format", "token_colors"}
        assert len(data["token_colors"]) == 25


class TestLoadConfig:
    def test_defaults_when_missing(self) -> None:
        assert load_config() == UserSettings()

    def test_defaults_when_malformed(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.toml"
        path.write_text("this is = not [toml")
        assert load_config(path) == UserSettings()

    def test_save_to_default_location(self) -> None:
        path = save_config(UserSettings(search_term="x"))
        assert path == get_config_path()
        assert load_config().search_term == "x"
