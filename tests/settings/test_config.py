"""Tests for the persisted Play Instant build configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from playinstant.commands.settings.config import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATH,
    PLAY_INSTANT_SYMBOL,
    BuildConfiguration,
    ConfigError,
    format_define_symbols,
    load_config,
    parse_define_symbols,
    resolve_config_path,
    save_config,
)


class TestInstantUrl:
    def test_per_package(self) -> None:
        config = BuildConfiguration()
        config.set_instant_url("com.example.a", "https://a.example.com/")
        config.set_instant_url("com.example.b", "https://b.example.com/")

        assert config.get_instant_url("com.example.a") == "https://a.example.com/"
        assert config.get_instant_url("com.example.b") == "https://b.example.com/"
        assert config.get_instant_url("com.example.c") == ""

    def test_unknown_package_fallback(self) -> None:
        config = BuildConfiguration()
        config.set_instant_url(None, "https://example.com/")
        assert config.instant_urls == {"unknown": "https://example.com/"}
        assert config.get_instant_url() == "https://example.com/"

    def test_empty_value_deletes(self) -> None:
        config = BuildConfiguration(instant_urls={"com.example": "https://example.com/"})
        config.set_instant_url("com.example", "")
        assert config.instant_urls == {}


class TestDefineSymbols:
    def test_define_is_idempotent(self) -> None:
        config = BuildConfiguration(scripting_define_symbols=["FOO"])
        config.define_play_instant()
        config.define_play_instant()
        assert config.scripting_define_symbols == ["FOO", PLAY_INSTANT_SYMBOL]
        assert config.is_play_instant_defined()

    def test_undefine_keeps_other_symbols_in_order(self) -> None:
        config = BuildConfiguration(
            scripting_define_symbols=["A", PLAY_INSTANT_SYMBOL, "B", PLAY_INSTANT_SYMBOL]
        )
        config.undefine_play_instant()
        assert config.scripting_define_symbols == ["A", "B"]
        assert not config.is_play_instant_defined()

    def test_parse(self) -> None:
        assert parse_define_symbols("A; B,C  D") == ["A", "B", "C", "D"]

    def test_parse_empty(self) -> None:
        assert parse_define_symbols("") == []
        assert parse_define_symbols(None) == []

    def test_format(self) -> None:
        assert format_define_symbols(["A", "B"]) == "A;B"


class TestConfigFile:
    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path / "missing.json")
        assert config == BuildConfiguration()

    def test_save_and_load(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "config.json"
        config = BuildConfiguration()
        config.define_play_instant()
        config.set_instant_url("com.example", "https://example.com/")

        save_config(config, path)

        assert load_config(path) == config

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid configuration file"):
            load_config(path)

    def test_invalid_schema(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text('{"scripting_define_symbols": "PLAY_INSTANT"}')
        with pytest.raises(ConfigError):
            load_config(path)


class TestResolveConfigPath:
    def test_explicit_path_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, "/from/env.json")
        assert resolve_config_path("custom.json") == Path("custom.json")

    def test_environment_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, "/from/env.json")
        assert resolve_config_path() == Path("/from/env.json")

    def test_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert resolve_config_path() == DEFAULT_CONFIG_PATH
