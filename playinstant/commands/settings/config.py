"""Persisted Play Instant build configuration (.playinstant.json)."""

from __future__ import annotations

import json
import os
import re
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

PLAY_INSTANT_SYMBOL = "PLAY_INSTANT"

CONFIG_ENV_VAR = "PLAYINSTANT_CONFIG"
DEFAULT_CONFIG_PATH = Path(".playinstant.json")

# Package key used when no application identifier is known.
UNKNOWN_PACKAGE = "unknown"

_SYMBOL_SEPARATORS = re.compile(r"[;, ]")


class ConfigError(Exception):
    """Raised when the configuration file cannot be read."""


class BuildConfiguration(BaseModel):
    instant_urls: dict[str, str] = Field(default_factory=lambda: dict[str, str]())
    scripting_define_symbols: list[str] = Field(default_factory=lambda: list[str]())

    def get_instant_url(self, package: str | None = None) -> str:
        return self.instant_urls.get(package or UNKNOWN_PACKAGE, "")

    def set_instant_url(self, package: str | None, value: str | None) -> None:
        """Store the default URL for a package; an empty value deletes it."""
        key = package or UNKNOWN_PACKAGE
        if value:
            self.instant_urls[key] = value
        else:
            self.instant_urls.pop(key, None)

    def is_play_instant_defined(self) -> bool:
        return PLAY_INSTANT_SYMBOL in self.scripting_define_symbols

    def define_play_instant(self) -> None:
        if not self.is_play_instant_defined():
            self.scripting_define_symbols.append(PLAY_INSTANT_SYMBOL)

    def undefine_play_instant(self) -> None:
        self.scripting_define_symbols = [
            s for s in self.scripting_define_symbols if s != PLAY_INSTANT_SYMBOL
        ]


def parse_define_symbols(text: str | None) -> list[str]:
    """Split a scripting define string on ';', ',' or spaces."""
    if not text:
        return []
    return [s for s in _SYMBOL_SEPARATORS.split(text) if s]


def format_define_symbols(symbols: list[str]) -> str:
    return ";".join(symbols)


def resolve_config_path(path: str | Path | None = None) -> Path:
    """Explicit path, else $PLAYINSTANT_CONFIG, else ./.playinstant.json."""
    if path:
        return Path(path)
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env)
    return DEFAULT_CONFIG_PATH


def load_config(path: Path) -> BuildConfiguration:
    """Load the configuration, returning defaults if the file is absent.

    Raises:
        ConfigError: If the file is not valid JSON or does not match the schema.
    """
    if not path.exists():
        return BuildConfiguration()
    try:
        return BuildConfiguration.model_validate_json(path.read_text())
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration file {path}: {e}") from e


def save_config(config: BuildConfiguration, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.model_dump(), indent=2) + "\n")
