"""Persistent configuration for pathtree."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pathtree.errors import UnsupportedOption
from pathtree.paths import NATIVE, POSIX, WINDOWS, PathSyntax

# Default configuration location
CONFIG_DIR = Path.home() / ".pathtree"

# CLI key -> model field
CONFIG_KEYS = {
    "default-mode": "default_mode",
    "separator": "separator",
}

_SYNTAXES = {"native": NATIVE, "posix": POSIX, "windows": WINDOWS}


class TreeConfig(BaseModel):
    """User configuration."""

    model_config = ConfigDict(populate_by_name=True)

    version: str = "1.0"
    default_mode: str | None = Field(default=None, alias="defaultMode")
    separator: Literal["native", "posix", "windows"] = "native"

    @field_validator("default_mode")
    @classmethod
    def _check_mode(cls, value: str | None) -> str | None:
        if value is None:
            return value
        try:
            mode = int(value, 8)
        except ValueError as e:
            raise ValueError(f"default-mode must be an octal number, got {value!r}") from e
        if not 0 <= mode <= 0o777:
            raise ValueError(f"default-mode must be between 000 and 777, got {value!r}")
        return value

    def default_mode_value(self) -> int | None:
        """Return the configured default mode as an int, if set."""
        return None if self.default_mode is None else int(self.default_mode, 8)

    def syntax(self) -> PathSyntax:
        """Return the path syntax selected by the separator setting."""
        return _SYNTAXES[self.separator]


class ConfigManager:
    """Loads and saves the configuration file."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize the config manager.

        Args:
            config_dir: Directory for the config file. Defaults to ~/.pathtree.

        Note:
            Prefer using factory methods `create()` or `create_default()` for construction.
        """
        self.config_dir = config_dir or CONFIG_DIR
        self.config_file = self.config_dir / "config.json"

    @classmethod
    def create(cls, config_dir: Path) -> ConfigManager:
        """Create a config manager with a custom directory."""
        return cls(config_dir=config_dir)

    @classmethod
    def create_default(cls) -> ConfigManager:
        """Create a config manager using ~/.pathtree."""
        return cls()

    def load(self) -> TreeConfig:
        """Load configuration from disk, or defaults if there is no file."""
        if not self.config_file.exists():
            return TreeConfig()

        data = json.loads(self.config_file.read_text())
        return TreeConfig.model_validate(data)

    def save(self, config: TreeConfig) -> None:
        """Save configuration to disk."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        data = config.model_dump(by_alias=True, exclude_none=True)
        self.config_file.write_text(json.dumps(data, indent=2))

    def set_value(self, key: str, value: str) -> TreeConfig:
        """Set one configuration value and save.

        Args:
            key: CLI key, e.g. ``default-mode``.
            value: New value as text.

        Returns:
            The updated configuration.

        Raises:
            UnsupportedOption: If key is not a known configuration key.
            ValueError: If value is invalid for key.
        """
        if key not in CONFIG_KEYS:
            raise UnsupportedOption(f"Unknown configuration key: {key}")
        config = self.load()
        data = config.model_dump()
        data[CONFIG_KEYS[key]] = value
        updated = TreeConfig.model_validate(data)
        self.save(updated)
        return updated
