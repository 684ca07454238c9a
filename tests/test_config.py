"""Tests for configuration persistence."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from pathtree.config import ConfigManager, TreeConfig
from pathtree.errors import UnsupportedOption
from pathtree.paths import NATIVE, POSIX, WINDOWS


@pytest.fixture
def manager(tmp_path: Path) -> ConfigManager:
    """Create a config manager in a temp directory."""
    return ConfigManager.create(tmp_path / "config")


class TestTreeConfig:
    """Tests for TreeConfig model."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = TreeConfig()
        assert config.default_mode is None
        assert config.default_mode_value() is None
        assert config.syntax() is NATIVE

    def test_mode_value(self) -> None:
        """Test the octal mode is parsed."""
        assert TreeConfig(default_mode="750").default_mode_value() == 0o750

    @pytest.mark.parametrize("mode", ["abc", "1000", "89"])
    def test_invalid_mode(self, mode: str) -> None:
        """Test non-octal or out-of-range modes are rejected."""
        with pytest.raises(ValidationError):
            TreeConfig(default_mode=mode)

    def test_separator_selects_syntax(self) -> None:
        """Test each separator maps to its syntax."""
        assert TreeConfig(separator="posix").syntax() is POSIX
        assert TreeConfig(separator="windows").syntax() is WINDOWS

    def test_alias(self) -> None:
        """Test the camelCase alias on disk."""
        config = TreeConfig.model_validate({"defaultMode": "700"})
        assert config.default_mode == "700"


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_load_without_file(self, manager: ConfigManager) -> None:
        """Test defaults when nothing has been saved."""
        assert manager.load() == TreeConfig()

    def test_save_and_load(self, manager: ConfigManager) -> None:
        """Test a saved configuration is read back."""
        manager.save(TreeConfig(default_mode="700", separator="posix"))

        data = json.loads(manager.config_file.read_text())
        assert data["defaultMode"] == "700"
        assert manager.load().separator == "posix"

    def test_set_value(self, manager: ConfigManager) -> None:
        """Test setting one key keeps the others."""
        manager.set_value("separator", "windows")
        updated = manager.set_value("default-mode", "711")

        assert updated.separator == "windows"
        assert manager.load().default_mode == "711"

    def test_set_unknown_key(self, manager: ConfigManager) -> None:
        """Test unknown keys are rejected."""
        with pytest.raises(UnsupportedOption):
            manager.set_value("colour", "blue")

    def test_set_invalid_value(self, manager: ConfigManager) -> None:
        """Test invalid values are rejected and nothing is saved."""
        with pytest.raises(ValueError):
            manager.set_value("separator", "colon")
        assert not manager.config_file.exists()

    def test_default_directory(self) -> None:
        """Test the default location."""
        manager = ConfigManager.create_default()
        assert manager.config_dir == Path.home() / ".pathtree"
