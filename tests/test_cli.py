"""Tests for CLI commands using context injection.

Commands accept a _context parameter, so they can be exercised against a
real filesystem under tmp_path or against a mock without patching imports.
"""

from __future__ import annotations

import io
import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import typer
from rich.console import Console

from pathtree import cli
from pathtree.context import TreeContext, create_context
from pathtree.display import Display
from pathtree.errors import RemoveFailed, UnsupportedOption
from pathtree.permissions import Permissions


@pytest.fixture
def output(monkeypatch: pytest.MonkeyPatch) -> io.StringIO:
    """Capture CLI output in a wide, colourless console."""
    buffer = io.StringIO()
    monkeypatch.setattr(
        cli, "display", Display(Console(file=buffer, width=400, color_system=None))
    )
    return buffer


class TestPathCommands:
    """Tests for path algebra commands."""

    def test_resolve(self, context: TreeContext, output: io.StringIO) -> None:
        """Test resolving several paths."""
        cli.resolve(paths=["/a/b", "../c"], _context=context)
        assert output.getvalue().strip() == os.sep + "c"

    def test_relative(self, context: TreeContext, output: io.StringIO) -> None:
        """Test the relative command uses the context working directory."""
        target = context.working_directory() + os.path.join("x", "y")
        cli.relative(source=target, target=None, _context=context)
        assert output.getvalue().strip() == os.path.join("x", "y")


class TestTreeCommands:
    """Tests for tree commands."""

    def test_tree_flat(
        self, context: TreeContext, sample_tree: Path, output: io.StringIO
    ) -> None:
        """Test the flat listing prints one path per line."""
        cli.tree(path=str(sample_tree), dirs=False, flat=True, _context=context)
        assert output.getvalue().splitlines() == ["", "a", "b", "b/c", "d"]

    def test_tree_flat_dirs(
        self, context: TreeContext, sample_tree: Path, output: io.StringIO
    ) -> None:
        """Test the flat directory listing."""
        cli.tree(path=str(sample_tree), dirs=True, flat=True, _context=context)
        assert output.getvalue().splitlines() == ["", "b", "d"]

    def test_tree_rendered(
        self, context: TreeContext, sample_tree: Path, output: io.StringIO
    ) -> None:
        """Test the rendered tree marks the directory link."""
        cli.tree(path=str(sample_tree), dirs=False, flat=False, _context=context)
        text = output.getvalue()
        assert "b" in text
        assert "c" in text
        assert "d (link)" in text

    def test_tree_missing(
        self, context: TreeContext, tmp_path: Path, output: io.StringIO
    ) -> None:
        """Test listing a missing directory exits with an error."""
        with pytest.raises(typer.Exit) as excinfo:
            cli.tree(path=str(tmp_path / "missing"), dirs=False, flat=True, _context=context)
        assert excinfo.value.exit_code == 1
        assert "Cannot list" in output.getvalue()

    def test_mkdir(self, context: TreeContext, tmp_path: Path, output: io.StringIO) -> None:
        """Test creating nested directories."""
        cli.mkdir(path=str(tmp_path / "p" / "q"), _context=context)
        assert (tmp_path / "p" / "q").is_dir()
        assert "Created" in output.getvalue()

    def test_mkdir_bracketed_name(
        self, context: TreeContext, tmp_path: Path, output: io.StringIO
    ) -> None:
        """Test paths that look like markup are printed literally."""
        target = tmp_path / "[" / "x]"
        cli.mkdir(path=str(target), _context=context)
        assert target.is_dir()
        assert f"Created {target}" in output.getvalue()

    def test_tree_markup_like_names(
        self, context: TreeContext, tmp_path: Path, output: io.StringIO
    ) -> None:
        """Test entry names are not interpreted as markup."""
        root = tmp_path / "root"
        root.mkdir()
        (root / "[red]x").touch()
        (root / "[b]").mkdir()
        cli.tree(path=str(root), dirs=False, flat=False, _context=context)
        text = output.getvalue()
        assert "[red]x" in text
        assert "[b]" in text

    def test_copy(
        self, context: TreeContext, sample_tree: Path, tmp_path: Path, output: io.StringIO
    ) -> None:
        """Test copying a tree."""
        cli.copy(source=str(sample_tree), target=str(tmp_path / "copy"), _context=context)
        assert (tmp_path / "copy" / "b" / "c").read_text() == "c"
        assert (tmp_path / "copy" / "d").is_symlink()

    def test_remove(self, context: TreeContext, sample_tree: Path, output: io.StringIO) -> None:
        """Test removing a tree."""
        cli.remove(path=str(sample_tree), _context=context)
        assert not sample_tree.exists()
        assert "Removed" in output.getvalue()

    def test_remove_failure_reports_partial(
        self, mock_context: MagicMock, output: io.StringIO
    ) -> None:
        """Test a failed removal warns that the tree may be partial."""
        mock_context.mutator.remove_tree.side_effect = RemoveFailed("denied", path="x/c")

        with pytest.raises(typer.Exit) as excinfo:
            cli.remove(path="x", _context=mock_context)

        assert excinfo.value.exit_code == 1
        assert "partially removed" in output.getvalue()


class TestPermissionCommands:
    """Tests for permission commands."""

    def test_chmod(self, context: TreeContext, tmp_path: Path, output: io.StringIO) -> None:
        """Test setting permission bits."""
        target = tmp_path / "file"
        target.touch()
        cli.chmod(path=str(target), mode="640", _context=context)
        assert context.metadata.permissions(str(target)).to_number() == 0o640
        assert "rw-r-----" in output.getvalue()

    @pytest.mark.parametrize("mode", ["999", "1777", "rwx"])
    def test_chmod_invalid_mode(
        self, mock_context: MagicMock, output: io.StringIO, mode: str
    ) -> None:
        """Test invalid modes are rejected before touching the filesystem."""
        with pytest.raises(typer.Exit) as excinfo:
            cli.chmod(path="x", mode=mode, _context=mock_context)
        assert excinfo.value.exit_code == 1
        mock_context.mutator.change_permissions.assert_not_called()

    def test_perms(self, mock_context: MagicMock, output: io.StringIO) -> None:
        """Test showing permissions."""
        mock_context.metadata.permissions.return_value = Permissions.from_mode(0o750)
        cli.perms(path="x", _context=mock_context)
        assert "rwxr-x---" in output.getvalue()
        assert "750" in output.getvalue()


class TestConfigCommands:
    """Tests for config commands."""

    def test_config_show(self, context: TreeContext, output: io.StringIO) -> None:
        """Test showing the effective configuration."""
        cli.config_show(_context=context)
        text = output.getvalue()
        assert "Separator: native" in text
        assert "Default mode: 755 (from umask)" in text

    def test_config_set(self, context: TreeContext, output: io.StringIO) -> None:
        """Test setting a value persists it."""
        cli.config_set(key="default-mode", value="700", _context=context)
        assert context.config_manager.load().default_mode == "700"

    def test_config_set_unknown_key(self, mock_context: MagicMock, output: io.StringIO) -> None:
        """Test unknown keys exit with an error."""
        mock_context.config_manager.set_value.side_effect = UnsupportedOption("Unknown key")
        with pytest.raises(typer.Exit) as excinfo:
            cli.config_set(key="colour", value="blue", _context=mock_context)
        assert excinfo.value.exit_code == 1

    def test_config_set_invalid_value(self, context: TreeContext, output: io.StringIO) -> None:
        """Test invalid values exit with an error."""
        with pytest.raises(typer.Exit) as excinfo:
            cli.config_set(key="separator", value="colon", _context=context)
        assert excinfo.value.exit_code == 1
        assert "Invalid value for separator" in output.getvalue()


class TestVersion:
    """Tests for the version option."""

    def test_version_callback(self) -> None:
        """Test the version flag exits."""
        with pytest.raises(typer.Exit):
            cli.version_callback(True)

    def test_version_callback_noop(self) -> None:
        """Test nothing happens without the flag."""
        cli.version_callback(False)


class TestContextLoading:
    """Tests for building the production context."""

    def test_malformed_config(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, output: io.StringIO
    ) -> None:
        """Test an unreadable config file exits with an error."""
        (tmp_path / "config.json").write_text("{not json")
        monkeypatch.setattr(cli, "create_context", lambda: create_context(config_dir=tmp_path))

        with pytest.raises(typer.Exit) as excinfo:
            cli.resolve(paths=["a"])

        assert excinfo.value.exit_code == 1
        assert "Cannot read configuration" in output.getvalue()

    def test_invalid_config_value(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, output: io.StringIO
    ) -> None:
        """Test a config file failing validation exits with an error."""
        (tmp_path / "config.json").write_text('{"separator": "colon"}')
        monkeypatch.setattr(cli, "create_context", lambda: create_context(config_dir=tmp_path))

        with pytest.raises(typer.Exit) as excinfo:
            cli.tree(path=".", dirs=False, flat=True)

        assert excinfo.value.exit_code == 1

    def test_separator_setting_applies_to_algebra(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, output: io.StringIO
    ) -> None:
        """Test resolve uses the configured separator."""
        (tmp_path / "config.json").write_text('{"separator": "windows"}')
        monkeypatch.setattr(cli, "create_context", lambda: create_context(config_dir=tmp_path))

        cli.resolve(paths=["a/b", "c"])

        assert output.getvalue().strip() == "a\\c"
