"""Shared test fixtures."""

from __future__ import annotations

import errno
import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from pathtree.config import ConfigManager
from pathtree.context import TreeContext
from pathtree.environment import RealEnvironment
from pathtree.filesystem import RealFileSystem
from pathtree.permissions import Permissions


class FailingFileSystem(RealFileSystem):
    """RealFileSystem that refuses to delete or copy selected entries."""

    def __init__(self, fail_delete: set[str] | None = None, fail_copy: set[str] | None = None):
        self.fail_delete = fail_delete or set()
        self.fail_copy = fail_copy or set()

    def delete_entry(self, path: str) -> None:
        if os.path.basename(path) in self.fail_delete:
            raise PermissionError(errno.EACCES, "Permission denied", path)
        super().delete_entry(path)

    def copy_bytes(self, source: str, target: str) -> None:
        if os.path.basename(source) in self.fail_copy:
            raise PermissionError(errno.EACCES, "Permission denied", source)
        super().copy_bytes(source, target)


class FixedEnvironment(RealEnvironment):
    """Environment with a fixed working directory and umask."""

    def __init__(self, cwd: str, umask: int | None = 0o022) -> None:
        self._cwd = cwd if cwd.endswith(os.sep) else cwd + os.sep
        self._umask = umask

    def working_directory(self) -> str:
        return self._cwd

    def umask(self) -> int | None:
        return self._umask


def make_context(tmp_path: Path, filesystem: RealFileSystem | None = None) -> TreeContext:
    """Build a context rooted at tmp_path."""
    filesystem = filesystem or RealFileSystem()
    return TreeContext(
        metadata_provider=filesystem,
        mutation_provider=filesystem,
        environment=FixedEnvironment(str(tmp_path)),
        default_permissions=Permissions.from_mode(0o755),
        config_manager=ConfigManager(config_dir=tmp_path / ".pathtree"),
    )


@pytest.fixture
def context(tmp_path: Path) -> TreeContext:
    """Context backed by the real filesystem under tmp_path."""
    return make_context(tmp_path)


@pytest.fixture
def cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test inside tmp_path."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a tree with files a and b/c plus a directory symlink d -> b.

    Layout::

        root/
          a
          b/
            c
          d -> b
    """
    root = tmp_path / "root"
    (root / "b").mkdir(parents=True)
    (root / "a").write_text("a")
    (root / "b" / "c").write_text("c")
    (root / "d").symlink_to("b", target_is_directory=True)
    return root


@pytest.fixture
def mock_context() -> MagicMock:
    """Create a complete mock TreeContext for CLI testing."""
    ctx = MagicMock(spec=TreeContext)
    ctx.metadata = MagicMock()
    ctx.walker = MagicMock()
    ctx.mutator = MagicMock()
    ctx.config_manager = MagicMock()
    return ctx


@pytest.fixture
def failing_context(tmp_path: Path):
    """Factory for contexts whose filesystem fails on selected entry names."""

    def factory(
        fail_delete: set[str] | None = None, fail_copy: set[str] | None = None
    ) -> TreeContext:
        return make_context(tmp_path, FailingFileSystem(fail_delete, fail_copy))

    return factory


@pytest.fixture
def environment_factory():
    """Factory for environments with a fixed working directory and umask."""
    return FixedEnvironment
