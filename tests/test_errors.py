"""Tests for error kinds."""

from __future__ import annotations

import errno

import pytest

from pathtree.errors import (
    AlreadyExists,
    IsADirectory,
    NotADirectory,
    NotFound,
    PathTreeError,
    PermissionDenied,
    RemoveFailed,
    translate_os_error,
)


class TestTranslateOsError:
    """Tests for translate_os_error."""

    @pytest.mark.parametrize(
        ("code", "kind"),
        [
            (errno.ENOENT, NotFound),
            (errno.EEXIST, AlreadyExists),
            (errno.ENOTDIR, NotADirectory),
            (errno.EISDIR, IsADirectory),
            (errno.EACCES, PermissionDenied),
            (errno.EPERM, PermissionDenied),
        ],
    )
    def test_known_errno(self, code: int, kind: type[PathTreeError]) -> None:
        """Test each errno maps onto its kind."""
        error = translate_os_error(OSError(code, "boom"), "/x")
        assert type(error) is kind
        assert error.path == "/x"
        assert str(error) == "boom: /x"

    def test_unknown_errno(self) -> None:
        """Test unmapped errors fall back to the base class."""
        error = translate_os_error(OSError(errno.ENOSPC, "No space left on device"), "/x")
        assert type(error) is PathTreeError

    def test_no_errno(self) -> None:
        """Test errors without an errno keep their message."""
        error = translate_os_error(OSError("odd failure"), "/x")
        assert type(error) is PathTreeError
        assert "odd failure" in str(error)


class TestHierarchy:
    """Tests for the error hierarchy."""

    def test_all_kinds_share_base(self) -> None:
        """Test every kind can be caught as PathTreeError."""
        with pytest.raises(PathTreeError):
            raise RemoveFailed("failed", path="/x")
