"""Error kinds raised by tree operations.

Path algebra never raises these; it degrades to a best-effort syntactic
result instead. Metadata, walker and mutator layers translate collaborator
``OSError``s into the kinds below and chain the original exception.
"""

from __future__ import annotations

import errno

__all__ = [
    "AlreadyExists",
    "CopyFailed",
    "CreateFailed",
    "InvalidPath",
    "IsADirectory",
    "NotADirectory",
    "NotFound",
    "PathTreeError",
    "PermissionDenied",
    "RemoveFailed",
    "UnsupportedOption",
    "translate_os_error",
]


class PathTreeError(Exception):
    """Base class for all filesystem tree errors."""

    def __init__(self, message: str, path: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable description.
            path: Path the failing operation was working on, if any.
        """
        super().__init__(message)
        self.path = path


class InvalidPath(PathTreeError):
    """Malformed or missing path argument."""

    pass


class NotFound(PathTreeError):
    """Entry does not exist."""

    pass


class AlreadyExists(PathTreeError):
    """Entry already exists."""

    pass


class NotADirectory(PathTreeError):
    """A directory was required but the entry is something else."""

    pass


class IsADirectory(PathTreeError):
    """A non-directory was required but the entry is a directory."""

    pass


class PermissionDenied(PathTreeError):
    """Insufficient access rights."""

    pass


class CreateFailed(PathTreeError):
    """Directory or tree creation failed."""

    pass


class RemoveFailed(PathTreeError):
    """Removal of an entry failed."""

    pass


class CopyFailed(PathTreeError):
    """Copying an entry failed."""

    pass


class UnsupportedOption(PathTreeError):
    """An unrecognized option or configuration key was supplied."""

    pass


_ERRNO_KINDS: dict[int, type[PathTreeError]] = {
    errno.ENOENT: NotFound,
    errno.EEXIST: AlreadyExists,
    errno.ENOTDIR: NotADirectory,
    errno.EISDIR: IsADirectory,
    errno.EACCES: PermissionDenied,
    errno.EPERM: PermissionDenied,
}


def translate_os_error(exc: OSError, path: str) -> PathTreeError:
    """Map an ``OSError`` onto the matching error kind.

    Args:
        exc: Error raised by a collaborator.
        path: Path involved in the failing call.

    Returns:
        A new (unraised) error instance; callers raise it ``from exc``.
    """
    kind = _ERRNO_KINDS.get(exc.errno or 0, PathTreeError)
    reason = exc.strerror or str(exc)
    return kind(f"{reason}: {path}", path=path)
