"""Protocol definitions for the filesystem collaborators.

Tree operations never call ``os`` directly; they go through these interfaces
so they can be tested against doubles and so the raw primitives stay in one
place. Implementations satisfy the protocols structurally.

Implementations signal failures by raising ``OSError``; the metadata, walker
and mutator layers translate those into ``pathtree.errors`` kinds.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from pathtree.types import StatResult


@runtime_checkable
class MetadataProvider(Protocol):
    """Protocol for read-only filesystem queries."""

    def exists(self, path: str) -> bool:
        """Check whether path exists (following symlinks)."""
        ...

    def is_file(self, path: str) -> bool:
        """Check whether path is a regular file (following symlinks)."""
        ...

    def is_directory(self, path: str) -> bool:
        """Check whether path is a directory (following symlinks)."""
        ...

    def is_link(self, path: str) -> bool:
        """Check whether path itself is a symbolic link."""
        ...

    def is_readable(self, path: str) -> bool:
        """Check whether the process may read path."""
        ...

    def is_writable(self, path: str) -> bool:
        """Check whether the process may write path."""
        ...

    def size(self, path: str) -> int:
        """Return the size of path in bytes."""
        ...

    def last_modified(self, path: str) -> datetime:
        """Return the modification time of path."""
        ...

    def stat(self, path: str) -> StatResult:
        """Return stat information for path (following symlinks)."""
        ...

    def list_children(self, path: str) -> list[str]:
        """Return the names of the entries in a directory.

        Names must be in lexical order; tree listings rely on it.

        Raises:
            OSError: If path cannot be listed.
        """
        ...

    def canonical(self, path: str) -> str:
        """Return the canonical absolute form of path with links resolved."""
        ...

    def user_name(self, uid: int) -> str | None:
        """Look up a user name, None if unknown."""
        ...

    def group_name(self, gid: int) -> str | None:
        """Look up a group name, None if unknown."""
        ...

    def user_id(self, name: str) -> int:
        """Look up a user id by name.

        Raises:
            KeyError: If the user is unknown.
        """
        ...

    def group_id(self, name: str) -> int:
        """Look up a group id by name.

        Raises:
            KeyError: If the group is unknown.
        """
        ...


@runtime_checkable
class MutationProvider(Protocol):
    """Protocol for single-entry filesystem changes."""

    def create_directory(self, path: str, mode: int) -> None:
        """Create one directory with the given permission bits."""
        ...

    def delete_entry(self, path: str) -> None:
        """Remove one file, symlink or empty directory."""
        ...

    def rename(self, source: str, target: str) -> None:
        """Rename source to target."""
        ...

    def create_symlink(self, target: str, link_path: str) -> None:
        """Create link_path as a symbolic link holding target verbatim."""
        ...

    def create_hardlink(self, source: str, link_path: str) -> None:
        """Create link_path as a hard link to source."""
        ...

    def read_symlink_target(self, path: str) -> str:
        """Return the target string stored in a symbolic link."""
        ...

    def copy_bytes(self, source: str, target: str) -> None:
        """Copy file contents from source to target, overwriting target."""
        ...

    def chmod(self, path: str, mode: int) -> None:
        """Set the mode bits of path."""
        ...

    def chown(self, path: str, uid: int, gid: int) -> None:
        """Set owner and group of path; -1 leaves a value unchanged."""
        ...

    def set_last_modified(self, path: str, timestamp: float) -> None:
        """Set access and modification time of path, creating it if missing."""
        ...


@runtime_checkable
class EnvironmentProvider(Protocol):
    """Protocol for process-wide environment state."""

    def working_directory(self) -> str:
        """Return the working directory, ending in a separator."""
        ...

    def set_working_directory(self, path: str) -> None:
        """Change the working directory."""
        ...

    def separator(self) -> str:
        """Return the platform path separator."""
        ...

    def umask(self) -> int | None:
        """Return the process umask without changing it, None if unsupported."""
        ...
