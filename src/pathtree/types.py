"""Shared data types for pathtree."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = ["EntryKind", "StatResult", "TreeEntry"]


@dataclass(frozen=True)
class StatResult:
    """Subset of stat information needed by tree operations.

    Attributes:
        mode: Full st_mode, including file type and setuid/setgid/sticky bits.
        uid: Owning user id.
        gid: Owning group id.
        device: Id of the device holding the entry.
        inode: Identity of the entry on its device.
    """

    mode: int
    uid: int
    gid: int
    device: int
    inode: int

    def is_identical(self, other: StatResult) -> bool:
        """Check whether both results describe the same filesystem entry."""
        return self.device == other.device and self.inode == other.inode


class EntryKind(str, Enum):
    """Classification of an entry produced by a tree walk."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK_TO_DIRECTORY = "symlink_to_directory"


@dataclass(frozen=True)
class TreeEntry:
    """An entry found by a tree walk.

    Attributes:
        path: Path relative to the walk root; ``""`` is the root itself.
        kind: What the entry is.
    """

    path: str
    kind: EntryKind

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.path == "" and self.kind is not EntryKind.DIRECTORY:
            raise ValueError("the walk root must be a directory entry")
