"""Filesystem collaborator backed by the operating system.

RealFileSystem wraps ``os``, ``shutil`` and ``stat`` calls and satisfies both
the MetadataProvider and MutationProvider protocols. Errors are raised as the
``OSError`` the OS reports; translation happens in the tree layer.
"""

from __future__ import annotations

import os
import shutil
import stat
import time
from datetime import datetime, timezone

from pathtree.types import StatResult

try:
    import grp
    import pwd
except ImportError:  # Windows has no user/group database
    grp = None
    pwd = None


class RealFileSystem:
    """Production filesystem implementation.

    Satisfies the MetadataProvider and MutationProvider protocols structurally.
    """

    # Metadata

    def exists(self, path: str) -> bool:
        """Check if a path exists."""
        return os.path.exists(path)

    def is_file(self, path: str) -> bool:
        """Check if a path is a regular file."""
        return os.path.isfile(path)

    def is_directory(self, path: str) -> bool:
        """Check if a path is a directory."""
        return os.path.isdir(path)

    def is_link(self, path: str) -> bool:
        """Check if a path is a symbolic link."""
        return os.path.islink(path)

    def is_readable(self, path: str) -> bool:
        """Check if the process can read a path."""
        return os.access(path, os.R_OK)

    def is_writable(self, path: str) -> bool:
        """Check if the process can write a path."""
        return os.access(path, os.W_OK)

    def size(self, path: str) -> int:
        """Return the size of a path in bytes."""
        return os.path.getsize(path)

    def last_modified(self, path: str) -> datetime:
        """Return the modification time of a path."""
        return datetime.fromtimestamp(os.path.getmtime(path), tz=timezone.utc)

    def stat(self, path: str) -> StatResult:
        """Return stat information for a path."""
        result = os.stat(path)
        return StatResult(
            mode=result.st_mode,
            uid=result.st_uid,
            gid=result.st_gid,
            device=result.st_dev,
            inode=result.st_ino,
        )

    def list_children(self, path: str) -> list[str]:
        """Return directory entry names in lexical order."""
        return sorted(os.listdir(path))

    def canonical(self, path: str) -> str:
        """Return the canonical form of a path."""
        return os.path.realpath(path)

    def user_name(self, uid: int) -> str | None:
        """Look up a user name."""
        if pwd is None:
            return None
        try:
            return pwd.getpwuid(uid).pw_name
        except KeyError:
            return None

    def group_name(self, gid: int) -> str | None:
        """Look up a group name."""
        if grp is None:
            return None
        try:
            return grp.getgrgid(gid).gr_name
        except KeyError:
            return None

    def user_id(self, name: str) -> int:
        """Look up a user id."""
        if pwd is None:
            raise KeyError(name)
        return pwd.getpwnam(name).pw_uid

    def group_id(self, name: str) -> int:
        """Look up a group id."""
        if grp is None:
            raise KeyError(name)
        return grp.getgrnam(name).gr_gid

    # Mutation

    def create_directory(self, path: str, mode: int) -> None:
        """Create a single directory."""
        os.mkdir(path, mode)

    def delete_entry(self, path: str) -> None:
        """Remove a file, symlink or empty directory."""
        if os.path.isdir(path) and not os.path.islink(path):
            os.rmdir(path)
        else:
            os.unlink(path)

    def rename(self, source: str, target: str) -> None:
        """Rename an entry."""
        os.rename(source, target)

    def create_symlink(self, target: str, link_path: str) -> None:
        """Create a symbolic link."""
        os.symlink(target, link_path)

    def create_hardlink(self, source: str, link_path: str) -> None:
        """Create a hard link."""
        os.link(source, link_path)

    def read_symlink_target(self, path: str) -> str:
        """Read the target of a symbolic link."""
        return os.readlink(path)

    def copy_bytes(self, source: str, target: str) -> None:
        """Copy file contents."""
        shutil.copyfile(source, target)

    def chmod(self, path: str, mode: int) -> None:
        """Change mode bits."""
        os.chmod(path, stat.S_IMODE(mode))

    def chown(self, path: str, uid: int, gid: int) -> None:
        """Change owner and group."""
        os.chown(path, uid, gid)

    def set_last_modified(self, path: str, timestamp: float | None = None) -> None:
        """Touch a path, creating an empty file if it does not exist."""
        if not os.path.lexists(path):
            with open(path, "ab"):
                pass
        when = time.time() if timestamp is None else timestamp
        os.utime(path, (when, when))
