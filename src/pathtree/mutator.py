"""Filesystem changes: tree creation, copy and removal, plus single entries.

None of these operations is transactional. ``copy_tree`` and ``remove_tree``
stop at the first failure and leave whatever they already changed in place;
callers must be prepared for a partially copied or partially removed tree.
"""

from __future__ import annotations

import errno
import logging
import stat as stat_module
from datetime import datetime
from typing import Any

from pathtree.errors import (
    AlreadyExists,
    CopyFailed,
    CreateFailed,
    IsADirectory,
    NotADirectory,
    NotFound,
    PathTreeError,
    RemoveFailed,
    translate_os_error,
)
from pathtree.metadata import Metadata, require_path
from pathtree.paths import NATIVE, PathSyntax
from pathtree.permissions import Permissions, apply_to_mode
from pathtree.protocols import MutationProvider

logger = logging.getLogger(__name__)


class TreeMutator:
    """Creates, copies and removes filesystem entries and trees.

    Follows Separate Use from Creation: all collaborators are passed in,
    including the default permissions used for new directories.
    """

    def __init__(
        self,
        metadata: Metadata,
        mutation: MutationProvider,
        default_permissions: Permissions,
        syntax: PathSyntax = NATIVE,
    ) -> None:
        """Initialize the mutator.

        Args:
            metadata: Accessor used to inspect entries before changing them.
            mutation: Provider performing the actual changes.
            default_permissions: Permissions for directories created without
                explicit ones.
            syntax: Path syntax used to join and split paths.
        """
        self.metadata = metadata
        self.mutation = mutation
        self.default_permissions = default_permissions
        self.syntax = syntax

    # ------------------------------------------------------------------
    # Trees
    # ------------------------------------------------------------------

    def make_tree(self, path: Any) -> None:
        """Create a directory and all missing ancestors.

        Succeeds silently if the directory already exists.

        Raises:
            CreateFailed: If any directory cannot be created, including when
                a non-directory is in the way.
        """
        target = self.syntax.normal(require_path(path))
        missing: list[str] = []
        current = target
        while current and not self.metadata.is_directory(current):
            missing.append(current)
            parent = self.syntax.directory(current)
            if parent == current:
                break
            current = parent

        mode = self.default_permissions.to_number()
        for directory in reversed(missing):
            try:
                self.mutation.create_directory(directory, mode)
            except OSError as e:
                # Lost a race with another creator; fine as long as it is a directory.
                if e.errno == errno.EEXIST and self.metadata.is_directory(directory):
                    continue
                raise CreateFailed(f"failed to make tree {target}: {e}", path=directory) from e
            logger.debug("Created directory %s", directory)

    def copy_tree(self, source: Any, target: Any) -> None:
        """Copy source to target recursively.

        Symbolic links inside source are recreated with the same target
        string rather than copied or followed, so symlinked directories are
        never traversed. A non-directory source is copied byte for byte.

        Raises:
            CopyFailed: On the first entry that cannot be copied.
        """
        source = require_path(source)
        target = require_path(target)
        if not self.metadata.is_directory(source):
            self.copy(source, target)
            return

        try:
            self.make_tree(target)
            children = self.metadata.list(source)
        except PathTreeError as e:
            raise CopyFailed(f"failed to copy {source} to {target}: {e}", path=source) from e

        for child in children:
            source_child = self.syntax.join(source, child)
            target_child = self.syntax.join(target, child)
            if self.metadata.is_link(source_child):
                self._copy_link(source_child, target_child)
            else:
                self.copy_tree(source_child, target_child)

    def _copy_link(self, source: str, target: str) -> None:
        try:
            link_target = self.mutation.read_symlink_target(source)
            self.mutation.create_symlink(link_target, target)
        except OSError as e:
            raise CopyFailed(f"failed to copy link {source} to {target}: {e}", path=source) from e
        logger.debug("Linked %s -> %s", target, link_target)

    def remove_tree(self, path: Any) -> None:
        """Remove path and, for a real directory, everything below it.

        A symbolic link is removed itself, never its target.

        Raises:
            RemoveFailed: On the first entry that cannot be removed. Entries
                removed before the failure stay removed.
        """
        path = require_path(path)
        if self.metadata.is_directory(path) and not self.metadata.is_link(path):
            try:
                children = self.metadata.list(path)
            except PathTreeError as e:
                raise RemoveFailed(f"failed to remove {path}: {e}", path=path) from e
            for child in children:
                self.remove_tree(self.syntax.join(path, child))
        try:
            self.mutation.delete_entry(path)
        except OSError as e:
            logger.debug("Removal stopped at %s", path)
            raise RemoveFailed(f"failed to remove {path}: {e}", path=path) from e

    # ------------------------------------------------------------------
    # Single entries
    # ------------------------------------------------------------------

    def make_directory(self, path: Any, permissions: Any = None) -> None:
        """Create a single directory.

        Args:
            path: Directory to create; its parent must exist.
            permissions: Permissions, partial mapping or int mode merged over
                the default permissions.

        Raises:
            AlreadyExists: If path already exists.
            CreateFailed: If the directory cannot be created.
        """
        path = require_path(path)
        mode = Permissions.merge(permissions, self.default_permissions).to_number()
        try:
            self.mutation.create_directory(path, mode)
        except FileExistsError as e:
            raise AlreadyExists(f"failed to make directory {path}: already exists", path=path) from e
        except OSError as e:
            raise CreateFailed(f"failed to make directory {path}: {e}", path=path) from e

    def copy(self, source: Any, target: Any) -> None:
        """Copy file contents from source to target, overwriting target."""
        source = require_path(source)
        target = require_path(target)
        try:
            self.mutation.copy_bytes(source, target)
        except OSError as e:
            logger.debug("Copy stopped at %s", source)
            raise CopyFailed(f"failed to copy {source} to {target}: {e}", path=source) from e

    def move(self, source: Any, target: Any) -> None:
        """Rename source to target."""
        source = require_path(source)
        target = require_path(target)
        try:
            self.mutation.rename(source, target)
        except OSError as e:
            raise translate_os_error(e, source) from e

    def remove(self, path: Any) -> None:
        """Remove a single file or symbolic link.

        Raises:
            IsADirectory: If path is a directory.
            RemoveFailed: If the entry cannot be removed.
        """
        path = require_path(path)
        if self.metadata.is_directory(path) and not self.metadata.is_link(path):
            raise IsADirectory(f"failed to remove file {path}: is a directory", path=path)
        try:
            self.mutation.delete_entry(path)
        except OSError as e:
            raise RemoveFailed(f"failed to remove file {path}: {e}", path=path) from e

    def remove_directory(self, path: Any) -> None:
        """Remove an empty directory.

        Raises:
            NotADirectory: If path is not a directory.
            RemoveFailed: If the directory cannot be removed.
        """
        path = require_path(path)
        if not self.metadata.is_directory(path) or self.metadata.is_link(path):
            raise NotADirectory(f"failed to remove directory {path}: not a directory", path=path)
        try:
            self.mutation.delete_entry(path)
        except OSError as e:
            raise RemoveFailed(f"failed to remove directory {path}: {e}", path=path) from e

    def touch(self, path: Any, mtime: datetime | float | None = None) -> None:
        """Set the modification time of path, creating an empty file if needed."""
        path = require_path(path)
        if isinstance(mtime, datetime):
            mtime = mtime.timestamp()
        try:
            self.mutation.set_last_modified(path, mtime)
        except OSError as e:
            raise translate_os_error(e, path) from e

    def symbolic_link(self, target: Any, link_path: Any) -> None:
        """Create link_path as a symbolic link to target, stored verbatim."""
        target = require_path(target)
        link_path = require_path(link_path)
        try:
            self.mutation.create_symlink(target, link_path)
        except OSError as e:
            raise translate_os_error(e, link_path) from e

    def hard_link(self, source: Any, link_path: Any) -> None:
        """Create link_path as a hard link to source."""
        source = require_path(source)
        link_path = require_path(link_path)
        try:
            self.mutation.create_hardlink(source, link_path)
        except OSError as e:
            raise translate_os_error(e, link_path) from e

    def read_link(self, path: Any) -> str:
        """Return the target string of a symbolic link."""
        path = require_path(path)
        try:
            return self.mutation.read_symlink_target(path)
        except OSError as e:
            raise translate_os_error(e, path) from e

    def change_permissions(self, path: Any, permissions: Any) -> None:
        """Replace the permission bits of path.

        Partial permissions are merged over the entry's current ones. Bits
        above ``0o777`` (setuid, setgid, sticky) are left as they are.
        """
        path = require_path(path)
        current_mode = stat_module.S_IMODE(self.metadata.stat(path).mode)
        merged = Permissions.merge(permissions, Permissions.from_mode(current_mode))
        try:
            self.mutation.chmod(path, apply_to_mode(current_mode, merged))
        except OSError as e:
            raise translate_os_error(e, path) from e

    def change_owner(self, path: Any, user: str | int) -> None:
        """Change the owner of path, given a user name or uid."""
        path = require_path(path)
        uid = self._lookup(user, self.metadata.provider.user_id, "user")
        try:
            self.mutation.chown(path, uid, -1)
        except OSError as e:
            raise translate_os_error(e, path) from e

    def change_group(self, path: Any, group: str | int) -> None:
        """Change the group of path, given a group name or gid."""
        path = require_path(path)
        gid = self._lookup(group, self.metadata.provider.group_id, "group")
        try:
            self.mutation.chown(path, -1, gid)
        except OSError as e:
            raise translate_os_error(e, path) from e

    @staticmethod
    def _lookup(name: str | int, resolver: Any, kind: str) -> int:
        if isinstance(name, int):
            return name
        try:
            return resolver(name)
        except KeyError as e:
            raise NotFound(f"Unknown {kind}: {name}") from e
