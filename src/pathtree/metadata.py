"""Metadata queries over a MetadataProvider."""

from __future__ import annotations

import logging
import stat as stat_module
from collections.abc import Iterator
from datetime import datetime
from typing import Any

from pathtree.errors import InvalidPath, PathTreeError, translate_os_error
from pathtree.paths import as_text
from pathtree.permissions import Permissions
from pathtree.protocols import MetadataProvider
from pathtree.types import StatResult

logger = logging.getLogger(__name__)


def require_path(path: Any) -> str:
    """Coerce a path argument for an I/O operation.

    Raises:
        InvalidPath: If path is None or empty.
    """
    text = as_text(path)
    if not text:
        raise InvalidPath("undefined path argument", path=None)
    return text


class Metadata:
    """Thin accessor for entry metadata.

    Boolean queries pass straight through. Queries returning data translate
    collaborator ``OSError``s into ``pathtree.errors`` kinds.
    """

    def __init__(self, provider: MetadataProvider) -> None:
        """Initialize with the provider answering the queries."""
        self.provider = provider

    def exists(self, path: Any) -> bool:
        return self.provider.exists(require_path(path))

    def is_file(self, path: Any) -> bool:
        return self.provider.is_file(require_path(path))

    def is_directory(self, path: Any) -> bool:
        return self.provider.is_directory(require_path(path))

    def is_link(self, path: Any) -> bool:
        return self.provider.is_link(require_path(path))

    def is_readable(self, path: Any) -> bool:
        return self.provider.is_readable(require_path(path))

    def is_writable(self, path: Any) -> bool:
        return self.provider.is_writable(require_path(path))

    def size(self, path: Any) -> int:
        path = require_path(path)
        try:
            return self.provider.size(path)
        except OSError as e:
            raise translate_os_error(e, path) from e

    def last_modified(self, path: Any) -> datetime:
        path = require_path(path)
        try:
            return self.provider.last_modified(path)
        except OSError as e:
            raise translate_os_error(e, path) from e

    def stat(self, path: Any) -> StatResult:
        path = require_path(path)
        try:
            return self.provider.stat(path)
        except OSError as e:
            raise translate_os_error(e, path) from e

    def permissions(self, path: Any) -> Permissions:
        """Return the permission bits of path."""
        return Permissions.from_mode(stat_module.S_IMODE(self.stat(path).mode))

    def owner(self, path: Any) -> str | int | None:
        """Return the owner name of path.

        Returns:
            The user name, the numeric uid if it has no name, or None if
            path cannot be stat'ed.
        """
        try:
            uid = self.stat(path).uid
        except InvalidPath:
            raise
        except PathTreeError as e:
            logger.debug("Cannot stat %s for owner: %s", path, e)
            return None
        return self.provider.user_name(uid) or uid

    def group(self, path: Any) -> str | int | None:
        """Return the group name of path.

        Returns:
            The group name, the numeric gid if it has no name, or None if
            path cannot be stat'ed.
        """
        try:
            gid = self.stat(path).gid
        except InvalidPath:
            raise
        except PathTreeError as e:
            logger.debug("Cannot stat %s for group: %s", path, e)
            return None
        return self.provider.group_name(gid) or gid

    def same(self, path_a: Any, path_b: Any) -> bool:
        """Check whether two paths refer to the same entry."""
        return self.stat(path_a).is_identical(self.stat(path_b))

    def same_filesystem(self, path_a: Any, path_b: Any) -> bool:
        """Check whether two paths live on the same device."""
        return self.stat(path_a).device == self.stat(path_b).device

    def canonical(self, path: Any) -> str:
        """Return the canonical absolute form of path."""
        path = require_path(path)
        try:
            return self.provider.canonical(path)
        except OSError as e:
            raise translate_os_error(e, path) from e

    def list(self, path: Any) -> list[str]:
        """Return the entry names of a directory in lexical order."""
        path = require_path(path)
        try:
            return self.provider.list_children(path)
        except OSError as e:
            raise translate_os_error(e, path) from e

    def iterate(self, path: Any) -> Iterator[str]:
        """Iterate over the entry names of a directory."""
        yield from self.list(path)
