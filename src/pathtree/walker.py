"""Recursive, lexically ordered directory traversal.

Symbolic links to directories are reported once, as leaves, and never
entered. Ordering comes from the metadata provider's listing, which must be
lexical.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from pathtree.metadata import Metadata
from pathtree.paths import NATIVE, PathSyntax, as_text
from pathtree.types import EntryKind, TreeEntry

logger = logging.getLogger(__name__)


class TreeWalker:
    """Depth-first tree listings built on a Metadata accessor."""

    def __init__(self, metadata: Metadata, syntax: PathSyntax = NATIVE) -> None:
        """Initialize the walker.

        Args:
            metadata: Accessor used to list and classify entries.
            syntax: Path syntax used to join entry names.
        """
        self.metadata = metadata
        self.syntax = syntax

    def walk(self, path: Any) -> Iterator[TreeEntry]:
        """Yield every entry below (and including) path.

        The first entry is always the root itself, with path ``""``. Within a
        directory, children come in listing order and each directory is
        followed by its own subtree.

        Args:
            path: Directory to walk; ``""`` means the current directory.

        Raises:
            PathTreeError: If a directory cannot be listed.
        """
        root = as_text(path) or "."
        yield TreeEntry("", EntryKind.DIRECTORY)
        yield from self._walk_children(root, "")

    def _walk_children(self, directory: str, prefix: str) -> Iterator[TreeEntry]:
        for child in self.metadata.list(directory):
            child_path = self.syntax.join(directory, child)
            entry_path = self.syntax.join(prefix, child)
            if not self.metadata.is_directory(child_path):
                yield TreeEntry(entry_path, EntryKind.FILE)
            elif self.metadata.is_link(child_path):
                logger.debug("Not following directory symlink %s", child_path)
                yield TreeEntry(entry_path, EntryKind.SYMLINK_TO_DIRECTORY)
            else:
                yield TreeEntry(entry_path, EntryKind.DIRECTORY)
                yield from self._walk_children(child_path, entry_path)

    def list_tree(self, path: Any) -> list[str]:
        """List all paths below (and including) path.

        Example:
            For files ``a`` and ``b/c`` plus a symlink ``d -> b`` the result
            is ``["", "a", "b", "b/c", "d"]``.
        """
        return [entry.path for entry in self.walk(path)]

    def list_directory_tree(self, path: Any) -> list[str]:
        """List the directories below (and including) path.

        Symlinked directories are included as leaves; files are dropped.
        """
        return [entry.path for entry in self.walk(path) if entry.kind is not EntryKind.FILE]
