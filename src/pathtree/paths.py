"""Path algebra: pure string manipulation of filesystem paths.

Nothing in this module touches the filesystem. The only environment input is
the working directory used by ``absolute`` and ``relative``, which callers may
pass explicitly.

Resolution follows URL-style semantics: the last segment of each visited path
is a tentative leaf that a following relative path replaces, so
``resolve("a/b", "c")`` is ``"a/c"`` and ``resolve("a/b/", "c")`` is
``"a/b/c"``.
"""

from __future__ import annotations

import os
import re
from typing import Any

from pathtree.environment import RealEnvironment

__all__ = [
    "NATIVE",
    "POSIX",
    "WINDOWS",
    "PathSyntax",
    "absolute",
    "base",
    "directory",
    "extension",
    "is_absolute",
    "is_relative",
    "join",
    "normal",
    "relative",
    "resolve",
    "split",
]

_DRIVE_ROOT_RE = re.compile(r"^[A-Za-z]:[\\/]")
_UNC_RE = re.compile(r"^[\\/]{2}")


def as_text(value: Any) -> str:
    """Coerce a path-like argument to a string; None counts as empty."""
    if value is None:
        return ""
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    return str(value)


class PathSyntax:
    """Path algebra for one platform flavor.

    Args:
        separator: The platform separator. ``/`` is always accepted as an
            alternative separator when parsing.
    """

    def __init__(self, separator: str) -> None:
        self.separator = separator
        if separator == "/":
            self._separator_re = re.compile("/")
        else:
            self._separator_re = re.compile(re.escape(separator) + "|/")

    def __repr__(self) -> str:
        return f"PathSyntax({self.separator!r})"

    @property
    def uses_drives(self) -> bool:
        """True for flavors with drive-letter roots."""
        return self.separator != "/"

    def split(self, path: Any) -> list[str]:
        """Split a path into its segments.

        ``split("")`` is ``[]``, not ``[""]``.
        """
        path = as_text(path)
        if not path:
            return []
        return self._separator_re.split(path)

    def join(self, *paths: Any) -> str:
        """Join paths with the separator without normalizing them.

        Empty arguments are dropped, so ``join("", "foo")`` is ``"foo"``.
        """
        return self.separator.join(p for p in map(as_text, paths) if p != "")

    def is_absolute(self, path: Any) -> bool:
        """Check whether path starts with a platform root."""
        path = as_text(path)
        if not self.uses_drives:
            return path.startswith("/")
        return bool(_DRIVE_ROOT_RE.match(path) or _UNC_RE.match(path))

    def is_relative(self, path: Any) -> bool:
        """Negation of is_absolute."""
        return not self.is_absolute(path)

    def _is_rooted(self, path: str) -> bool:
        # Quasi-absolute paths such as "\projects" start with a separator but
        # carry no drive.
        return self.is_absolute(path) or bool(self._separator_re.match(path))

    def resolve(self, *paths: Any) -> str:
        """Walk from an empty location through each path in turn.

        Absolute paths discard everything accumulated so far. ``.`` segments
        are dropped and ``..`` pops the previous segment where possible; an
        unresolvable ``..`` in a relative result is kept literally, and one
        that would climb above a root is dropped.

        Returns:
            The resolved path, ``""`` when no argument is non-blank.
        """
        root = ""
        elements: list[str] = []
        leaf = ""
        for value in paths:
            path = as_text(value)
            if not path.strip():
                continue
            parts = self._separator_re.split(path)
            if self._is_rooted(path):
                root = parts.pop(0) + self.separator
                elements = []
            leaf = parts.pop()
            if leaf in (".", ".."):
                parts.append(leaf)
                leaf = ""
            for part in parts:
                if part == "..":
                    if elements and elements[-1] != "..":
                        elements.pop()
                    elif not root:
                        elements.append(part)
                elif part not in ("", "."):
                    elements.append(part)
        joined = self.separator.join(elements)
        if joined:
            leaf = self.separator + leaf
        return root + joined + leaf

    def normal(self, path: Any) -> str:
        """Normalize a path by collapsing ``.`` and ``..`` where possible."""
        return self.resolve(path)

    def absolute(self, path: Any, cwd: str | None = None) -> str:
        """Resolve path against the working directory.

        Args:
            path: Path to make absolute.
            cwd: Working directory to use; defaults to the process one.
        """
        if cwd is None:
            cwd = RealEnvironment().working_directory()
        return self.resolve(cwd, path)

    def relative(self, source: Any, target: Any = None, cwd: str | None = None) -> str:
        """Compute the path leading from source to target.

        The last segment of source is treated as a file, so the result is
        relative to source's directory and ``resolve(source, result)`` gives
        target back. Without a target, returns the path to source from the
        working directory.

        Args:
            source: Starting point.
            target: Destination; defaults to source (see above).
            cwd: Working directory to use; defaults to the process one.

        Returns:
            The relative path, ``""`` when both sides are the same path.
        """
        if cwd is None:
            cwd = RealEnvironment().working_directory()
        if not as_text(target):
            target = source
            source = cwd
        source_path = self.absolute(source, cwd)
        target_path = self.absolute(target, cwd)
        if source_path == target_path:
            return ""
        source_parts = self._separator_re.split(source_path)
        target_parts = self._separator_re.split(target_path)
        source_parts.pop()
        common = 0
        while (
            common < len(source_parts)
            and common < len(target_parts)
            and source_parts[common] == target_parts[common]
        ):
            common += 1
        climb = [".."] * (len(source_parts) - common)
        return self.separator.join(climb + target_parts[common:])

    def base(self, path: Any, ext: str | None = None) -> str:
        """Return the last segment of path, optionally without ext."""
        segments = self.split(path)
        if not segments:
            return ""
        name = segments[-1]
        if ext and name.endswith(ext):
            return name[: len(name) - len(ext)]
        return name

    def _root_prefix(self, path: str) -> str:
        if not self.uses_drives:
            return "/" if path.startswith("/") else ""
        if _DRIVE_ROOT_RE.match(path):
            return path[:2] + self.separator
        if self._separator_re.match(path):
            return self.separator
        return ""

    def directory(self, path: Any) -> str:
        """Return path without its last segment, or ``"."`` if there is none.

        Trailing and repeated separators are ignored; the parent of an entry
        directly below a root is that root.
        """
        path = as_text(path)
        root = self._root_prefix(path)
        segments = [s for s in self._separator_re.split(path[len(root) :]) if s]
        if len(segments) < 2:
            return root if segments and root else "."
        return root + self.separator.join(segments[:-1])

    def extension(self, path: Any) -> str:
        """Return the extension of path's last segment, including the dot.

        Leading dots are ignored, so ``.bashrc`` has no extension.
        """
        name = self.base(path).lstrip(".")
        index = name.rfind(".")
        return name[index:] if index > 0 else ""


POSIX = PathSyntax("/")
WINDOWS = PathSyntax("\\")
NATIVE = PathSyntax(os.sep)


def split(path: Any) -> list[str]:
    """Split path into segments using the native syntax."""
    return NATIVE.split(path)


def join(*paths: Any) -> str:
    """Join paths using the native separator."""
    return NATIVE.join(*paths)


def resolve(*paths: Any) -> str:
    """Resolve paths left to right using the native syntax."""
    return NATIVE.resolve(*paths)


def normal(path: Any) -> str:
    """Normalize path using the native syntax."""
    return NATIVE.normal(path)


def absolute(path: Any, cwd: str | None = None) -> str:
    """Make path absolute against the working directory."""
    return NATIVE.absolute(path, cwd)


def relative(source: Any, target: Any = None, cwd: str | None = None) -> str:
    """Relative path from source to target using the native syntax."""
    return NATIVE.relative(source, target, cwd)


def base(path: Any, ext: str | None = None) -> str:
    """Last segment of path, optionally stripped of ext."""
    return NATIVE.base(path, ext)


def directory(path: Any) -> str:
    """Parent of path, or ``"."``."""
    return NATIVE.directory(path)


def extension(path: Any) -> str:
    """Extension of path, including the leading dot."""
    return NATIVE.extension(path)


def is_absolute(path: Any) -> bool:
    """Check whether path is absolute in the native syntax."""
    return NATIVE.is_absolute(path)


def is_relative(path: Any) -> bool:
    """Check whether path is relative in the native syntax."""
    return NATIVE.is_relative(path)
