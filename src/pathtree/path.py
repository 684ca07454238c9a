"""Chainable, immutable path value.

Path is a thin facade: syntactic methods delegate to the path algebra and
I/O methods delegate to the walker, mutator and metadata services of the
TreeContext the path is bound to. Syntactic methods work on unbound paths;
I/O methods need a context.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime
from typing import TYPE_CHECKING, Any

from pathtree.errors import PathTreeError
from pathtree.paths import NATIVE, PathSyntax, as_text
from pathtree.permissions import Permissions
from pathtree.types import TreeEntry

if TYPE_CHECKING:
    from pathtree.context import TreeContext

__all__ = ["Path", "path"]


class Path:
    """An immutable path string with chainable operations.

    Two paths are equal when their normalized forms are equal, so
    ``Path("a/./b") == Path("a/b")``.
    """

    __slots__ = ("_value", "_context")

    def __init__(self, *parts: Any, context: TreeContext | None = None) -> None:
        """Create a path by joining parts.

        Args:
            *parts: Path segments or paths, joined without normalization.
            context: Services used by I/O methods.
        """
        syntax = context.syntax if context is not None else NATIVE
        object.__setattr__(self, "_value", syntax.join(*parts))
        object.__setattr__(self, "_context", context)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Path is immutable")

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"Path({self._value!r})"

    def __fspath__(self) -> str:
        return self._value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (Path, str)):
            return self.syntax.normal(self._value) == self.syntax.normal(as_text(other))
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.syntax.normal(self._value))

    @property
    def syntax(self) -> PathSyntax:
        """The path syntax of the bound context, or the native one."""
        return self._context.syntax if self._context is not None else NATIVE

    @property
    def context(self) -> TreeContext | None:
        """The context this path is bound to, if any."""
        return self._context

    def _new(self, *parts: Any) -> Path:
        return Path(*parts, context=self._context)

    def _services(self) -> TreeContext:
        if self._context is None:
            raise PathTreeError(f"No context bound to path {self._value!r}", path=self._value)
        return self._context

    def _cwd(self) -> str | None:
        return self._context.working_directory() if self._context is not None else None

    # Path algebra

    def join(self, *parts: Any) -> Path:
        """Join parts to this path."""
        return self._new(self._value, *parts)

    def resolve(self, *parts: Any) -> Path:
        """Resolve parts against this path."""
        return self._new(self.syntax.resolve(self._value, *parts))

    def normal(self) -> Path:
        return self._new(self.syntax.normal(self._value))

    def absolute(self) -> Path:
        return self._new(self.syntax.absolute(self._value, self._cwd()))

    def directory(self) -> Path:
        return self._new(self.syntax.directory(self._value))

    def relative(self, target: Any = None) -> Path:
        """Equivalent to ``Path(relative(self, target))``."""
        return self._new(self.syntax.relative(self._value, target, self._cwd()))

    def to(self, target: Any) -> Path:
        """Return the relative path from this path to target."""
        return self._new(self.syntax.relative(self._value, target, self._cwd()))

    def from_(self, source: Any) -> Path:
        """Return the relative path from source to this path."""
        return self._new(self.syntax.relative(source, self._value, self._cwd()))

    def base(self, ext: str | None = None) -> str:
        return self.syntax.base(self._value, ext)

    def extension(self) -> str:
        return self.syntax.extension(self._value)

    def split(self) -> list[str]:
        return self.syntax.split(self._value)

    def is_absolute(self) -> bool:
        return self.syntax.is_absolute(self._value)

    def is_relative(self) -> bool:
        return self.syntax.is_relative(self._value)

    # Metadata

    def canonical(self) -> Path:
        return self._new(self._services().metadata.canonical(self._value))

    def exists(self) -> bool:
        return self._services().metadata.exists(self._value)

    def is_file(self) -> bool:
        return self._services().metadata.is_file(self._value)

    def is_directory(self) -> bool:
        return self._services().metadata.is_directory(self._value)

    def is_link(self) -> bool:
        return self._services().metadata.is_link(self._value)

    def is_readable(self) -> bool:
        return self._services().metadata.is_readable(self._value)

    def is_writable(self) -> bool:
        return self._services().metadata.is_writable(self._value)

    def size(self) -> int:
        return self._services().metadata.size(self._value)

    def last_modified(self) -> datetime:
        return self._services().metadata.last_modified(self._value)

    def permissions(self) -> Permissions:
        return self._services().metadata.permissions(self._value)

    def owner(self) -> str | int | None:
        return self._services().metadata.owner(self._value)

    def group(self) -> str | int | None:
        return self._services().metadata.group(self._value)

    def same(self, other: Any) -> bool:
        return self._services().metadata.same(self._value, other)

    def same_filesystem(self, other: Any) -> bool:
        return self._services().metadata.same_filesystem(self._value, other)

    # Listings

    def list(self) -> list[str]:
        """Return the names of the entries in this directory, lexically sorted."""
        return self._services().metadata.list(self._value)

    def iterate(self) -> Iterator[str]:
        return self._services().metadata.iterate(self._value)

    def list_paths(self) -> list[Path]:
        """Return the entries of this directory as Paths."""
        return [self.join(name) for name in self.list()]

    def list_tree(self) -> list[str]:
        return self._services().walker.list_tree(self._value)

    def list_directory_tree(self) -> list[str]:
        return self._services().walker.list_directory_tree(self._value)

    def walk(self) -> Iterator[TreeEntry]:
        return self._services().walker.walk(self._value)

    # Mutation

    def make_directory(self, permissions: Any = None) -> Path:
        self._services().mutator.make_directory(self._value, permissions)
        return self

    def make_tree(self) -> Path:
        self._services().mutator.make_tree(self._value)
        return self

    def copy(self, target: Any) -> Path:
        """Copy this file to target and return the target path."""
        self._services().mutator.copy(self._value, target)
        return self._new(target)

    def copy_tree(self, target: Any) -> Path:
        """Copy this tree to target and return the target path."""
        self._services().mutator.copy_tree(self._value, target)
        return self._new(target)

    def move(self, target: Any) -> Path:
        """Move this entry to target and return the target path."""
        self._services().mutator.move(self._value, target)
        return self._new(target)

    def remove(self) -> Path:
        self._services().mutator.remove(self._value)
        return self

    def remove_directory(self) -> Path:
        self._services().mutator.remove_directory(self._value)
        return self

    def remove_tree(self) -> Path:
        self._services().mutator.remove_tree(self._value)
        return self

    def touch(self, mtime: datetime | float | None = None) -> Path:
        self._services().mutator.touch(self._value, mtime)
        return self

    def symbolic_link(self, link_path: Any) -> Path:
        """Create link_path as a symbolic link pointing at this path."""
        self._services().mutator.symbolic_link(self._value, link_path)
        return self

    def hard_link(self, link_path: Any) -> Path:
        """Create link_path as a hard link to this path."""
        self._services().mutator.hard_link(self._value, link_path)
        return self

    def read_link(self) -> Path:
        """Return the target stored in this symbolic link."""
        return self._new(self._services().mutator.read_link(self._value))

    def change_permissions(self, permissions: Any) -> Path:
        self._services().mutator.change_permissions(self._value, permissions)
        return self

    def change_owner(self, user: str | int) -> Path:
        self._services().mutator.change_owner(self._value, user)
        return self

    def change_group(self, group: str | int) -> Path:
        self._services().mutator.change_group(self._value, group)
        return self


def path(*parts: Any, context: TreeContext | None = None) -> Path:
    """Shorthand for ``Path(*parts, context=context)``."""
    return Path(*parts, context=context)
