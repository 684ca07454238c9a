"""CLI commands using Typer."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from pathtree import __version__
from pathtree.context import create_context
from pathtree.display import Display
from pathtree.errors import PathTreeError
from pathtree.permissions import Permissions
from pathtree.types import EntryKind

if TYPE_CHECKING:
    from pathtree.context import TreeContext

app = typer.Typer(
    name="pathtree",
    help="Path algebra and filesystem tree operations",
    no_args_is_help=True,
)

config_app = typer.Typer(help="Configuration commands")

app.add_typer(config_app, name="config")

console = Console()
display = Display(console)
logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"pathtree v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Log traversal and mutation steps")
    ] = False,
) -> None:
    """Path algebra and filesystem tree operations."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _fail(message: str, error: Exception) -> typer.Exit:
    """Report a failed operation and build the exit to raise."""
    logger.debug("%s", message, exc_info=error)
    display.show_error(f"{message}: {error}")
    return typer.Exit(1)


def _get_context(context: TreeContext | None) -> TreeContext:
    """Return the injected context or build the production one.

    Raises:
        typer.Exit: If the configuration file cannot be read.
    """
    if context is not None:
        return context
    try:
        return create_context()
    except ValueError as e:
        # Malformed JSON and failed validation are both ValueErrors.
        raise _fail("Cannot read configuration", e) from e


# ============================================================================
# Path Algebra Commands
# ============================================================================


@app.command()
def resolve(
    paths: Annotated[list[str], typer.Argument(help="Paths to resolve, left to right")],
    _context=None,
) -> None:
    """Resolve paths by walking from one to the next."""
    ctx = _get_context(_context)
    display.show_lines([ctx.algebra_syntax.resolve(*paths)])


@app.command()
def relative(
    source: Annotated[str, typer.Argument(help="Starting path")],
    target: Annotated[str | None, typer.Argument(help="Destination path")] = None,
    _context=None,
) -> None:
    """Show the relative path from source to target."""
    ctx = _get_context(_context)
    display.show_lines([ctx.algebra_syntax.relative(source, target, ctx.working_directory())])


# ============================================================================
# Tree Commands
# ============================================================================


@app.command()
def tree(
    path: Annotated[str, typer.Argument(help="Directory to list")] = ".",
    dirs: Annotated[bool, typer.Option("--dirs", "-d", help="List directories only")] = False,
    flat: Annotated[bool, typer.Option("--flat", help="Print one path per line")] = False,
    _context=None,
) -> None:
    """List a directory tree without following directory symlinks."""
    ctx = _get_context(_context)
    try:
        if flat:
            listing = (
                ctx.walker.list_directory_tree(path) if dirs else ctx.walker.list_tree(path)
            )
            display.show_lines(listing)
            return
        entries = [
            entry
            for entry in ctx.walker.walk(path)
            if not dirs or entry.kind is not EntryKind.FILE
        ]
    except PathTreeError as e:
        raise _fail(f"Cannot list {path}", e) from e
    display.show_tree(path, entries, ctx.syntax)


@app.command()
def mkdir(
    path: Annotated[str, typer.Argument(help="Directory to create")],
    _context=None,
) -> None:
    """Create a directory and any missing parents."""
    ctx = _get_context(_context)
    try:
        ctx.mutator.make_tree(path)
    except PathTreeError as e:
        raise _fail(f"Cannot create {path}", e) from e
    display.show_success(f"Created {path}")


@app.command()
def copy(
    source: Annotated[str, typer.Argument(help="File or directory to copy")],
    target: Annotated[str, typer.Argument(help="Destination")],
    _context=None,
) -> None:
    """Copy a file or tree, recreating symlinks as symlinks."""
    ctx = _get_context(_context)
    try:
        ctx.mutator.copy_tree(source, target)
    except PathTreeError as e:
        raise _fail(f"Copy stopped; {target} may be incomplete", e) from e
    display.show_success(f"Copied {source} to {target}")


@app.command()
def remove(
    path: Annotated[str, typer.Argument(help="File or directory to remove")],
    _context=None,
) -> None:
    """Remove a file or tree; symlinks are removed, not followed."""
    ctx = _get_context(_context)
    try:
        ctx.mutator.remove_tree(path)
    except PathTreeError as e:
        raise _fail(f"Removal stopped; {path} may be partially removed", e) from e
    display.show_success(f"Removed {path}")


# ============================================================================
# Permission Commands
# ============================================================================


def _parse_mode(mode: str) -> int:
    """Parse an octal mode string.

    Raises:
        typer.Exit: If mode is not a three-digit octal value.
    """
    try:
        value = int(mode, 8)
    except ValueError:
        value = -1
    if not 0 <= value <= 0o777:
        display.show_error(f"Invalid mode '{mode}'. Use an octal value such as 755")
        raise typer.Exit(1)
    return value


@app.command()
def chmod(
    path: Annotated[str, typer.Argument(help="Entry to change")],
    mode: Annotated[str, typer.Argument(help="Octal permission bits, e.g. 755")],
    _context=None,
) -> None:
    """Set permission bits, keeping setuid/setgid/sticky bits."""
    ctx = _get_context(_context)
    permissions = Permissions.from_mode(_parse_mode(mode))
    try:
        ctx.mutator.change_permissions(path, permissions)
    except PathTreeError as e:
        raise _fail(f"Cannot change permissions of {path}", e) from e
    display.show_success(f"Set {path} to {permissions}")


@app.command()
def perms(
    path: Annotated[str, typer.Argument(help="Entry to inspect")],
    _context=None,
) -> None:
    """Show the permission bits of an entry."""
    ctx = _get_context(_context)
    try:
        permissions = ctx.metadata.permissions(path)
    except PathTreeError as e:
        raise _fail(f"Cannot read permissions of {path}", e) from e
    display.show_permissions(path, permissions)


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("show")
def config_show(
    _context=None,
) -> None:
    """Show current configuration."""
    ctx: TreeContext = _get_context(_context)
    config = ctx.config_manager.load()
    display.show_config(config, ctx.config_manager.config_dir, ctx.default_permissions)


@config_app.command("set")
def config_set(
    key: Annotated[str, typer.Argument(help="Configuration key")],
    value: Annotated[str, typer.Argument(help="Configuration value")],
    _context=None,
) -> None:
    """Set a configuration value."""
    ctx: TreeContext = _get_context(_context)
    try:
        ctx.config_manager.set_value(key, value)
    except PathTreeError as e:
        raise _fail("Cannot update configuration", e) from e
    except ValueError as e:
        display.show_error(f"Invalid value for {key}: {value}")
        raise typer.Exit(1) from e
    display.show_success(f"Set {key} to {value}")


if __name__ == "__main__":
    app()
