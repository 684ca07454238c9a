"""Rich console output for the CLI."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path as FsPath

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from pathtree.config import TreeConfig
from pathtree.paths import PathSyntax
from pathtree.permissions import Permissions
from pathtree.types import EntryKind, TreeEntry


class Display:
    """Console output helpers (non-interactive)."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize display.

        Args:
            console: Console to print to; a new one by default.
        """
        self.console = console or Console()

    def show_tree(self, root: str, entries: Iterable[TreeEntry], syntax: PathSyntax) -> None:
        """Render walk entries as a tree.

        Args:
            root: Label for the root node.
            entries: Entries in walk order (root entry first).
            syntax: Syntax used to find each entry's parent.
        """
        tree = Tree(f"[bold]{escape(root)}[/bold]")
        nodes: dict[str, Tree] = {"": tree}
        for entry in entries:
            if entry.path == "":
                continue
            parent = syntax.directory(entry.path)
            node = nodes.get("" if parent == "." else parent, tree)
            name = escape(syntax.base(entry.path))
            if entry.kind is EntryKind.DIRECTORY:
                nodes[entry.path] = node.add(f"[blue]{name}[/blue]")
            elif entry.kind is EntryKind.SYMLINK_TO_DIRECTORY:
                node.add(f"[cyan]{name}[/cyan] [dim](link)[/dim]")
            else:
                node.add(name)
        self.console.print(tree)

    def show_lines(self, lines: Iterable[str]) -> None:
        """Print one value per line without markup."""
        for line in lines:
            self.console.print(line, markup=False, highlight=False)

    def show_permissions(self, path: str, permissions: Permissions) -> None:
        """Display permissions of a path."""
        table = Table(title=escape(path))
        table.add_column("Role", style="cyan")
        table.add_column("Read")
        table.add_column("Write")
        table.add_column("Execute")
        for role in ("owner", "group", "other"):
            rights = getattr(permissions, role)
            table.add_row(
                role,
                "yes" if rights.read else "-",
                "yes" if rights.write else "-",
                "yes" if rights.execute else "-",
            )
        self.console.print(table)
        self.console.print(f"  {permissions} ({permissions.to_number():03o})")

    def show_config(self, config: TreeConfig, config_dir: FsPath, defaults: Permissions) -> None:
        """Display the effective configuration."""
        self.console.print("\n[bold]Configuration[/bold]")
        self.console.print(f"  Config directory: {escape(str(config_dir))}")
        self.console.print(f"  Separator: {config.separator}")
        self.console.print(
            f"  Default mode: {defaults.to_number():03o}"
            + ("" if config.default_mode else " (from umask)")
        )

    def show_success(self, message: str) -> None:
        """Show success message."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def show_error(self, message: str) -> None:
        """Show error message."""
        self.console.print(f"[red]✗[/red] {escape(message)}")
