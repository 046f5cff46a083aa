"""Rich output for the command line."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from buildfs.protocols import FileSystem


class Output:
    """Text output for buildfs commands."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize output.

        Args:
            console: Console to print to. Defaults to a new stdout Console.
        """
        self.console = console or Console()

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.console.print(f"[red]✗[/red] {escape(message)}")

    def show_text(self, text: str) -> None:
        """Print plain text without markup processing or wrapping."""
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def show_listing(self, path: str, names: list[str]) -> None:
        """Display directory entries, one per line."""
        if not names:
            self.console.print(f"[yellow]{escape(path)} is empty[/yellow]")
            return
        for name in names:
            self.show_text(name)

    def show_info(self, fs: FileSystem, path: str) -> None:
        """Display kind and permission bits of a path as a table.

        Args:
            fs: Filesystem to query.
            path: Path to describe.
        """
        kind = fs.entry_type(path)

        table = Table(title=path)
        table.add_column("Property", style="cyan")
        table.add_column("Value")
        table.add_row("Type", kind.value if kind else "unknown")
        table.add_row("Readable", _yes_no(fs.is_readable(path)))
        table.add_row("Writable", _yes_no(fs.is_writable(path)))
        table.add_row("Executable", _yes_no(fs.is_executable(path)))
        if kind is not None:
            table.add_row("Resolved", fs.resolve_path(path) or "-")

        self.console.print(table)


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"
