"""Rich-based reporting for the iofs command line."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from iofs.fs.filedir import EntryHandle
    from iofs.types import EntryInfo


def format_size(size: int) -> str:
    """Human-readable byte count."""
    if size < 1024:
        return f"{size} B"
    value = size / 1024
    for unit in ("KB", "MB"):
        if value < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


class TUI:
    """Non-interactive terminal output for iofs commands."""

    def __init__(self, console: Console | None = None, color: bool = True) -> None:
        """Initialize TUI.

        Args:
            console: Rich console to print to. Created if not provided.
            color: Allow colored output.
        """
        self.console = console or Console(no_color=not color)

    def show_entries(self, directory: str, entries: list[EntryHandle]) -> None:
        """Display a directory listing.

        Args:
            directory: Listed directory path, used as the table title.
            entries: Children to display.
        """
        if not entries:
            self.console.print(f"[yellow]{escape(directory)} is empty[/yellow]")
            return

        table = Table(title=directory)
        table.add_column("Name", style="cyan")
        table.add_column("Kind")
        table.add_column("Size", justify="right")

        for entry in entries:
            kind = entry.kind.name.lower()
            name = f"{entry.name()}/" if kind == "directory" else entry.name()
            table.add_row(name, kind, format_size(entry.size_bytes()))

        self.console.print(table)

    def show_info(self, info: EntryInfo) -> None:
        """Display an entry snapshot.

        Args:
            info: Snapshot to display.
        """
        table = Table(show_header=False)
        table.add_column("Field", style="bold")
        table.add_column("Value")
        table.add_row("Path", info.path)
        table.add_row("Name", info.name)
        table.add_row("Extension", info.extension or "-")
        table.add_row("Kind", info.kind)
        table.add_row("Size", format_size(info.size_bytes))
        table.add_row("Modified", info.modified.strftime("%Y-%m-%d %H:%M") if info.modified else "-")
        if info.content_type:
            table.add_row("Content type", info.content_type)
        self.console.print(table)

    def show_value(self, label: str, value: object) -> None:
        self.console.print(f"[bold]{escape(label)}:[/bold] {escape(str(value))}")

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

    def show_warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {escape(message)}")

    def show_info_message(self, message: str) -> None:
        self.console.print(f"[blue]i[/blue] {escape(message)}")
