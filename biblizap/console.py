"""Console UI for terminal output using Rich."""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from biblizap.engine.columns import COLUMNS
from biblizap.engine.sorting import SortState
from biblizap.engine.view import ViewSnapshot

_SORT_MARKS = {
    SortState.NONE: "",
    SortState.ASCENDING: " ▲",
    SortState.DESCENDING: " ▼",
}


def configure_logging(level: str = "INFO") -> None:
    """Route ``logging`` output through Rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


class ConsoleUI:
    """Rich-based console UI for result display and notifications."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize console."""
        self.console = console or Console()

    def warning(self, message: str) -> None:
        """Print a warning message in yellow."""
        self.console.print(f"[yellow]Warning:[/yellow] {message}")

    def error(self, message: str) -> None:
        """Print an error message in red."""
        self.console.print(f"[red]Error:[/red] {message}")

    def exported(self, count: int, filepath: Path) -> None:
        """Print export summary."""
        self.console.print(
            f"[green]Exported[/green] [bold]{count}[/bold] articles → {filepath}"
        )

    def display_results(self, snapshot: ViewSnapshot) -> None:
        """Display the current page as a table, followed by the pager.

        Args:
            snapshot: Render pass of the results view
        """
        table = Table(title=f"Articles ({snapshot.visible_count} of {snapshot.total_count})")
        table.add_column("", width=1)
        for column in COLUMNS:
            mark = _SORT_MARKS[snapshot.sort_states.get(column.key, SortState.NONE)]
            table.add_column(
                column.label + mark,
                justify="right" if column.kind == "number" else "left",
                overflow="fold",
                max_width=60 if column.key == "summary" else None,
            )

        for record in snapshot.rows:
            selected = "✓" if record.doi in snapshot.selected else ""
            cells = []
            for column in COLUMNS:
                text = column.text(record)
                cells.append(escape(text) if text is not None else "-")
            table.add_row(selected, *cells)

        self.console.print(table)

        if not snapshot.rows:
            self.console.print("No articles match the current filters.")
            return

        pager = " ".join(
            f"[bold reverse] {item.label} [/bold reverse]" if item.active else item.label
            for item in snapshot.pages
        )
        self.console.print(f"{snapshot.summary}    Pages: {pager}")
