"""Output formatting utilities for CLI commands.

Table output is rendered with rich; JSON output goes to stdout unstyled so it
can be piped.
"""

import json
from typing import Any, Callable, Optional, Sequence

from rich.console import Console
from rich.table import Table

from vnquote.quote.formatting import format_vnd


class OutputFormatter:
    """Handles consistent output formatting across CLI commands."""

    def __init__(self, format_type: str = "table", console: Optional[Console] = None):
        """Initialize formatter.

        Args:
            format_type: Output format - 'json' or 'table'.
            console: Console for table output (defaults to stdout).
        """
        self.format_type = format_type
        self.console = console or Console()

    @property
    def is_json(self) -> bool:
        """Check if output should be JSON."""
        return self.format_type == "json"

    def output(self, data: Any, table_fn: Callable[[], None]) -> None:
        """Output data in the configured format.

        Args:
            data: Data to output (used directly for JSON).
            table_fn: Function to call for table output (no args).
        """
        if self.is_json:
            self.print_json(data)
        else:
            table_fn()

    def print_json(self, data: Any) -> None:
        """Print data as JSON."""
        print(json.dumps(data, indent=2, ensure_ascii=False))

    def print_header(self, title: str) -> None:
        """Print a formatted header for table output."""
        if not self.is_json:
            self.console.rule(f"[bold]{title}")

    def print_section(self, title: str) -> None:
        """Print a section header for table output."""
        if not self.is_json:
            self.console.print(f"\n[bold cyan]{title}")

    def print_line(self, label: str, value: Any) -> None:
        """Print a label/value pair for table output."""
        if not self.is_json:
            self.console.print(f"  {label}: {value}")

    def print_table(
        self,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        title: Optional[str] = None,
        numeric_from: int = 1,
    ) -> None:
        """Print rows as a rich table.

        Columns from ``numeric_from`` on are right-aligned.
        """
        if self.is_json:
            return
        table = Table(title=title, show_lines=False)
        for index, column in enumerate(columns):
            table.add_column(column, justify="right" if index >= numeric_from else "left")
        for row in rows:
            table.add_row(*(str(cell) for cell in row))
        self.console.print(table)

    def print_error(self, message: str) -> None:
        """Print an error in either format."""
        if self.is_json:
            self.print_json({"error": message})
        else:
            self.console.print(f"[red]Error:[/red] {message}")


def money(value: int) -> str:
    """Format a VND amount for a table cell."""
    return format_vnd(value)
