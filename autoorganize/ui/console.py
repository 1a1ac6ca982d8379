"""Console output of the autoorganize commands, using Rich."""

from typing import Iterable, List, Optional, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# level -> (style, marker)
MESSAGE_STYLES = {
    "success": ("green", "✓"),
    "warning": ("yellow", "!"),
    "error": ("bold red", "✗"),
}

Field = Tuple[str, str]


class ConsoleUI:
    """
    Rich console used by the command line.

    Commands either report an outcome (success, warning, error), show
    one record as a panel of labelled fields, or list records as a table.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def print(self, *args, **kwargs) -> None:
        self.console.print(*args, **kwargs)

    def _message(self, level: str, message: str) -> None:
        style, marker = MESSAGE_STYLES[level]
        self.console.print(f"[{style}]{marker} {message}[/{style}]")

    def print_success(self, message: str) -> None:
        self._message("success", message)

    def print_warning(self, message: str) -> None:
        self._message("warning", message)

    def print_error(self, message: str) -> None:
        self._message("error", message)

    def print_fields(
        self,
        fields: Iterable[Field],
        title: str = "",
        border_style: str = "blue"
    ) -> None:
        """
        Print labelled values in a bordered panel, one per line.

        Args:
            fields: (label, value) pairs; values may hold Rich markup.
            title: Panel title.
            border_style: Border color, usually the style of a status.
        """
        grid = Table.grid(padding=(0, 2))
        grid.add_column(style="bold", no_wrap=True)
        grid.add_column()
        for label, value in fields:
            grid.add_row(f"{label}:", value)
        self.console.print(Panel(grid, title=title, border_style=border_style, expand=False))

    def print_table(self, table: Table, empty_message: str = "") -> None:
        """Print a table, or only ``empty_message`` when it has no row."""
        if table.row_count == 0 and empty_message:
            self.console.print(f"[dim]{empty_message}[/dim]")
            return
        self.console.print(table)

    def print_counts(self, title: str, counts: List[Field]) -> None:
        """Print a two-column table of labels and right-aligned counts."""
        table = Table(title=title, show_header=True, header_style="bold magenta")
        table.add_column("Status")
        table.add_column("Files", justify="right")
        for label, count in counts:
            table.add_row(label, count)
        self.console.print(table)


console = ConsoleUI()
