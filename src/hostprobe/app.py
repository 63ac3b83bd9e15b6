"""hostprobe - Textual summary application."""

import logging
import os

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import DataTable, Footer, Static

from hostprobe.models import SummaryRow
from hostprobe.summary import DEFAULT_FIELDS, Field, collect_summary

LOG_LEVEL_VARIABLE = "HOSTPROBE_LOG_LEVEL"


class SummaryTable(Container):
    """Container for the label/value table."""

    DEFAULT_CSS = """
    SummaryTable {
        height: 1fr;
        border: solid $primary;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the summary table."""
        yield DataTable(id="summary-table", show_cursor=False)

    def on_mount(self) -> None:
        """Add the columns when mounted."""
        self._ensure_columns(self.query_one("#summary-table", DataTable))

    def _ensure_columns(self, table: DataTable) -> None:
        if not table.columns:
            table.add_column("Field", key="label", width=18)
            table.add_column("Value", key="value")

    def update_rows(self, rows: list[SummaryRow]) -> None:
        """Replace the table contents with ``rows``."""
        table = self.query_one("#summary-table", DataTable)
        self._ensure_columns(table)
        table.clear()
        for row in rows:
            label = Text(row.label, style="bold cyan")
            value = Text(row.value, style="" if row.ok else "dim")
            table.add_row(label, value, key=row.label)


class FetchApp(App):
    """Main hostprobe application."""

    TITLE = "hostprobe"
    SUB_TITLE = "Host summary"

    CSS = """
    Screen {
        layout: vertical;
    }

    #banner {
        dock: top;
        height: auto;
        padding: 1;
        background: $surface;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("r", "reload", "Refresh"),
    ]

    def __init__(self, fields: list[Field] | None = None) -> None:
        """
        Initialize the FetchApp.

        Args:
            fields: Accessors to display. Defaults to every built-in probe.
        """
        super().__init__()
        self._fields = DEFAULT_FIELDS if fields is None else fields
        self._rows: list[SummaryRow] = []

    @property
    def rows(self) -> list[SummaryRow]:
        """Rows shown by the last refresh."""
        return list(self._rows)

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield Static("Collecting host information...", id="banner")
        yield SummaryTable()
        yield Footer()

    def on_mount(self) -> None:
        """Collect the summary once the widgets exist."""
        self.action_reload()

    def action_reload(self) -> None:
        """Re-read every probe and redraw."""
        self._rows = collect_summary(self._fields)
        self.query_one(SummaryTable).update_rows(self._rows)
        failed = sum(1 for row in self._rows if not row.ok)
        banner = f"{len(self._rows)} fields"
        if failed:
            banner += f", [yellow]{failed} unavailable[/yellow]"
        self.query_one("#banner", Static).update(banner)

    def action_quit(self) -> None:
        """Handle quit action."""
        self.exit()


def main() -> None:
    """Entry point for the hostprobe application."""
    level = os.environ.get(LOG_LEVEL_VARIABLE)
    if level:
        logging.basicConfig(level=level.upper())
    app = FetchApp()
    app.run()


if __name__ == "__main__":
    main()
