"""Presenters for sanitization statistics in the CLI."""

from rich.console import Console
from rich.table import Table

from src.conversion.pipeline import SanitizeStats


class SanitizeStatsPresenter:
    """Renders SanitizeStats as a Rich table. Presentation logic only."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def present(self, stats: SanitizeStats) -> None:
        if not stats.changed:
            self.console.print("[dim]No changes: request forwarded unchanged[/dim]")
            return

        table = Table(title="Sanitization Stats")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green", justify="right")

        table.add_row("Fields removed/converted", str(stats.total_removed))
        table.add_row("Messages flattened", str(stats.flattened_messages))
        table.add_row("System merged", "yes" if stats.merged_system else "no")

        self.console.print(table)
