"""History display functionality for GVT."""

import logging
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich import box

from .models import HistoryEntry, StatusReport, VersionInfo


logger = logging.getLogger(__name__)


def format_history(entries: List[HistoryEntry]) -> str:
    """Render history as ``<version>: <summary>`` lines."""
    return "".join(f"{entry.format()}\n" for entry in entries)


def format_version(info: VersionInfo) -> str:
    return f"Version: {info.version}\n{info.message}"


class HistoryView:
    """Renders repository history and status to a rich console."""

    def __init__(self, console: Optional[Console] = None, style: str = "plain"):
        """Initialize history view.

        Args:
            console: Rich console for output (creates new if None)
            style: 'plain' for one line per version, 'table' for a rich table
        """
        self.console = console or Console()
        self.style = style

    def _print_plain(self, text: str, end: str = "\n") -> None:
        self.console.print(text, end=end, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def show_history(self, entries: List[HistoryEntry]) -> None:
        if self.style == "table":
            self._display_history_table(entries)
        else:
            self._print_plain(format_history(entries), end="")

    def _display_history_table(self, entries: List[HistoryEntry]) -> None:
        if not entries:
            self.console.print("[yellow]No versions to show.[/yellow]")
            return

        table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
        table.add_column("Version", justify="right", style="cyan")
        table.add_column("Message")

        for entry in entries:
            table.add_row(str(entry.version), Text(entry.summary))

        self.console.print(table)
        logger.debug(f"Displayed {len(entries)} history entries")

    def show_status(self, report: StatusReport) -> None:
        self.console.print(f"HEAD: [bold cyan]{report.head}[/bold cyan]", highlight=False)
        self._print_plain(f"Last entry: {report.head_message}")
        if not report.tracked:
            self.console.print("[dim]No tracked files.[/dim]")
            return

        self.console.print(f"Tracked files ({len(report.tracked)}):")
        for name in report.tracked:
            self._print_plain(f"  {name}")
