"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output:
colored status messages, a spinner while a document is analyzed, and the
per-document analysis summary. Supports verbosity levels and --no-color.
"""

from contextlib import contextmanager
from typing import Iterator, List

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner
from rich.table import Table

from migrate_confluence.analyzer.models import AnalysisSummary
from migrate_confluence.map_store.models import DataConflict


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Analysis completed")
        >>> with handler.spinner("Analyzing entities.xml..."):
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{message}[/dim]")

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner while a single operation runs.

        Args:
            message: Message to display with spinner
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10):
            yield

    def print_summary(self, summary: AnalysisSummary) -> None:
        """Display the analysis summary of one document.

        Args:
            summary: Counts collected by the analyzer
        """
        title = "Analysis Summary"
        if summary.document_path:
            title = f"Analysis Summary: {summary.document_path}"

        table = Table(title=title, show_header=False, title_justify="left")
        table.add_column("Item")
        table.add_column("Count", justify="right")
        table.add_row("Spaces", str(summary.spaces))
        table.add_row("Pages resolved", str(summary.pages_resolved))
        table.add_row("Pages skipped", str(summary.pages_skipped))
        table.add_row("Invalid titles", str(summary.pages_invalid))
        table.add_row("Page attachments", str(summary.page_attachments))
        table.add_row("Other attachments", str(summary.swept_files))
        table.add_row("Conflicts", str(summary.conflicts))
        self.console.print(table)

        if summary.pages_invalid > 0:
            self.warning(
                f"{summary.pages_invalid} page(s) have invalid titles, "
                f"see title-invalids in the workspace"
            )

    def print_conflicts(self, conflicts: List[DataConflict]) -> None:
        """Display refused conflicting writes (only if verbosity >= 1).

        Args:
            conflicts: Conflicts recorded by the map store
        """
        if not conflicts or self.verbosity < 1:
            return

        self.console.print(f"\n[bold]Conflicting entries ({len(conflicts)}):[/bold]")
        for conflict in conflicts:
            self.console.print(
                f"  [red]⚡[/red] {conflict.table}: '{conflict.key}' keeps "
                f"'{conflict.kept}', rejected '{conflict.rejected}'"
            )
