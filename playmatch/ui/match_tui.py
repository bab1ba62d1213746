"""Terminal User Interface for Playmatch.

This module provides the MatchTUI class, a Rich-based console interface for
reporting the progress and results of a matching run.

Example:
    from playmatch.ui import MatchTUI

    tui = MatchTUI()
    tui.display_run_header(main_dir, candidate_root, query_count, candidate_count)
    progress, callback = tui.create_progress_callback(query_count)
    with progress:
        records = orchestrator.run(progress_callback=callback)
    tui.display_summary(summary, manifest_path)
"""

from pathlib import Path
from typing import Callable, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)
from rich.table import Table

from playmatch.models import MatchRecord, MatchSummary
from playmatch.output import PathNormalizer


class MatchTUI:
    """Rich-based console output for matching runs.

    Args:
        console: Optional Rich Console instance for output. If None, creates
            a new Console. Pass a custom Console for testing (e.g., with
            StringIO file for output capture).

    Attributes:
        console: The Rich Console instance used for all output.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize MatchTUI with optional custom console.

        Args:
            console: Optional Rich Console for output. Defaults to new Console().
        """
        self.console = console or Console()

    def display_run_header(
        self,
        main_dir: Path,
        candidate_root: Path,
        query_count: int,
        candidate_count: int,
    ) -> None:
        """Display the directories and file counts of the run.

        Args:
            main_dir: Directory holding the query files.
            candidate_root: Root of the candidate pool.
            query_count: Number of query files found.
            candidate_count: Number of candidate files found.
        """
        header_text = (
            f"Main directory: {main_dir}\n"
            f"Candidate root: {candidate_root}\n"
            f"Query files: {query_count:,}\n"
            f"Candidate files: {candidate_count:,}"
        )
        self.console.print(Panel(header_text, title="Playlist Match", border_style="blue"))

    def create_progress_callback(
        self, total_queries: int
    ) -> tuple[Progress, Callable[[int], None]]:
        """Create a progress bar and callback function for query tracking.

        The caller is responsible for using the returned Progress instance as
        a context manager so the bar renders and cleans up properly.

        Args:
            total_queries: Total number of query files to process.

        Returns:
            tuple[Progress, Callable[[int], None]]: The Progress instance and
            a callback taking the number of completed queries.

        Example:
            progress, callback = tui.create_progress_callback(12)
            with progress:
                orchestrator.run(progress_callback=callback)
        """
        progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
            console=self.console,
        )
        task_id = progress.add_task("Matching query files...", total=total_queries)

        def callback(completed: int) -> None:
            progress.update(task_id, completed=completed)

        return progress, callback

    def display_record(self, record: MatchRecord, normalizer: PathNormalizer) -> None:
        """Print the outcome for one query file."""
        name = record.query.stem
        if record.candidate is not None:
            self.console.print(
                f"[green]found:[/green] {name} is similar to "
                f"{normalizer.normalize(record.candidate)}"
            )
        else:
            self.console.print(f"[yellow]notfound:[/yellow] {name}")

    def display_summary(self, summary: MatchSummary, manifest_path: Optional[Path]) -> None:
        """Display final statistics after the run completes.

        Args:
            summary: MatchSummary with aggregated statistics.
            manifest_path: Where the manifest was written, or None if it
                was not written.
        """
        self.console.print(Panel("Match Summary", border_style="green"))

        table = Table(show_header=True, header_style="bold")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Query files", f"{summary.total_queries:,}")
        table.add_row("Matched", f"{summary.matched:,}")
        table.add_row("Not found", f"{summary.unmatched:,}")
        table.add_row("Candidate files", f"{summary.total_candidates:,}")
        table.add_row("Comparisons", f"{summary.comparisons:,}")
        table.add_row("Rejected by size", f"{summary.size_gate_rejections:,}")
        table.add_row("Bytes compared", self._format_size(summary.bytes_compared))
        table.add_row("Duration", self._format_duration(summary.duration_seconds))

        self.console.print(table)

        if summary.errors:
            self._display_errors(summary.errors)

        if manifest_path is not None:
            self.console.print(f"[green]Playlist file created:[/green] {manifest_path}")

    def _display_errors(self, errors: List[str]) -> None:
        """Display error messages in a separate panel.

        Args:
            errors: List of error messages to display.
        """
        max_display = 10
        displayed_errors = errors[:max_display]
        remaining = len(errors) - max_display

        error_text = "\n".join(f"- {e}" for e in displayed_errors)
        if remaining > 0:
            error_text += f"\n\n... and {remaining} more errors"

        error_panel = Panel(
            error_text,
            title=f"Errors ({len(errors)})",
            border_style="red",
        )
        self.console.print(error_panel)

    def _format_size(self, bytes_size: int) -> str:
        """Convert bytes to human-readable format.

        Args:
            bytes_size: Size in bytes.

        Returns:
            Human-readable size string (e.g., "10.5 MB", "1.2 GB").
        """
        if bytes_size < 1024:
            return f"{bytes_size} B"
        elif bytes_size < 1024 * 1024:
            return f"{bytes_size / 1024:.1f} KB"
        elif bytes_size < 1024 * 1024 * 1024:
            return f"{bytes_size / (1024 * 1024):.1f} MB"
        else:
            return f"{bytes_size / (1024 * 1024 * 1024):.1f} GB"

    def _format_duration(self, seconds: float) -> str:
        """Convert seconds to human-readable duration (e.g., "5m 23s")."""
        if seconds < 0:
            seconds = 0
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs}s"
