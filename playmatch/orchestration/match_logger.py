"""MatchLogger for writing a structured run log.

This module provides the MatchLogger class, which writes a human-readable
log file with sections for the header, the scan phase, the per-query match
phase, and the summary.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TextIO

from playmatch.comparison import SimilarityComparator
from playmatch.models import ErrorPolicy, MatchRecord, MatchSummary
from playmatch.output import PathNormalizer


class MatchLogger:
    """Logger for matching runs with structured output format.

    Usage:
        with MatchLogger(log_file_path, error_policy=ErrorPolicy.SKIP) as logger:
            logger.log_header()
            logger.log_scan_phase(main_dir, candidate_root, comparator, 12, 3400)
            for record in records:
                logger.log_record(record, normalizer)
            logger.log_summary(summary)

    Attributes:
        SEPARATOR: The 65-character separator line used between sections.
    """

    SEPARATOR = "=" * 65

    def __init__(
        self,
        log_file_path: Path,
        error_policy: ErrorPolicy = ErrorPolicy.ABORT,
    ) -> None:
        """Initialize the MatchLogger.

        Args:
            log_file_path: Path of the log file.
            error_policy: Error policy of the run (shown in the header).

        Raises:
            OSError: If the log file path is not writable.
        """
        self._error_policy = error_policy
        self._start_timestamp = datetime.now()
        self._file_handle: Optional[TextIO] = None
        self._record_counter = 0

        self._log_file_path = Path(log_file_path)

        self._validate_path()

    def _validate_path(self) -> None:
        """Validate that the log file path is writable.

        Raises:
            OSError: If the parent directory doesn't exist or is not a directory.
        """
        parent = self._log_file_path.parent
        if not parent.exists():
            raise OSError(f"Parent directory does not exist: {parent}")
        if not parent.is_dir():
            raise OSError(f"Parent path is not a directory: {parent}")

    def __enter__(self) -> "MatchLogger":
        """Enter the context manager, opening the log file.

        Raises:
            OSError: If the file cannot be opened for writing.
        """
        try:
            self._file_handle = open(
                self._log_file_path, "w", encoding="utf-8", errors="surrogateescape"
            )
        except OSError as e:
            raise OSError(f"Cannot open log file for writing: {e}") from e
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit the context manager, closing the log file."""
        if self._file_handle is not None:
            try:
                self._file_handle.close()
            except OSError as e:
                print(f"Warning: Error closing log file: {e}", file=sys.stderr)
            finally:
                self._file_handle = None

    def get_log_path(self) -> Path:
        """Get the path to the log file."""
        return self._log_file_path

    def log_header(self) -> None:
        """Write the title, timestamp and error policy."""
        self._write_separator()
        self._write_line("Playmatch - Match Log")
        self._write_separator()
        self._write_line(f"Timestamp: {self._format_timestamp(self._start_timestamp)}")
        self._write_line(f"Error policy: {self._error_policy.value}")
        self._write_line("")

    def log_scan_phase(
        self,
        main_dir: Path,
        candidate_root: Path,
        comparator: SimilarityComparator,
        query_count: int,
        candidate_count: int,
        scan_errors: Optional[List[str]] = None,
    ) -> None:
        """Write the scan phase section to the log file.

        Args:
            main_dir: Directory holding the query files.
            candidate_root: Root of the candidate pool.
            comparator: Comparator whose thresholds are recorded.
            query_count: Number of query files.
            candidate_count: Number of candidate files.
            scan_errors: Directories or files that could not be scanned.
        """
        self._write_separator()
        self._write_line("SCAN PHASE")
        self._write_separator()
        self._write_line(f"Main directory: {main_dir}")
        self._write_line(f"Candidate root: {candidate_root}")
        self._write_line(f"Size tolerance: {comparator.size_tolerance:.2f}")
        self._write_line(f"Similarity threshold: {comparator.content_threshold:.2f}")
        self._write_line(f"Chunk size: {comparator.chunk_size} bytes")
        self._write_line(f"Query files: {query_count}")
        self._write_line(f"Candidate files: {candidate_count}")
        if scan_errors:
            self._write_line("Scan errors:")
            for error in scan_errors:
                self._write_line(f"- {error}", indent=2)
        self._write_line("")

    def log_record(self, record: MatchRecord, normalizer: PathNormalizer) -> None:
        """Write the outcome for one query file.

        Args:
            record: The MatchRecord to log.
            normalizer: PathNormalizer used to display the matched path.
        """
        if self._record_counter == 0:
            self._write_separator()
            self._write_line("MATCH PHASE")
            self._write_separator()

        self._record_counter += 1
        if record.candidate is not None:
            self._write_line(
                f"{self._record_counter}. found: {record.query.name} -> "
                f"{normalizer.normalize(record.candidate)}"
            )
        else:
            self._write_line(f"{self._record_counter}. notfound: {record.query.name}")

    def log_failure(self, error: BaseException) -> None:
        """Write a fatal error that ended the run before the manifest was written."""
        now = datetime.now()
        self._write_line("")
        self._write_line(f"[{self._format_timestamp(now)}] Run aborted: {error}")
        self._write_line("No manifest was written.")

    def log_summary(self, summary: MatchSummary) -> None:
        """Write the summary section to the log file.

        Args:
            summary: The MatchSummary object with aggregated statistics.
        """
        self._write_line("")
        self._write_separator()
        self._write_line("SUMMARY")
        self._write_separator()
        self._write_line(f"Query files: {summary.total_queries}")
        self._write_line(f"Matched: {summary.matched}")
        self._write_line(f"Not found: {summary.unmatched}")
        self._write_line(f"Comparisons: {summary.comparisons:,}")
        self._write_line(f"Rejected by size: {summary.size_gate_rejections:,}")
        self._write_line(f"Bytes compared: {summary.bytes_compared:,}")

        if summary.interrupted:
            self._write_line("Run interrupted by user; no manifest was written.")

        if summary.errors:
            self._write_line(f"Total errors: {len(summary.errors)}")
            self._write_line("Errors:")
            for error in summary.errors:
                self._write_line(f"- {error}", indent=2)

        self._write_line(f"Duration: {self._format_duration(summary.duration_seconds)}")
        self._write_line("")
        self._write_line(f"Log file: {self._log_file_path}")
        self._write_separator()

    def _format_duration(self, seconds: float) -> str:
        """Format duration in human-readable format.

        Args:
            seconds: Duration in seconds.

        Returns:
            Formatted string like "5m 23s", "1h 5m 30s", or "45s".
        """
        total_seconds = int(seconds)

        if total_seconds < 60:
            return f"{total_seconds}s"

        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        secs = total_seconds % 60

        if hours > 0:
            return f"{hours}h {minutes}m {secs}s"
        else:
            return f"{minutes}m {secs}s"

    def _format_timestamp(self, dt: datetime) -> str:
        """Format a datetime as 'YYYY-MM-DD HH:MM:SS'."""
        return dt.strftime("%Y-%m-%d %H:%M:%S")

    def _write_separator(self) -> None:
        """Write a separator line to the log file."""
        self._write_line(self.SEPARATOR)

    def _write_line(self, text: str, indent: int = 0) -> None:
        """Write a line to the log file with optional indentation.

        Args:
            text: The text to write.
            indent: Number of spaces to indent the line.
        """
        if self._file_handle is None:
            print(
                f"Warning: Attempted to write to closed log file: {text}",
                file=sys.stderr,
            )
            return

        try:
            self._file_handle.write(" " * indent + text + "\n")
        except OSError as e:
            print(f"Warning: Error writing to log file: {e}", file=sys.stderr)
