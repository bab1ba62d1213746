"""MatchOrchestrator for coordinating a complete matching run.

This module provides the MatchOrchestrator class, which ties FileScanner,
MatchSelector, MatchTUI, ManifestWriter and MatchLogger together: queries are
processed one at a time in sorted order, each against the full candidate pool,
and the resulting records are written as the playlist manifest.

Example:
    from playmatch.orchestration import MatchOrchestrator
    from pathlib import Path

    orchestrator = MatchOrchestrator(
        main_dir=Path("/music/_DUPEFIND/1.Main"),
        candidate_root=Path("/music/Artists"),
    )
    summary = orchestrator.run_workflow(
        ManifestWriter(Path("playlist.txt"), PathNormalizer())
    )
"""

import logging
import time
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from playmatch.comparison import SimilarityComparator
from playmatch.matching import MatchSelector, sort_query_files
from playmatch.models import ErrorPolicy, MatchRecord, MatchSummary
from playmatch.orchestration.match_logger import MatchLogger
from playmatch.output import ManifestWriter, PathNormalizer
from playmatch.scanning import FileScanner
from playmatch.ui import MatchTUI

logger = logging.getLogger(__name__)


class MatchOrchestrator:
    """Orchestrates scanning, matching and manifest output.

    The run is strictly sequential: one query at a time, in query order, and
    for each query one candidate at a time, in candidate order. Records are
    therefore produced in query order, at most one per query.

    Attributes:
        main_dir: Directory holding the query files.
        candidate_root: Root of the recursively scanned candidate pool.
        normalizer: PathNormalizer used for console and log output.
        verbose: Whether to print every record as it is produced.
    """

    def __init__(
        self,
        main_dir: Path,
        candidate_root: Path,
        comparator: Optional[SimilarityComparator] = None,
        error_policy: ErrorPolicy = ErrorPolicy.ABORT,
        normalizer: Optional[PathNormalizer] = None,
        verbose: bool = False,
        tui: Optional[MatchTUI] = None,
    ) -> None:
        """Initialize the MatchOrchestrator.

        Args:
            main_dir: Directory holding the query files.
            candidate_root: Root of the candidate pool.
            comparator: Optional SimilarityComparator. Defaults to one with
                default thresholds.
            error_policy: What to do when a comparison fails. Defaults to ABORT.
            normalizer: Optional PathNormalizer for display. Defaults to one
                without a prefix.
            verbose: If True, print each record as it is produced.
            tui: Optional MatchTUI for console output.

        Raises:
            ValueError: If either directory does not exist or is not a directory.
        """
        for label, directory in (("Main directory", main_dir), ("Candidate root", candidate_root)):
            if not directory.exists():
                raise ValueError(f"{label} does not exist: {directory}")
            if not directory.is_dir():
                raise ValueError(f"{label} is not a directory: {directory}")

        self.main_dir = main_dir.absolute()
        self.candidate_root = candidate_root.absolute()
        self.normalizer = normalizer if normalizer is not None else PathNormalizer()
        self.verbose = verbose

        self._comparator = comparator if comparator is not None else SimilarityComparator()
        self._scanner = FileScanner()
        self._selector = MatchSelector(self._comparator, error_policy)
        self._tui = tui if tui is not None else MatchTUI()
        self._error_policy = error_policy

        self._queries: Optional[List[Path]] = None
        self._candidates: Optional[List[Path]] = None

    @property
    def comparator(self) -> SimilarityComparator:
        """The SimilarityComparator used for every decision."""
        return self._comparator

    def scan(self) -> Tuple[List[Path], List[Path]]:
        """List and sort the query files and collect the candidate pool.

        Returns:
            Tuple of (sorted_queries, candidates).

        Raises:
            OSError: If either root directory cannot be listed.
        """
        self._scanner.clear_errors()
        self._queries = sort_query_files(self._scanner.list_query_files(self.main_dir))
        self._candidates = self._scanner.collect_candidates(self.candidate_root)
        logger.info(
            "Found %d query files and %d candidate files",
            len(self._queries), len(self._candidates),
        )
        return self._queries, self._candidates

    def run(
        self, progress_callback: Optional[Callable[[int], None]] = None
    ) -> List[MatchRecord]:
        """Match every query file against the candidate pool.

        Scans first if ``scan()`` has not been called yet.

        Args:
            progress_callback: Optional callable receiving the number of
                completed queries after each one.

        Returns:
            One MatchRecord per query file, in query order.

        Raises:
            OSError: Under ErrorPolicy.ABORT, if any comparison fails.
        """
        if self._queries is None or self._candidates is None:
            self.scan()

        self._selector.clear_errors()
        records: List[MatchRecord] = []

        for completed, query in enumerate(self._queries, start=1):
            logger.info("Processing main file: %s", query.stem)
            candidate = self._selector.select_match(query, self._candidates)
            record = MatchRecord(query=query, candidate=candidate)
            records.append(record)

            if self.verbose:
                self._tui.display_record(record, self.normalizer)
            if progress_callback is not None:
                progress_callback(completed)

        return records

    def build_summary(
        self,
        records: List[MatchRecord],
        duration: float,
        interrupted: bool = False,
    ) -> MatchSummary:
        """Aggregate statistics for a run.

        Args:
            records: Records produced by ``run()``.
            duration: Duration of the run in seconds.
            interrupted: Whether the run was interrupted by the user.

        Returns:
            MatchSummary with counts, comparator statistics and errors.
        """
        stats = self._comparator.get_stats()
        matched = sum(1 for record in records if record.matched)

        return MatchSummary(
            total_queries=len(records),
            matched=matched,
            unmatched=len(records) - matched,
            total_candidates=len(self._candidates or []),
            comparisons=stats["comparisons"],
            size_gate_rejections=stats["size_gate_rejections"],
            bytes_compared=stats["bytes_compared"],
            errors=self._scanner.get_errors() + self._selector.get_errors(),
            duration_seconds=duration,
            interrupted=interrupted,
        )

    def run_workflow(
        self,
        manifest_writer: ManifestWriter,
        run_logger: Optional[MatchLogger] = None,
    ) -> MatchSummary:
        """Execute the complete scan, match and write workflow.

        The manifest is only written once every query has been processed.
        If the user interrupts the run, no manifest is written and the
        returned summary is marked as interrupted. Comparison errors under
        ErrorPolicy.ABORT propagate after being recorded in the run log.

        Args:
            manifest_writer: Destination of the playlist manifest.
            run_logger: Optional open MatchLogger.

        Returns:
            MatchSummary for the run.

        Raises:
            OSError: If scanning, comparing (under ABORT) or writing fails.
        """
        start_time = time.time()
        self._comparator.reset_stats()

        # Fail before the expensive part if the manifest can't be written
        manifest_writer.validate()

        queries, candidates = self.scan()
        self._tui.display_run_header(
            self.main_dir, self.candidate_root, len(queries), len(candidates)
        )

        if run_logger is not None:
            run_logger.log_header()
            run_logger.log_scan_phase(
                main_dir=self.main_dir,
                candidate_root=self.candidate_root,
                comparator=self._comparator,
                query_count=len(queries),
                candidate_count=len(candidates),
                scan_errors=self._scanner.get_errors(),
            )

        progress, callback = self._tui.create_progress_callback(len(queries))
        try:
            with progress:
                records = self.run(progress_callback=callback)
        except KeyboardInterrupt:
            summary = self.build_summary([], time.time() - start_time, interrupted=True)
            if run_logger is not None:
                run_logger.log_summary(summary)
            self._tui.console.print("\n[yellow]Run interrupted by user.[/yellow]")
            return summary
        except OSError as e:
            if run_logger is not None:
                run_logger.log_failure(e)
            raise

        manifest_path = manifest_writer.write(records)
        summary = self.build_summary(records, time.time() - start_time)

        if run_logger is not None:
            for record in records:
                run_logger.log_record(record, self.normalizer)
            run_logger.log_summary(summary)

        self._tui.display_summary(summary, manifest_path)
        return summary
