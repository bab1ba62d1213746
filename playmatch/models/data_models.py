"""
Core data models for Playmatch.

This module contains the following dataclasses:
- MatchRecord: The outcome of matching one query file against the candidate pool
- MatchSummary: Summary of a complete matching run
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class MatchRecord:
    """Represents the outcome for a single query file."""
    query: Path                       # Query file from the main directory
    candidate: Optional[Path] = None  # First similar candidate (None if unmatched)

    @property
    def matched(self) -> bool:
        """Whether a similar candidate was found for the query."""
        return self.candidate is not None


@dataclass
class MatchSummary:
    """Summary of the matching workflow returned by MatchOrchestrator."""
    total_queries: int = 0            # Query files processed
    matched: int = 0                  # Queries with a similar candidate
    unmatched: int = 0                # Queries recorded as notfound
    total_candidates: int = 0         # Candidate files discovered
    comparisons: int = 0              # Comparator invocations
    size_gate_rejections: int = 0     # Comparisons rejected without reading content
    bytes_compared: int = 0           # Bytes read from each side during content scans
    errors: List[str] = field(default_factory=list)  # All error messages
    duration_seconds: float = 0.0     # Total workflow duration in seconds
    interrupted: bool = False         # Whether the workflow was interrupted by user
