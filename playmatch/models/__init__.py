"""
Models package for Playmatch.

This package provides convenient imports for all data models:
- ErrorPolicy: Enum for handling unreadable candidates
- MatchRecord: Per-query match outcome
- MatchSummary: Matching workflow summary
"""

from .error_policy import ErrorPolicy
from .data_models import MatchRecord, MatchSummary

__all__ = [
    "ErrorPolicy",
    "MatchRecord",
    "MatchSummary",
]
