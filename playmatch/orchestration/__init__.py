"""Orchestration package for Playmatch workflows."""

from .match_logger import MatchLogger
from .match_orchestrator import MatchOrchestrator

__all__ = ["MatchLogger", "MatchOrchestrator"]
