"""Console user interface package for Playmatch."""

from .match_tui import MatchTUI

__all__ = ["MatchTUI"]
