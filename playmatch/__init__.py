"""Playmatch - Content-based playlist matching.

A Python application that matches the files of an ordered "main" directory
against a pool of candidate files by approximate byte content and writes an
ordered playlist manifest.
"""

__version__ = "1.0.0"

from .models import ErrorPolicy, MatchRecord, MatchSummary

__all__ = [
    "__version__",
    "ErrorPolicy",
    "MatchRecord",
    "MatchSummary",
]


def main() -> None:
    """Entry point for the Playmatch CLI application.

    This function is called when the `playmatch` command is invoked after
    package installation via pip. It imports and runs the Typer app
    from the playmatch.cli module.
    """
    from playmatch.cli import app
    app()
