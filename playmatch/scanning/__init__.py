"""File scanning package for Playmatch.

This package provides the FileScanner, which lists the query files of the
main directory and recursively collects the candidate pool.

Example:
    >>> from playmatch.scanning import FileScanner
    >>> scanner = FileScanner()
    >>> candidates = scanner.collect_candidates(Path("/music/Artists"))
"""

from .file_scanner import FileScanner

__all__ = ["FileScanner"]
