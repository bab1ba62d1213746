"""File comparison package for Playmatch.

This package contains the SimilarityComparator, which decides whether two
files are the same recording despite small byte-level differences.

Example:
    >>> from playmatch.comparison import SimilarityComparator
    >>> comparator = SimilarityComparator()
    >>> comparator.compare(Path("main/1.mp3"), Path("Artists/a/song.mp3"))
    True
"""

from .file_comparator import (
    CHUNK_SIZE,
    DEFAULT_CONTENT_THRESHOLD,
    DEFAULT_SIZE_TOLERANCE,
    ShortReadError,
    SimilarityComparator,
)

__all__ = [
    "CHUNK_SIZE",
    "DEFAULT_CONTENT_THRESHOLD",
    "DEFAULT_SIZE_TOLERANCE",
    "ShortReadError",
    "SimilarityComparator",
]
