"""Approximate file comparison by size and byte content.

This module provides the SimilarityComparator class, which decides whether two
files hold "the same" content even when they are not byte-for-byte identical.
The decision has two stages:

    1. Size gate: the smaller file must be at least ``size_tolerance`` times
       the size of the larger one. Files failing the gate are rejected
       without reading any content.
    2. Content scan: the overlapping region ``[0, min_size)`` is read in
       lockstep chunks and equal byte positions are counted. The count is
       divided by the size of the *larger* file, so a truncated tail costs
       exactly as much as corrupted bytes.

Example:
    >>> from playmatch.comparison import SimilarityComparator
    >>> comparator = SimilarityComparator(size_tolerance=0.9, content_threshold=0.95)
    >>> if comparator.compare(Path("a.mp3"), Path("b.mp3")):
    ...     print("same track")
"""

import logging
import os
from pathlib import Path
from typing import BinaryIO, Dict, Optional, Tuple

# Smaller file must be at least 90% the size of the larger one
DEFAULT_SIZE_TOLERANCE = 0.90

# At least 95% of the larger file's bytes must match
DEFAULT_CONTENT_THRESHOLD = 0.95

# Buffer size for chunked file reading (8KB)
CHUNK_SIZE = 8192

logger = logging.getLogger(__name__)


class ShortReadError(OSError):
    """Raised when a chunk read returns fewer bytes than the file size promised.

    This signals a file that was truncated or modified while it was being
    compared. It is never treated as the end of the comparison.
    """

    def __init__(self, file_path: Path, offset: int, requested: int, actual: int) -> None:
        super().__init__(
            f"Failed to read desired number of bytes from {file_path}: "
            f"requested {requested} at offset {offset}, got {actual}"
        )
        self.file_path = file_path
        self.offset = offset
        self.requested = requested
        self.actual = actual


class SimilarityComparator:
    """Decides whether two files are similar using a size gate and a byte scan.

    The comparator holds no per-file state: every call opens both files,
    decides, and closes them again before returning. Only running counters
    are kept, for reporting.

    Attributes:
        size_tolerance: Minimum ``min_size / max_size`` ratio (0.0-1.0).
        content_threshold: Minimum ``matching_bytes / max_size`` ratio (0.0-1.0).
        chunk_size: Number of bytes read from each file per step.

    Example:
        >>> comparator = SimilarityComparator()
        >>> comparator.compare(Path("1.mp3"), Path("Artists/x/song.mp3"))
        True
        >>> comparator.get_stats()
        {'comparisons': 1, 'size_gate_rejections': 0, 'bytes_compared': 4812311}
    """

    def __init__(
        self,
        size_tolerance: float = DEFAULT_SIZE_TOLERANCE,
        content_threshold: float = DEFAULT_CONTENT_THRESHOLD,
        chunk_size: int = CHUNK_SIZE,
    ) -> None:
        """Initialize the SimilarityComparator.

        Args:
            size_tolerance: Minimum size ratio between the smaller and the
                larger file. Must be between 0.0 and 1.0. Defaults to 0.90.
            content_threshold: Minimum share of the larger file's bytes that
                must match. Must be between 0.0 and 1.0. Defaults to 0.95.
            chunk_size: Bytes read per step. Must be positive. Defaults to 8192.

        Raises:
            ValueError: If a threshold is out of range or chunk_size < 1.
        """
        if not 0.0 <= size_tolerance <= 1.0:
            raise ValueError(
                f"size_tolerance must be between 0.0 and 1.0, got {size_tolerance}"
            )
        if not 0.0 <= content_threshold <= 1.0:
            raise ValueError(
                f"content_threshold must be between 0.0 and 1.0, got {content_threshold}"
            )
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")

        self.size_tolerance = size_tolerance
        self.content_threshold = content_threshold
        self.chunk_size = chunk_size

        self._comparisons: int = 0
        self._size_gate_rejections: int = 0
        self._bytes_compared: int = 0

    def compare(self, path_a: Path, path_b: Path) -> bool:
        """Decide whether two files are similar.

        Args:
            path_a: First file.
            path_b: Second file.

        Returns:
            True if the files pass the size gate and their similarity ratio
            reaches ``content_threshold``. Two empty files are similar; an
            empty file is never similar to a non-empty one.

        Raises:
            OSError: If either file cannot be opened, stat'ed or read.
            ShortReadError: If a chunk read comes back short.
        """
        similar, _ = self.measure(path_a, path_b)
        return similar

    def similarity_ratio(self, path_a: Path, path_b: Path) -> float:
        """Compute the raw similarity ratio of two files.

        Returns:
            ``matching_bytes / max_size``; 1.0 for two empty files and 0.0
            when the size gate rejects the pair.
        """
        _, ratio = self.measure(path_a, path_b)
        return ratio

    def measure(self, path_a: Path, path_b: Path) -> Tuple[bool, float]:
        """Compare two files and return both the verdict and the ratio.

        Args:
            path_a: First file.
            path_b: Second file.

        Returns:
            Tuple of (similar, ratio). A pair rejected by the size gate
            yields (False, 0.0).

        Raises:
            OSError: If either file cannot be opened, stat'ed or read.
        """
        ratio = self._evaluate(path_a, path_b)
        if ratio is None:
            return False, 0.0

        similar = ratio >= self.content_threshold
        logger.debug(
            "%s vs %s: ratio %.4f -> %s",
            path_a, path_b, ratio, "similar" if similar else "not similar",
        )
        return similar, ratio

    def _evaluate(self, path_a: Path, path_b: Path) -> Optional[float]:
        """Run both stages and return the ratio, or None if the size gate rejects.

        Both handles are opened in a single ``with`` statement so they are
        closed on every exit path, including a failing second open.
        """
        self._comparisons += 1

        with open(path_a, "rb") as file_a, open(path_b, "rb") as file_b:
            size_a = os.fstat(file_a.fileno()).st_size
            size_b = os.fstat(file_b.fileno()).st_size

            max_size = max(size_a, size_b)
            min_size = min(size_a, size_b)

            if max_size == 0:
                return 1.0

            if min_size == 0 or min_size / max_size < self.size_tolerance:
                self._size_gate_rejections += 1
                logger.debug(
                    "Size gate rejected %s (%d B) vs %s (%d B)",
                    path_a, size_a, path_b, size_b,
                )
                return None

            matching_bytes = self._count_matching_bytes(
                file_a, path_a, file_b, path_b, min_size
            )

        # Bytes past min_size in the larger file count as mismatches
        return matching_bytes / max_size

    def _count_matching_bytes(
        self,
        file_a: BinaryIO,
        path_a: Path,
        file_b: BinaryIO,
        path_b: Path,
        length: int,
    ) -> int:
        """Count equal byte positions in ``[0, length)`` of two open files.

        Args:
            file_a: Open handle of the first file, positioned at 0.
            path_a: Path of the first file (for error messages).
            file_b: Open handle of the second file, positioned at 0.
            path_b: Path of the second file (for error messages).
            length: Size of the overlapping region.

        Returns:
            Number of offsets at which both files hold the same byte.

        Raises:
            ShortReadError: If either read returns fewer bytes than requested.
        """
        matching = 0
        position = 0

        while position < length:
            read_size = min(self.chunk_size, length - position)

            chunk_a = file_a.read(read_size)
            if len(chunk_a) != read_size:
                raise ShortReadError(path_a, position, read_size, len(chunk_a))

            chunk_b = file_b.read(read_size)
            if len(chunk_b) != read_size:
                raise ShortReadError(path_b, position, read_size, len(chunk_b))

            matching += _count_equal_bytes(chunk_a, chunk_b)
            position += read_size

        self._bytes_compared += length
        return matching

    def get_stats(self) -> Dict[str, int]:
        """Get comparison statistics for reporting.

        Returns:
            Dictionary containing:
            - 'comparisons': Number of compare calls
            - 'size_gate_rejections': Pairs rejected without reading content
            - 'bytes_compared': Bytes scanned per side across all content scans
        """
        return {
            "comparisons": self._comparisons,
            "size_gate_rejections": self._size_gate_rejections,
            "bytes_compared": self._bytes_compared,
        }

    def reset_stats(self) -> None:
        """Reset all statistics counters to zero."""
        self._comparisons = 0
        self._size_gate_rejections = 0
        self._bytes_compared = 0


def _count_equal_bytes(chunk_a: bytes, chunk_b: bytes) -> int:
    """Count positions where two equal-length byte strings agree.

    XOR of the two chunks has a zero byte exactly where they agree.
    """
    if chunk_a == chunk_b:
        return len(chunk_a)
    diff = int.from_bytes(chunk_a, "big") ^ int.from_bytes(chunk_b, "big")
    return diff.to_bytes(len(chunk_a), "big").count(0)
