"""File discovery for the query directory and the candidate pool.

This module provides the FileScanner class, which lists the query files of
the main directory and recursively collects candidate files under a root.

Example:
    >>> from playmatch.scanning import FileScanner
    >>> scanner = FileScanner()
    >>> candidates = scanner.collect_candidates(Path("/music/Artists"))
    >>> queries = scanner.list_query_files(Path("/music/_DUPEFIND/1.Main"))
    >>> print(f"{len(queries)} queries, {len(candidates)} candidates")
"""

import logging
import os
import stat
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


class FileScanner:
    """Collects regular files for matching.

    Only regular files count: symlinks, directories and special files are
    ignored. Directory symlinks are never followed, so the walk cannot cycle.

    Candidates are returned in a sorted walk order (directory names and file
    names sorted at each level). The order decides which candidate wins when
    several are similar to one query, so it must not depend on the
    filesystem's listing order.

    Attributes:
        _errors: List of error messages encountered during scanning.

    Example:
        >>> scanner = FileScanner()
        >>> files = scanner.collect_candidates(Path("/music/Artists"))
        >>> if scanner.get_errors():
        ...     print("some directories were unreadable")
    """

    def __init__(self) -> None:
        """Initialize the FileScanner with an empty error list."""
        self._errors: List[str] = []

    def collect_candidates(self, root: Path) -> List[Path]:
        """Recursively collect all regular files under ``root``.

        Nested directories that cannot be listed are skipped and recorded in
        the error list. Failing to list ``root`` itself is fatal.

        Args:
            root: Directory to walk.

        Returns:
            Candidate file paths in sorted walk order.

        Raises:
            ValueError: If root does not exist or is not a directory.
            OSError: If root itself cannot be listed.
        """
        self._validate_directory(root)
        root_str = str(root)

        def on_error(error: OSError) -> None:
            if error.filename == root_str:
                raise error
            message = f"Cannot read directory {error.filename}: {error.strerror}"
            logger.warning(message)
            self._errors.append(message)

        candidates: List[Path] = []
        for dirpath, dirnames, filenames in os.walk(root_str, onerror=on_error, followlinks=False):
            dirnames.sort()
            for filename in sorted(filenames):
                file_path = Path(dirpath) / filename
                if self._is_regular_file(file_path):
                    candidates.append(file_path)

        logger.debug("Collected %d candidate files under %s", len(candidates), root)
        return candidates

    def list_query_files(self, directory: Path) -> List[Path]:
        """List the regular files directly inside ``directory``.

        Subdirectories are not descended into. The listing is returned in
        filesystem order; callers apply the query ordering themselves.

        Args:
            directory: The main directory.

        Returns:
            Query file paths, unsorted.

        Raises:
            ValueError: If directory does not exist or is not a directory.
            OSError: If the directory cannot be listed.
        """
        self._validate_directory(directory)

        queries: List[Path] = []
        with os.scandir(directory) as entries:
            for entry in entries:
                if entry.is_file(follow_symlinks=False):
                    queries.append(directory / entry.name)

        logger.debug("Listed %d query files in %s", len(queries), directory)
        return queries

    def _validate_directory(self, directory: Path) -> None:
        """Raise ValueError unless ``directory`` is an existing directory."""
        if not directory.exists():
            raise ValueError(f"Directory does not exist: {directory}")
        if not directory.is_dir():
            raise ValueError(f"Not a directory: {directory}")

    def _is_regular_file(self, file_path: Path) -> bool:
        """Check for a regular, non-symlink file, recording stat failures."""
        try:
            return stat.S_ISREG(os.lstat(file_path).st_mode)
        except OSError as e:
            message = f"Error accessing {file_path}: {e}"
            logger.warning(message)
            self._errors.append(message)
            return False

    def get_errors(self) -> List[str]:
        """Get list of errors encountered during scanning operations.

        Returns:
            List of error message strings.
        """
        return self._errors.copy()

    def clear_errors(self) -> None:
        """Clear the list of accumulated errors."""
        self._errors.clear()
