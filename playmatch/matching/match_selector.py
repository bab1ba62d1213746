"""First-match candidate selection for Playmatch.

This module provides the MatchSelector class, which walks an ordered
candidate sequence and returns the first candidate the comparator judges
similar to a query file.

Example:
    >>> from playmatch.matching import MatchSelector
    >>> selector = MatchSelector()
    >>> match = selector.select_match(Path("main/1.mp3"), candidates)
    >>> print(match or "notfound")
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from playmatch.comparison import SimilarityComparator
from playmatch.models import ErrorPolicy

logger = logging.getLogger(__name__)


class MatchSelector:
    """Selects the first similar candidate for a query file.

    Candidates are tried strictly in the order given, and scanning stops at
    the first similar one. How comparison I/O errors are handled depends on
    the error policy:

    - ErrorPolicy.ABORT: the error propagates to the caller unchanged.
    - ErrorPolicy.SKIP: the error is logged and recorded, and the scan moves
      on to the next candidate.

    Attributes:
        comparator: SimilarityComparator used for every pairwise decision.
        error_policy: How comparison errors are handled.
        _errors: Error messages recorded under the SKIP policy.

    Example:
        >>> selector = MatchSelector(error_policy=ErrorPolicy.SKIP)
        >>> selector.select_match(query, candidates)
        >>> for error in selector.get_errors():
        ...     print(error)
    """

    def __init__(
        self,
        comparator: Optional[SimilarityComparator] = None,
        error_policy: ErrorPolicy = ErrorPolicy.ABORT,
    ) -> None:
        """Initialize the MatchSelector.

        Args:
            comparator: Optional SimilarityComparator instance. If not
                provided, one with default thresholds is created.
            error_policy: Error handling policy. Defaults to ABORT.
        """
        self.comparator = comparator if comparator is not None else SimilarityComparator()
        self.error_policy = error_policy
        self._errors: List[str] = []

    def select_match(self, query: Path, candidates: Iterable[Path]) -> Optional[Path]:
        """Return the first candidate similar to ``query``.

        Args:
            query: The query file.
            candidates: Candidate files, in the order they should be tried.

        Returns:
            The first similar candidate, or None if no candidate matches.

        Raises:
            OSError: Under ErrorPolicy.ABORT, if any comparison fails.
        """
        for candidate in candidates:
            try:
                if self.comparator.compare(query, candidate):
                    logger.debug("found: %s is similar to %s", query, candidate)
                    return candidate
            except OSError as e:
                if self.error_policy is ErrorPolicy.ABORT:
                    raise
                message = f"Skipped {candidate} while matching {query}: {e}"
                logger.warning(message)
                self._errors.append(message)

        logger.debug("notfound: %s", query)
        return None

    def get_errors(self) -> List[str]:
        """Get list of errors recorded under the SKIP policy.

        Returns:
            List of error message strings.
        """
        return self._errors.copy()

    def clear_errors(self) -> None:
        """Clear the list of accumulated errors."""
        self._errors.clear()
