"""Match selection package for Playmatch.

This package contains the MatchSelector, which picks the first similar
candidate for a query file, and the query ordering helpers.

Example:
    >>> from playmatch.matching import MatchSelector, sort_query_files
    >>> selector = MatchSelector()
    >>> for query in sort_query_files(queries):
    ...     print(query, selector.select_match(query, candidates))
"""

from .match_selector import MatchSelector
from .ordering import compare_query_names, sort_query_files

__all__ = [
    "MatchSelector",
    "compare_query_names",
    "sort_query_files",
]
