"""Query file ordering for Playmatch.

Query files are put in "natural" order: names whose stems start with an
integer are compared numerically (``2`` before ``10``), everything else is
compared with the active locale's collation.

Example:
    >>> from playmatch.matching import sort_query_files
    >>> [p.name for p in sort_query_files([Path("10.mp3"), Path("2.mp3"), Path("1.mp3")])]
    ['1.mp3', '2.mp3', '10.mp3']
"""

import functools
import locale
import re
from pathlib import Path
from typing import Iterable, List, Optional

# Leading integer, as read by a lenient integer parse ("07 - intro" -> 7)
_LEADING_INT_PATTERN = re.compile(r'\s*([+-]?\d+)')


def _leading_int(stem: str) -> Optional[int]:
    match = _LEADING_INT_PATTERN.match(stem)
    if match is None:
        return None
    return int(match.group(1))


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare_query_names(name_a: str, name_b: str) -> int:
    """Compare two query file names.

    Extensions are stripped first. If both stems start with an integer the
    integers decide; otherwise the stems are compared with ``locale.strcoll``.
    Names that still tie are compared in full, so the order is total.

    Args:
        name_a: First file name.
        name_b: Second file name.

    Returns:
        Negative if ``name_a`` sorts first, positive if ``name_b`` does,
        zero only for identical names.
    """
    stem_a = Path(name_a).stem
    stem_b = Path(name_b).stem

    num_a = _leading_int(stem_a)
    num_b = _leading_int(stem_b)

    if num_a is not None and num_b is not None:
        result = _cmp(num_a, num_b)
    else:
        result = locale.strcoll(stem_a, stem_b)

    if result == 0:
        result = locale.strcoll(name_a, name_b) or _cmp(name_a, name_b)
    return result


def sort_query_files(paths: Iterable[Path]) -> List[Path]:
    """Sort query files into their output order.

    Args:
        paths: Query file paths in any order.

    Returns:
        New list ordered by ``compare_query_names`` on the file names.
    """
    key = functools.cmp_to_key(compare_query_names)
    return sorted(paths, key=lambda path: key(path.name))
