"""Path normalization for manifest output.

Manifest lines use forward slashes and always start with ``/``. An optional
prefix (for example a Windows drive and home directory) can be removed so
that the playlist is portable to another machine.

Example:
    >>> normalizer = PathNormalizer(strip_prefix="C:/Users/me/cygwin64")
    >>> normalizer.normalize("C:/Users/me/cygwin64/home/me/a.mp3")
    '/home/me/a.mp3'
"""

from pathlib import Path
from typing import Optional, Union


class PathNormalizer:
    """Maps native file paths to their portable manifest form.

    Attributes:
        strip_prefix: Slash-normalized prefix removed from the start of
            every path, or None to keep paths whole.
    """

    def __init__(self, strip_prefix: Optional[str] = None) -> None:
        """Initialize the PathNormalizer.

        Args:
            strip_prefix: Optional prefix to remove. Backslashes in it are
                treated as forward slashes.
        """
        self.strip_prefix = strip_prefix.replace("\\", "/") if strip_prefix else None

    def normalize(self, path: Union[Path, str]) -> str:
        """Normalize a single path.

        Args:
            path: Native file path.

        Returns:
            The path with forward slashes, the prefix removed, and a leading
            ``/``.
        """
        normalized = str(path).replace("\\", "/")
        if self._starts_with_prefix(normalized):
            normalized = normalized[len(self.strip_prefix):]
        if not normalized.startswith("/"):
            normalized = "/" + normalized
        return normalized

    def _starts_with_prefix(self, normalized: str) -> bool:
        """Return True if the prefix covers whole path segments of ``normalized``."""
        if not self.strip_prefix or not normalized.startswith(self.strip_prefix):
            return False
        rest = normalized[len(self.strip_prefix):]
        return self.strip_prefix.endswith("/") or rest == "" or rest.startswith("/")
