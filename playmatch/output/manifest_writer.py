"""Manifest rendering and writing.

Each MatchRecord renders as one manifest line:

- matched: the normalized candidate path
- unmatched: ``notfound:`` followed by the normalized query path

Lines are joined with ``\\n`` and the file has no trailing newline.
"""

import logging
from pathlib import Path
from typing import Iterable

from playmatch.models import MatchRecord

from .path_normalizer import PathNormalizer

NOT_FOUND_PREFIX = "notfound:"

logger = logging.getLogger(__name__)


def render_record(record: MatchRecord, normalizer: PathNormalizer) -> str:
    """Render one MatchRecord as a manifest line."""
    if record.candidate is not None:
        return normalizer.normalize(record.candidate)
    return NOT_FOUND_PREFIX + normalizer.normalize(record.query)


def render_manifest(records: Iterable[MatchRecord], normalizer: PathNormalizer) -> str:
    """Render all records, in order, as the manifest content."""
    return "\n".join(render_record(record, normalizer) for record in records)


class ManifestWriter:
    """Writes the complete manifest to a file.

    Attributes:
        output_path: Destination of the manifest.
        normalizer: PathNormalizer used for every line.

    Example:
        >>> writer = ManifestWriter(Path("playlist.txt"), PathNormalizer())
        >>> writer.write(records)
        PosixPath('playlist.txt')
    """

    def __init__(self, output_path: Path, normalizer: PathNormalizer) -> None:
        """Initialize the ManifestWriter.

        Args:
            output_path: File the manifest is written to.
            normalizer: PathNormalizer applied to every path.
        """
        self.output_path = Path(output_path)
        self.normalizer = normalizer

    def validate(self) -> None:
        """Check that the manifest can be written.

        Raises:
            OSError: If the parent directory doesn't exist or is not a directory.
        """
        parent = self.output_path.parent
        if not parent.exists():
            raise OSError(f"Parent directory does not exist: {parent}")
        if not parent.is_dir():
            raise OSError(f"Parent path is not a directory: {parent}")

    def write(self, records: Iterable[MatchRecord]) -> Path:
        """Render and write the manifest, replacing any existing file.

        Args:
            records: MatchRecords in output order.

        Returns:
            The path the manifest was written to.

        Raises:
            OSError: If the file cannot be written.
        """
        self.validate()
        content = render_manifest(records, self.normalizer)
        # File names that are not valid UTF-8 keep their original bytes
        self.output_path.write_text(content, encoding="utf-8", errors="surrogateescape")
        logger.debug("Manifest written to %s", self.output_path)
        return self.output_path
