"""Manifest output package for Playmatch.

Example:
    >>> from playmatch.output import ManifestWriter, PathNormalizer
    >>> writer = ManifestWriter(Path("playlist.txt"), PathNormalizer())
    >>> writer.write(records)
"""

from .manifest_writer import (
    NOT_FOUND_PREFIX,
    ManifestWriter,
    render_manifest,
    render_record,
)
from .path_normalizer import PathNormalizer

__all__ = [
    "NOT_FOUND_PREFIX",
    "ManifestWriter",
    "PathNormalizer",
    "render_manifest",
    "render_record",
]
