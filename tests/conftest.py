"""Pytest fixtures for Playmatch tests."""

import io
import tempfile
from pathlib import Path
from typing import Dict, Generator

import pytest
from rich.console import Console

from playmatch.comparison import SimilarityComparator
from playmatch.output import PathNormalizer
from playmatch.ui import MatchTUI


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests of a single component")
    config.addinivalue_line("markers", "integration: tests exercising several components on disk")


def make_content(size: int, seed: int = 0) -> bytes:
    """Build deterministic content; different seeds (mod 256) share no byte position."""
    return bytes((i * 7 + seed) % 256 for i in range(size))


def corrupt(content: bytes, count: int, step: int = 37) -> bytes:
    """Flip ``count`` bytes of ``content``, spread ``step`` bytes apart."""
    data = bytearray(content)
    for n in range(count):
        position = (n * step) % len(data)
        data[position] ^= 0xFF
    return bytes(data)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for isolated test environments.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def comparator() -> SimilarityComparator:
    """Return a SimilarityComparator with default thresholds."""
    return SimilarityComparator()


@pytest.fixture
def normalizer() -> PathNormalizer:
    """Return a PathNormalizer without a prefix."""
    return PathNormalizer()


@pytest.fixture
def captured_tui() -> MatchTUI:
    """Return a MatchTUI writing to an in-memory buffer.

    Read the output with ``captured_tui.console.file.getvalue()``.
    """
    console = Console(file=io.StringIO(), force_terminal=False, width=200)
    return MatchTUI(console=console)


@pytest.fixture
def music_library(temp_dir: Path) -> Dict[str, Path]:
    """Create a main directory and a candidate pool.

    Creates:
        temp_dir/
        ├── main/
        │   ├── 1.mp3     (1000 bytes, seed 1)
        │   ├── 2.mp3     (2000 bytes, seed 2)
        │   ├── 10.mp3    (1500 bytes, seed 10, no counterpart)
        │   └── extras/   (directory, ignored)
        └── Artists/
            ├── Alpha/
            │   └── song-two.mp3   (2.mp3 with 20 corrupted bytes)
            ├── Beta/
            │   ├── album/
            │   │   └── song-one.mp3   (exact copy of 1.mp3)
            │   └── unrelated.mp3  (1000 bytes, seed 99)
            └── tiny.mp3       (10 bytes)

    Args:
        temp_dir: Temporary directory fixture.

    Returns:
        Dictionary with the 'main' and 'artists' roots and individual files.
    """
    main = temp_dir / "main"
    main.mkdir()
    (main / "1.mp3").write_bytes(make_content(1000, seed=1))
    (main / "2.mp3").write_bytes(make_content(2000, seed=2))
    (main / "10.mp3").write_bytes(make_content(1500, seed=10))
    (main / "extras").mkdir()

    artists = temp_dir / "Artists"
    alpha = artists / "Alpha"
    album = artists / "Beta" / "album"
    alpha.mkdir(parents=True)
    album.mkdir(parents=True)

    song_two = alpha / "song-two.mp3"
    song_two.write_bytes(corrupt(make_content(2000, seed=2), 20))
    song_one = album / "song-one.mp3"
    song_one.write_bytes(make_content(1000, seed=1))
    unrelated = artists / "Beta" / "unrelated.mp3"
    unrelated.write_bytes(make_content(1000, seed=99))
    (artists / "tiny.mp3").write_bytes(b"0123456789")

    return {
        "main": main,
        "artists": artists,
        "song_one": song_one,
        "song_two": song_two,
        "unrelated": unrelated,
    }
