"""End-to-end tests for the Playmatch CLI.

This module tests the CLI interface using Typer's CliRunner.
"""

import os
import sys
from pathlib import Path
from typing import Dict

import pytest
from typer.testing import CliRunner

from conftest import make_content
from playmatch import __version__
from playmatch.cli import app


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CliRunner instance for testing."""
    return CliRunner()


def build_args(library: Dict[str, Path], output: Path, *extra: str):
    return ["build", str(library["main"]), str(library["artists"]), "-o", str(output), *extra]


class TestVersion:
    """Tests for --version."""

    def test_version(self, cli_runner: CliRunner):
        result = cli_runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestBuildCommand:
    """Tests for the build command."""

    def test_build_writes_manifest(self, cli_runner, music_library, temp_dir: Path):
        output = temp_dir / "playlist.txt"

        result = cli_runner.invoke(app, build_args(music_library, output))

        assert result.exit_code == 0, result.output
        lines = output.read_text(encoding="utf-8").split("\n")
        assert lines[0] == str(music_library["song_one"])
        assert lines[1] == str(music_library["song_two"])
        assert lines[2].startswith("notfound:")
        assert lines[2].endswith("/main/10.mp3")

    def test_build_with_strip_prefix(self, cli_runner, music_library, temp_dir: Path):
        output = temp_dir / "playlist.txt"

        result = cli_runner.invoke(
            app, build_args(music_library, output, "--strip-prefix", str(temp_dir))
        )

        assert result.exit_code == 0, result.output
        assert output.read_text(encoding="utf-8") == (
            "/Artists/Beta/album/song-one.mp3\n"
            "/Artists/Alpha/song-two.mp3\n"
            "notfound:/main/10.mp3"
        )

    def test_build_with_strict_threshold(self, cli_runner, music_library, temp_dir: Path):
        output = temp_dir / "playlist.txt"

        result = cli_runner.invoke(
            app, build_args(music_library, output, "--similarity-threshold", "1.0")
        )

        assert result.exit_code == 0, result.output
        lines = output.read_text(encoding="utf-8").split("\n")
        assert lines[0] == str(music_library["song_one"])
        assert lines[1].startswith("notfound:")

    def test_threshold_from_environment(self, cli_runner, music_library, temp_dir: Path):
        output = temp_dir / "playlist.txt"

        result = cli_runner.invoke(
            app,
            build_args(music_library, output),
            env={"PLAYMATCH_SIMILARITY_THRESHOLD": "1.0"},
        )

        assert result.exit_code == 0, result.output
        assert output.read_text(encoding="utf-8").split("\n")[1].startswith("notfound:")

    def test_build_with_log_file(self, cli_runner, music_library, temp_dir: Path):
        output = temp_dir / "playlist.txt"
        log_file = temp_dir / "run.log"

        result = cli_runner.invoke(
            app, build_args(music_library, output, "--log-file", str(log_file))
        )

        assert result.exit_code == 0, result.output
        assert "SUMMARY" in log_file.read_text(encoding="utf-8")

    def test_missing_main_directory(self, cli_runner, music_library, temp_dir: Path):
        output = temp_dir / "playlist.txt"
        args = ["build", str(temp_dir / "missing"), str(music_library["artists"]), "-o", str(output)]

        result = cli_runner.invoke(app, args)

        assert result.exit_code == 1
        assert "does not exist" in result.output
        assert not output.exists()

    def test_log_file_in_missing_directory(self, cli_runner, music_library, temp_dir: Path):
        output = temp_dir / "playlist.txt"

        result = cli_runner.invoke(
            app, build_args(music_library, output, "--log-file", str(temp_dir / "no" / "run.log"))
        )

        assert result.exit_code == 1
        assert not output.exists()

    @pytest.mark.parametrize(
        "option, value",
        [
            ("--size-tolerance", "1.5"),
            ("--similarity-threshold", "-0.1"),
            ("--chunk-size", "0"),
            ("--on-error", "ignore"),
        ],
    )
    def test_invalid_options(self, cli_runner, music_library, temp_dir: Path, option, value):
        output = temp_dir / "playlist.txt"

        result = cli_runner.invoke(app, build_args(music_library, output, option, value))

        assert result.exit_code == 2
        assert not output.exists()

    def test_unreadable_query_aborts(self, cli_runner, music_library, temp_dir: Path):
        output = temp_dir / "playlist.txt"
        # A dangling symlink is skipped by the scanner, so use a file that
        # disappears after the scan instead.
        broken = music_library["main"] / "5.mp3"
        broken.write_bytes(make_content(1000, seed=5))

        from playmatch.scanning import FileScanner

        real_list = FileScanner.list_query_files

        def list_then_delete(self, directory):
            queries = real_list(self, directory)
            broken.unlink()
            return queries

        with pytest.MonkeyPatch.context() as mp:
            mp.setattr(FileScanner, "list_query_files", list_then_delete)
            result = cli_runner.invoke(app, build_args(music_library, output))

        assert result.exit_code == 1
        assert "No manifest was written" in result.output
        assert not output.exists()

    def test_unreadable_query_skipped(self, cli_runner, music_library, temp_dir: Path):
        output = temp_dir / "playlist.txt"
        broken = music_library["main"] / "5.mp3"
        broken.write_bytes(make_content(1000, seed=5))

        from playmatch.scanning import FileScanner

        real_list = FileScanner.list_query_files

        def list_then_delete(self, directory):
            queries = real_list(self, directory)
            broken.unlink()
            return queries

        with pytest.MonkeyPatch.context() as mp:
            mp.setattr(FileScanner, "list_query_files", list_then_delete)
            result = cli_runner.invoke(
                app, build_args(music_library, output, "--on-error", "skip")
            )

        assert result.exit_code == 0, result.output
        lines = output.read_text(encoding="utf-8").split("\n")
        assert len(lines) == 4
        assert lines[2].startswith("notfound:")
        assert lines[2].endswith("/main/5.mp3")


class TestCompareCommand:
    """Tests for the compare command."""

    def test_similar_files(self, cli_runner, temp_dir: Path):
        a = temp_dir / "a.mp3"
        b = temp_dir / "b.mp3"
        a.write_bytes(make_content(1000))
        b.write_bytes(make_content(1000))

        result = cli_runner.invoke(app, ["compare", str(a), str(b)])

        assert result.exit_code == 0
        assert "similar" in result.output
        assert "not similar" not in result.output
        assert "1.0000" in result.output

    def test_not_similar_files(self, cli_runner, temp_dir: Path):
        a = temp_dir / "a.mp3"
        b = temp_dir / "b.mp3"
        a.write_bytes(make_content(1000))
        b.write_bytes(make_content(940))

        result = cli_runner.invoke(app, ["compare", str(a), str(b)])

        assert result.exit_code == 1
        assert "not similar" in result.output
        assert "0.9400" in result.output

    def test_custom_threshold(self, cli_runner, temp_dir: Path):
        a = temp_dir / "a.mp3"
        b = temp_dir / "b.mp3"
        a.write_bytes(make_content(1000))
        b.write_bytes(make_content(940))

        result = cli_runner.invoke(
            app, ["compare", str(a), str(b), "--similarity-threshold", "0.9"]
        )

        assert result.exit_code == 0

    def test_missing_file(self, cli_runner, temp_dir: Path):
        a = temp_dir / "a.mp3"
        a.write_bytes(b"x")

        result = cli_runner.invoke(app, ["compare", str(a), str(temp_dir / "missing.mp3")])

        assert result.exit_code == 2
        assert "Error" in result.output


class TestNonUtf8FileNames:
    """Tests for file names that are not valid UTF-8."""

    @pytest.mark.skipif(sys.platform != "linux", reason="needs a filesystem that allows non-UTF-8 names")
    def test_build_writes_raw_name(self, cli_runner, temp_dir: Path):
        main = temp_dir / "main"
        pool = temp_dir / "pool"
        main.mkdir()
        pool.mkdir()
        with open(os.path.join(os.fsencode(main), b"\xff.mp3"), "wb") as f:
            f.write(make_content(100))
        output = temp_dir / "playlist.txt"

        result = cli_runner.invoke(app, ["build", str(main), str(pool), "-o", str(output)])

        assert result.exit_code == 0, result.output
        content = output.read_bytes()
        assert content.startswith(b"notfound:")
        assert content.endswith(b"/main/\xff.mp3")
