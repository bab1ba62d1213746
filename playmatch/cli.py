"""
Playmatch - CLI Interface.

A command-line interface for building a playlist manifest by matching the
files of a "main" directory against a pool of candidate files by content.

Usage Examples:
    # Build playlist.txt from a main directory and a candidate pool
    python -m playmatch build /music/_DUPEFIND/1.Main /music/Artists

    # Custom output, stripped path prefix, and skip unreadable candidates
    python -m playmatch build main/ Artists/ -o list.txt \\
        --strip-prefix /mnt/c/Users/me --on-error skip

    # Compare two files directly
    python -m playmatch compare a.mp3 b.mp3 --similarity-threshold 0.9
"""

import locale
import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from playmatch.comparison import (
    CHUNK_SIZE,
    DEFAULT_CONTENT_THRESHOLD,
    DEFAULT_SIZE_TOLERANCE,
    SimilarityComparator,
)
from playmatch.models import ErrorPolicy
from playmatch.orchestration import MatchLogger, MatchOrchestrator
from playmatch.output import ManifestWriter, PathNormalizer
from playmatch.ui import MatchTUI

__version__ = "1.0.0"

# Initialize Typer app
app = typer.Typer(
    name="playmatch",
    help="Playmatch - Match main files against a candidate pool by content.",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for consistent output formatting
console = Console()


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"Playmatch v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records through Rich on the shared console.

    Args:
        verbose: If True, log at DEBUG level; otherwise WARNING.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def configure_locale() -> None:
    """Use the user's collation rules for ordering non-numeric query names."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logging.getLogger(__name__).warning(
            "Cannot apply user locale (%s); using code point order", e
        )


def validate_directory(path: Path, label: str) -> None:
    """
    Validate that a directory exists and is readable.

    Args:
        path: Path to validate.
        label: Human-readable name used in error messages.

    Raises:
        typer.Exit: If validation fails with descriptive error message.
    """
    if not path.exists():
        console.print(f"[red]Error:[/red] {label} does not exist: {path}")
        raise typer.Exit(1)

    if not path.is_dir():
        console.print(f"[red]Error:[/red] {label} is not a directory: {path}")
        raise typer.Exit(1)

    if not os.access(path, os.R_OK):
        console.print(f"[red]Error:[/red] Permission denied - cannot read: {path}")
        raise typer.Exit(1)


def validate_ratio(value: float) -> float:
    """
    Validate a threshold is within the 0-1 range.

    Raises:
        typer.BadParameter: If value is out of range.
    """
    if not 0.0 <= value <= 1.0:
        raise typer.BadParameter("Must be between 0 and 1")
    return value


def validate_chunk_size(value: int) -> int:
    """
    Validate the chunk size is positive.

    Raises:
        typer.BadParameter: If value is less than 1.
    """
    if value < 1:
        raise typer.BadParameter("Chunk size must be at least 1 byte")
    return value


def size_tolerance_option():
    """Option for the size gate tolerance, shared by build and compare."""
    return typer.Option(
        DEFAULT_SIZE_TOLERANCE,
        "--size-tolerance",
        "-s",
        envvar="PLAYMATCH_SIZE_TOLERANCE",
        help="Smaller file must be at least this fraction of the larger one (0-1).",
        callback=validate_ratio,
    )


def similarity_threshold_option():
    """Option for the content similarity threshold."""
    return typer.Option(
        DEFAULT_CONTENT_THRESHOLD,
        "--similarity-threshold",
        "-t",
        envvar="PLAYMATCH_SIMILARITY_THRESHOLD",
        help="Fraction of the larger file's bytes that must match (0-1).",
        callback=validate_ratio,
    )


def chunk_size_option():
    """Option for the read chunk size."""
    return typer.Option(
        CHUNK_SIZE,
        "--chunk-size",
        envvar="PLAYMATCH_CHUNK_SIZE",
        help="Bytes read per step while comparing content.",
        callback=validate_chunk_size,
    )


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Playmatch - Match main files against a candidate pool by content."""
    pass


@app.command()
def build(
    main_dir: Path = typer.Argument(
        ...,
        help="Directory holding the main (query) files.",
        exists=False,  # We do our own validation
    ),
    candidate_root: Path = typer.Argument(
        ...,
        help="Root directory of the candidate pool, searched recursively.",
        exists=False,
    ),
    output: Path = typer.Option(
        Path("playlist.txt"),
        "--output",
        "-o",
        help="Path of the manifest to write.",
    ),
    size_tolerance: float = size_tolerance_option(),
    similarity_threshold: float = similarity_threshold_option(),
    chunk_size: int = chunk_size_option(),
    on_error: ErrorPolicy = typer.Option(
        ErrorPolicy.ABORT,
        "--on-error",
        envvar="PLAYMATCH_ON_ERROR",
        help="What to do when a candidate cannot be read: abort or skip.",
        case_sensitive=False,
    ),
    strip_prefix: Optional[str] = typer.Option(
        None,
        "--strip-prefix",
        envvar="PLAYMATCH_STRIP_PREFIX",
        help="Prefix removed from every path written to the manifest.",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        "-l",
        help="Path for log file output.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Enable verbose output.",
    ),
) -> None:
    """
    Build the playlist manifest.

    Every file directly inside MAIN_DIR is matched, in natural order, against
    all files under CANDIDATE_ROOT. The first similar candidate is written to
    the manifest; queries without one are written as "notfound:<path>".
    """
    configure_logging(verbose)
    configure_locale()

    validate_directory(main_dir, "Main directory")
    validate_directory(candidate_root, "Candidate root")

    # Create logger if log file specified
    logger_instance: Optional[MatchLogger] = None
    if log_file:
        try:
            logger_instance = MatchLogger(log_file, error_policy=on_error)
        except OSError as e:
            console.print(f"[red]Error:[/red] Failed to create log file: {e}")
            raise typer.Exit(1)

    normalizer = PathNormalizer(strip_prefix)
    comparator = SimilarityComparator(
        size_tolerance=size_tolerance,
        content_threshold=similarity_threshold,
        chunk_size=chunk_size,
    )

    try:
        orchestrator = MatchOrchestrator(
            main_dir=main_dir,
            candidate_root=candidate_root,
            comparator=comparator,
            error_policy=on_error,
            normalizer=normalizer,
            verbose=verbose,
            tui=MatchTUI(console),
        )
        writer = ManifestWriter(output, normalizer)

        if logger_instance is not None:
            with logger_instance:
                summary = orchestrator.run_workflow(writer, logger_instance)
            console.print(f"[dim]Log written to: {logger_instance.get_log_path()}[/dim]")
        else:
            summary = orchestrator.run_workflow(writer)

        if summary.interrupted:
            raise typer.Exit(130)

    except KeyboardInterrupt:
        console.print("\n[yellow]Run interrupted by user.[/yellow]")
        raise typer.Exit(130)

    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except PermissionError as e:
        console.print(f"[red]Error:[/red] Permission denied - {e}")
        console.print("[dim]No manifest was written.[/dim]")
        raise typer.Exit(1)

    except OSError as e:
        console.print(f"[red]Error processing files:[/red] {e}")
        console.print("[dim]No manifest was written.[/dim]")
        raise typer.Exit(1)


@app.command()
def compare(
    file_a: Path = typer.Argument(..., help="First file."),
    file_b: Path = typer.Argument(..., help="Second file."),
    size_tolerance: float = size_tolerance_option(),
    similarity_threshold: float = similarity_threshold_option(),
    chunk_size: int = chunk_size_option(),
) -> None:
    """
    Compare two files with the similarity check used by build.

    Exits with 0 if the files are similar, 1 if they are not, and 2 if
    either file cannot be read.
    """
    comparator = SimilarityComparator(
        size_tolerance=size_tolerance,
        content_threshold=similarity_threshold,
        chunk_size=chunk_size,
    )

    try:
        similar, ratio = comparator.measure(file_a, file_b)
    except OSError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    if similar:
        console.print(f"[green]similar[/green] (ratio {ratio:.4f})")
    else:
        console.print(f"[yellow]not similar[/yellow] (ratio {ratio:.4f})")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
