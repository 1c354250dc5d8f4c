"""Command-line interface for bookdedupe.

Provides CLI commands for scanning a library for duplicate books.
"""

import importlib.metadata
import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from bookdedupe.exceptions import BookDedupeError, BookNotFoundError
from bookdedupe.models import GroupingMode, MatchStrategy
from bookdedupe.parse import CalibreDBSource, JsonRecordSource, RecordSource

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("bookdedupe")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"  # Fallback for development

MAX_LIMIT = 50

STRATEGY_CHOICES = [s.value for s in MatchStrategy]
GROUPING_CHOICES = [g.value for g in GroupingMode]


def source_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options that select and configure a record source."""
    options = [
        click.argument(
            "source",
            required=False,
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
        ),
        click.option(
            "--library",
            "-l",
            envvar="CALIBRE_LIBRARY_PATH",
            show_envvar=True,
            help="Calibre library to read through calibredb (used when SOURCE is omitted)",
        ),
        click.option(
            "--calibredb",
            envvar="CALIBRE_DB_COMMAND",
            show_envvar=True,
            default="calibredb",
            show_default=True,
            help="calibredb executable",
        ),
        click.option(
            "--timeout-ms",
            envvar="CALIBRE_COMMAND_TIMEOUT_MS",
            show_envvar=True,
            type=click.IntRange(min=1),
            default=15000,
            show_default=True,
            help="calibredb timeout in milliseconds",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _resolve_source(
    source: Path | None,
    library: str | None,
    calibredb: str,
    timeout_ms: int,
) -> RecordSource:
    if source is not None:
        return JsonRecordSource(source)
    if library:
        return CalibreDBSource(library, command=calibredb, timeout=timeout_ms / 1000)
    raise click.UsageError("Provide a SOURCE file or --library (or set CALIBRE_LIBRARY_PATH).")


def _emit(text: str, output: str | None) -> None:
    if output is None:
        click.echo(text)
        return
    Path(output).write_text(text + "\n", encoding="utf-8")
    click.secho(f"✓ Wrote report to {output}", fg="green", err=True)


@click.group()
@click.version_option(version=__version__, prog_name="bookdedupe")
def cli() -> None:
    """Find likely duplicate books in an e-book library.

    Use 'bookdedupe COMMAND --help' for command-specific help.
    """


@cli.command()
@source_options
@click.option(
    "--strategy",
    "-s",
    type=click.Choice(STRATEGY_CHOICES),
    default=MatchStrategy.AUTHOR_TITLE.value,
    show_default=True,
    help="How books are compared",
)
@click.option(
    "--threshold",
    "-t",
    type=click.FloatRange(0.0, 1.0),
    default=0.8,
    show_default=True,
    help="Minimum title similarity (0-1)",
)
@click.option(
    "--limit",
    "-n",
    type=click.IntRange(1, MAX_LIMIT),
    default=20,
    show_default=True,
    help="Maximum number of duplicate groups to report",
)
@click.option(
    "--grouping",
    type=click.Choice(GROUPING_CHOICES),
    default=GroupingMode.GREEDY.value,
    show_default=True,
    help="Group assembly for title-based strategies",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["markdown", "text", "json"]),
    default="markdown",
    show_default=True,
    help="Report format",
)
@click.option("--summary", is_flag=True, help="Print summary statistics only")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write report to file")
@click.option(
    "--audit-log",
    type=click.Path(dir_okay=False),
    help="Append JSONL audit events to this file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def scan(
    source: Path | None,
    library: str | None,
    calibredb: str,
    timeout_ms: int,
    strategy: str,
    threshold: float,
    limit: int,
    grouping: str,
    output_format: str,
    summary: bool,
    output: str | None,
    audit_log: str | None,
    verbose: bool,
) -> None:
    """Scan a whole library for groups of likely duplicates.

    SOURCE is a JSON or JSONL file of records (for example the output of
    'calibredb list --for-machine'). Without SOURCE the library given by
    --library is read through calibredb.

    Examples
    --------
        bookdedupe scan library.json
        bookdedupe scan --library ~/Calibre\\ Library -s identifier
        bookdedupe scan library.jsonl -s title -t 0.7 --grouping connected -f json
    """
    from bookdedupe.engine import DedupeConfig, run_scan
    from bookdedupe.report import (
        format_scan_markdown,
        format_scan_text,
        format_summary_text,
        scan_to_json,
        summarize_groups,
    )

    record_source = _resolve_source(source, library, calibredb, timeout_ms)

    if verbose:
        click.echo(f"Reading records from: {record_source!r}", err=True)
        click.echo(f"  Strategy: {strategy}", err=True)
        click.echo(f"  Threshold: {threshold}", err=True)
        click.echo(f"  Limit: {limit}", err=True)
        click.echo(f"  Grouping: {grouping}", err=True)

    try:
        config = DedupeConfig(
            strategy=strategy,  # type: ignore[arg-type]
            threshold=threshold,
            max_groups=limit,
            grouping=grouping,  # type: ignore[arg-type]
        )
        result = run_scan(record_source, config, log_path=audit_log)
    except BookDedupeError as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)

    if not result.success:
        click.secho(f"✗ Scan failed: {result.error_message}", fg="red", err=True)
        sys.exit(1)

    if verbose:
        click.echo(
            f"Scanned {result.books_scanned} books, {len(result.groups)} group(s)",
            err=True,
        )

    if summary:
        stats = summarize_groups(result.groups)
        if output_format == "json":
            text = json.dumps(stats, indent=2)
        else:
            text = format_summary_text(stats)
    elif output_format == "json":
        text = scan_to_json(result.groups, config.strategy, result.books_scanned)
    elif output_format == "text":
        text = format_scan_text(result.groups, result.books_scanned)
    else:
        text = format_scan_markdown(result.groups, config.strategy, result.books_scanned)

    _emit(text, output)


@cli.command()
@click.argument("book_id", type=click.IntRange(min=1))
@source_options
@click.option(
    "--strategy",
    "-s",
    type=click.Choice(STRATEGY_CHOICES),
    default=MatchStrategy.AUTHOR_TITLE.value,
    show_default=True,
    help="How books are compared",
)
@click.option(
    "--threshold",
    "-t",
    type=click.FloatRange(0.0, 1.0),
    default=0.8,
    show_default=True,
    help="Minimum title similarity (0-1)",
)
@click.option(
    "--author-scoped/--no-author-scoped",
    default=None,
    help="Only compare books by the same author (default depends on strategy)",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["markdown", "json"]),
    default="markdown",
    show_default=True,
    help="Report format",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write report to file")
def check(
    book_id: int,
    source: Path | None,
    library: str | None,
    calibredb: str,
    timeout_ms: int,
    strategy: str,
    threshold: float,
    author_scoped: bool | None,
    output_format: str,
    output: str | None,
) -> None:
    """List the likely duplicates of the book with id BOOK_ID.

    Examples
    --------
        bookdedupe check 42 library.json
        bookdedupe check 42 --library ~/Calibre\\ Library -s identifier
    """
    from bookdedupe.engine import find_duplicates_of
    from bookdedupe.report import format_targeted_markdown

    record_source = _resolve_source(source, library, calibredb, timeout_ms)

    try:
        records = record_source.fetch_all_records()
        match = find_duplicates_of(
            book_id,
            strategy,
            threshold,
            records,
            author_scoped=author_scoped,
        )
    except BookNotFoundError as e:
        click.secho(str(e), fg="yellow", err=True)
        sys.exit(2)
    except BookDedupeError as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)

    if output_format == "json":
        text = json.dumps(match.to_dict(), indent=2, ensure_ascii=False)
    else:
        text = format_targeted_markdown(match)

    _emit(text, output)


@cli.command()
@click.argument("title_a")
@click.argument("title_b")
@click.option(
    "--threshold",
    "-t",
    type=click.FloatRange(0.0, 1.0),
    default=0.8,
    show_default=True,
    help="Threshold the similarity is checked against",
)
def compare(title_a: str, title_b: str, threshold: float) -> None:
    """Show how two titles normalize and how similar they are.

    Examples
    --------
        bookdedupe compare "The Hobbit" "Hobbit, The"
    """
    from bookdedupe.normalize import normalize_title
    from bookdedupe.scoring import title_similarity

    norm_a = normalize_title(title_a)
    norm_b = normalize_title(title_b)
    score = title_similarity(norm_a, norm_b)

    click.echo(f"A: {norm_a!r}")
    click.echo(f"B: {norm_b!r}")
    click.echo(f"Similarity: {score:.3f}")
    if score >= threshold:
        click.secho(f"✓ Match at threshold {threshold}", fg="green")
    else:
        click.secho(f"✗ No match at threshold {threshold}", fg="red")


if __name__ == "__main__":
    cli()
