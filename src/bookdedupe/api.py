"""Public API for duplicate book detection.

This module provides the main public API for bookdedupe, enabling:
- Scanning a record file or a Calibre library for duplicate groups
- Looking up the likely duplicates of one book
- Exporting groups to JSONL format
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from bookdedupe.engine.config import DEFAULT_MAX_GROUPS, DEFAULT_THRESHOLD
from bookdedupe.engine.finder import find_duplicates, find_duplicates_of
from bookdedupe.exceptions import BookDedupeError
from bookdedupe.models import DuplicateGroup, GroupingMode, MatchStrategy, TargetedMatch
from bookdedupe.parse import load_records

if TYPE_CHECKING:
    from bookdedupe.engine.config import ScanResult

__all__ = [
    "ScanError",
    "check_file",
    "find_duplicates",
    "find_duplicates_of",
    "scan_file",
    "scan_library",
    "write_groups_jsonl",
]


class ScanError(BookDedupeError):
    """Raised when a library scan cannot complete."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
    ) -> None:
        """Initialize scan error.

        Parameters
        ----------
        message : str
            Error message.
        source : str | None, optional
            Library or file the scan read from.
        """
        super().__init__(message)
        self.source = source


def scan_file(
    path: str | Path,
    *,
    strategy: MatchStrategy | str = MatchStrategy.AUTHOR_TITLE,
    threshold: float = DEFAULT_THRESHOLD,
    max_groups: int = DEFAULT_MAX_GROUPS,
    grouping: GroupingMode | str = GroupingMode.GREEDY,
) -> list[DuplicateGroup]:
    """Scan a JSON or JSONL record file for duplicate groups.

    Parameters
    ----------
    path : str | Path
        Record file.
    strategy : MatchStrategy | str, optional
        Matching strategy, by default author_title.
    threshold : float, optional
        Minimum title similarity, by default 0.8.
    max_groups : int, optional
        Maximum number of groups, by default 20.
    grouping : GroupingMode | str, optional
        Group assembly for title-based strategies, by default greedy.

    Returns
    -------
    list[DuplicateGroup]
        Groups in discovery order.

    Raises
    ------
    SourceError
        If the file cannot be read.
    RecordValidationError
        If a record is invalid.
    InvalidParameterError
        If a parameter is invalid.

    Examples
    --------
    Scan an exported library by title only:

        >>> from bookdedupe import scan_file
        >>> groups = scan_file("library.json", strategy="title", threshold=0.7)
        >>> for group in groups:
        ...     print(group.reason, group.record_ids)
    """
    records = load_records(path)
    return find_duplicates(strategy, threshold, max_groups, records, grouping=grouping)


def check_file(
    path: str | Path,
    book_id: int,
    *,
    strategy: MatchStrategy | str = MatchStrategy.AUTHOR_TITLE,
    threshold: float = DEFAULT_THRESHOLD,
    author_scoped: bool | None = None,
) -> TargetedMatch:
    """Find the likely duplicates of one book in a record file.

    Raises
    ------
    BookNotFoundError
        If *book_id* is not in the file.
    """
    records = load_records(path)
    return find_duplicates_of(book_id, strategy, threshold, records, author_scoped=author_scoped)


def scan_library(
    library_path: str | Path,
    *,
    strategy: MatchStrategy | str = MatchStrategy.AUTHOR_TITLE,
    threshold: float = DEFAULT_THRESHOLD,
    max_groups: int = DEFAULT_MAX_GROUPS,
    grouping: GroupingMode | str = GroupingMode.GREEDY,
    command: str = "calibredb",
    timeout: float = 15.0,
    log_path: str | Path | None = None,
) -> ScanResult:
    """Scan a Calibre library through ``calibredb``.

    Parameters
    ----------
    library_path : str | Path
        Calibre library directory (``~`` is expanded) or a library server
        URL such as ``http://host:8080/#lib``, passed through unchanged.
    strategy, threshold, max_groups, grouping
        As for ``scan_file``.
    command : str, optional
        calibredb executable, by default "calibredb".
    timeout : float, optional
        calibredb timeout in seconds, by default 15.
    log_path : str | Path | None, optional
        JSONL audit log to append to.

    Returns
    -------
    ScanResult
        Scan result with the groups and the number of books scanned.

    Raises
    ------
    ScanError
        If calibredb failed.

    Examples
    --------
        >>> from bookdedupe import scan_library
        >>> result = scan_library("~/Calibre Library", strategy="identifier")
        >>> print(result.books_scanned, len(result.groups))
    """
    from bookdedupe.engine import DedupeConfig, run_scan
    from bookdedupe.parse import CalibreDBSource

    config = DedupeConfig(
        strategy=strategy,  # type: ignore[arg-type]
        threshold=threshold,
        max_groups=max_groups,
        grouping=grouping,  # type: ignore[arg-type]
    )
    location = str(library_path)
    if "://" not in location:
        location = str(Path(location).expanduser())
    source = CalibreDBSource(location, command=command, timeout=timeout)

    result = run_scan(source, config, log_path=log_path)

    if not result.success:
        raise ScanError(f"Scan failed: {result.error_message}", source=str(library_path))

    return result


def write_groups_jsonl(
    groups: Sequence[DuplicateGroup],
    path: str | Path,
    *,
    sort_keys: bool = True,
) -> None:
    """Write duplicate groups to a JSONL file, one group per line.

    Examples
    --------
        >>> from bookdedupe import scan_file, write_groups_jsonl
        >>> write_groups_jsonl(scan_file("library.json"), "groups.jsonl")
    """
    file_path = Path(path)

    with file_path.open("w", encoding="utf-8", newline="\n") as f:
        for group in groups:
            json_str = json.dumps(
                group.to_dict(),
                ensure_ascii=False,
                sort_keys=sort_keys,
            )
            f.write(json_str + "\n")
