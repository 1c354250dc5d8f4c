"""Human- and machine-readable renderings of detection results."""

import json
from collections.abc import Sequence
from typing import Any

from bookdedupe.models import DuplicateGroup, MatchStrategy, TargetedMatch

__all__ = [
    "CLOSING_HINT",
    "EMPTY_LIBRARY_MESSAGE",
    "format_scan_markdown",
    "format_scan_text",
    "format_summary_text",
    "format_targeted_markdown",
    "scan_to_json",
    "summarize_groups",
]

EMPTY_LIBRARY_MESSAGE = "No books found in the library."
CLOSING_HINT = "Use `bookdedupe check BOOK_ID` to compare books before deciding which to keep."


def summarize_groups(groups: Sequence[DuplicateGroup]) -> dict[str, Any]:
    """Summary statistics about duplicate groups.

    Parameters
    ----------
    groups : Sequence[DuplicateGroup]
        Groups returned by a scan.

    Returns
    -------
    dict[str, Any]
        ``total_groups``, ``total_books``, ``duplicates_to_remove`` (one
        record kept per group), ``largest_group`` and ``avg_group_size``.
    """
    if not groups:
        return {
            "total_groups": 0,
            "total_books": 0,
            "duplicates_to_remove": 0,
            "largest_group": 0,
            "avg_group_size": 0.0,
        }

    sizes = [len(g) for g in groups]
    total_books = sum(sizes)

    return {
        "total_groups": len(groups),
        "total_books": total_books,
        "duplicates_to_remove": total_books - len(groups),
        "largest_group": max(sizes),
        "avg_group_size": total_books / len(sizes),
    }


def format_scan_markdown(
    groups: Sequence[DuplicateGroup],
    strategy: MatchStrategy | str,
    books_scanned: int,
) -> str:
    """Render scan results as a markdown report.

    Parameters
    ----------
    groups : Sequence[DuplicateGroup]
        Groups in discovery order.
    strategy : MatchStrategy | str
        Strategy the scan used.
    books_scanned : int
        Number of records the scan looked at.

    Returns
    -------
    str
        Markdown report, or a one-line message when the library was empty
        or nothing matched.
    """
    mode = MatchStrategy(strategy).value
    if books_scanned == 0:
        return EMPTY_LIBRARY_MESSAGE
    if not groups:
        return f"No potential duplicates found using {mode} detection mode."

    lines = [
        "# Potential Duplicates Found",
        "",
        f"**Detection mode:** {mode}",
        f"**Books scanned:** {books_scanned}",
        f"**Duplicate groups found:** {len(groups)}",
        "",
    ]

    for number, group in enumerate(groups, start=1):
        lines.append(f"## Group {number}: {group.reason}")
        lines.append("")
        for book in group.members:
            lines.append(f"- **ID {book.id}:** {book.title}")
            lines.append(f"  Author: {book.authors}")
            if book.formats:
                lines.append(f"  Formats: {book.formats}")
        lines.append("")

    lines.extend(["---", "", CLOSING_HINT])
    return "\n".join(lines)


def format_targeted_markdown(match: TargetedMatch) -> str:
    """Render a targeted search result as markdown."""
    focal = match.focal
    if not match:
        return f'No potential duplicates found for "{focal.title}" by {focal.authors}'

    lines = [
        f'# Potential Duplicates of "{focal.title}"',
        "",
        f"**Original:** ID {focal.id} - {focal.title} by {focal.authors}",
        "",
        f"**Found {len(match)} potential duplicate(s):**",
        "",
    ]
    for book in match.matches:
        lines.append(f"- **ID {book.id}:** {book.title} by {book.authors}")
        if book.formats:
            lines.append(f"  Formats: {book.formats}")

    return "\n".join(lines)


def format_scan_text(groups: Sequence[DuplicateGroup], books_scanned: int) -> str:
    """Render scan results as plain text, one block per group."""
    if books_scanned == 0:
        return EMPTY_LIBRARY_MESSAGE

    lines = [f"Scanned {books_scanned} books, found {len(groups)} duplicate group(s)."]
    for number, group in enumerate(groups, start=1):
        lines.append("")
        lines.append(f"Group {number} ({len(group)} books): {group.reason}")
        for book in group.members:
            lines.append(f"  [{book.id}] {book.title} / {book.authors}")
    return "\n".join(lines)


def format_summary_text(summary: dict[str, Any]) -> str:
    """Render the output of ``summarize_groups`` as aligned text."""
    return "\n".join(
        [
            "Duplicate Search Summary",
            "=" * 40,
            f"Total duplicate groups: {summary['total_groups']}",
            f"Total books in groups:  {summary['total_books']}",
            f"Duplicates to remove:   {summary['duplicates_to_remove']}",
            f"Largest group size:     {summary['largest_group']}",
            f"Average group size:     {summary['avg_group_size']:.1f}",
        ]
    )


def scan_to_json(
    groups: Sequence[DuplicateGroup],
    strategy: MatchStrategy | str,
    books_scanned: int,
) -> str:
    """Serialize scan results as an indented JSON document."""
    payload = {
        "strategy": MatchStrategy(strategy).value,
        "books_scanned": books_scanned,
        "summary": summarize_groups(groups),
        "groups": [g.to_dict() for g in groups],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)
