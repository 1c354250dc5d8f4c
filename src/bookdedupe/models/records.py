"""Book record and result data models for bookdedupe.

This module defines the records the engine compares and the result
types it returns. All of them are immutable and carry no engine state.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from bookdedupe.exceptions import RecordValidationError
from bookdedupe.models.identifiers import IdentifierSet

__all__ = [
    "MatchStrategy",
    "GroupingMode",
    "BookRecord",
    "DuplicateGroup",
    "TargetedMatch",
]

AUTHORS_JOINER = " & "
FORMATS_JOINER = ", "
IDENTIFIERS_JOINER = ", "


class MatchStrategy(StrEnum):
    """How records are compared.

    Attributes
    ----------
    TITLE : str
        Similar normalized titles, regardless of author.
    AUTHOR_TITLE : str
        Same author string and similar normalized titles.
    IDENTIFIER : str
        At least one shared external identifier token.
    """

    TITLE = "title"
    AUTHOR_TITLE = "author_title"
    IDENTIFIER = "identifier"


class GroupingMode(StrEnum):
    """How title matches are assembled into groups.

    Attributes
    ----------
    GREEDY : str
        Single-pass, order-dependent claiming.
    CONNECTED : str
        Connected components of the full similarity graph.
    """

    GREEDY = "greedy"
    CONNECTED = "connected"


def _join_field(value: Any, joiner: str) -> str | None:
    """Collapse the list/mapping variants calibredb emits into one string."""
    if value is None:
        return None
    if isinstance(value, Mapping):
        return ", ".join(f"{k}:{v}" for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return joiner.join(str(v) for v in value)
    return str(value)


@dataclass(frozen=True)
class BookRecord:
    """A single bibliographic entry.

    Attributes
    ----------
    id : int
        Book id, unique within one scan.
    title : str
        Free-text title.
    authors : str
        Free-text author string (several authors joined by ``" & "``).
    identifiers : str | None
        Comma-separated ``scheme:value`` pairs, or None.
    formats : str | None
        Comma-separated format paths, used only for display.
    """

    id: int
    title: str
    authors: str
    identifiers: str | None = None
    formats: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BookRecord":
        """Build a record from a calibredb-style mapping.

        Parameters
        ----------
        data : Mapping[str, Any]
            Mapping with ``id``, ``title``, ``authors`` and optionally
            ``identifiers`` and ``formats``.

        Returns
        -------
        BookRecord
            The record.

        Raises
        ------
        RecordValidationError
            If a required key is missing.
        """
        missing = [key for key in ("id", "title", "authors") if data.get(key) is None]
        if missing:
            raise RecordValidationError(f"Record is missing required field(s): {', '.join(missing)}")

        return cls(
            id=int(data["id"]),
            title=str(data["title"]),
            authors=_join_field(data["authors"], AUTHORS_JOINER) or "",
            identifiers=_join_field(data.get("identifiers"), IDENTIFIERS_JOINER) or None,
            formats=_join_field(data.get("formats"), FORMATS_JOINER) or None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "authors": self.authors,
            "identifiers": self.identifiers,
            "formats": self.formats,
        }

    @property
    def format_list(self) -> list[str]:
        """Format paths as a list."""
        if not self.formats:
            return []
        return [f.strip() for f in self.formats.split(",") if f.strip()]

    @property
    def identifier_set(self) -> IdentifierSet:
        """Parsed identifier tokens."""
        return IdentifierSet.parse(self.identifiers)


@dataclass(frozen=True)
class DuplicateGroup:
    """A group of records that likely describe the same book.

    Attributes
    ----------
    reason : str
        Human-readable explanation of why the records were grouped.
    members : tuple[BookRecord, ...]
        Grouped records in discovery order (at least two).
    strategy : MatchStrategy
        Strategy that produced the group.
    match_key : str | None
        Author key or identifier token the group shares, if any.
    """

    reason: str
    members: tuple[BookRecord, ...]
    strategy: MatchStrategy
    match_key: str | None = None

    def __len__(self) -> int:
        return len(self.members)

    @property
    def record_ids(self) -> tuple[int, ...]:
        """Ids of the grouped records, in group order."""
        return tuple(m.id for m in self.members)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "reason": self.reason,
            "strategy": self.strategy.value,
            "match_key": self.match_key,
            "book_count": len(self.members),
            "books": [m.to_dict() for m in self.members],
        }


@dataclass(frozen=True)
class TargetedMatch:
    """Records similar to one focal record.

    Attributes
    ----------
    focal : BookRecord
        The record duplicates were searched for.
    matches : tuple[BookRecord, ...]
        Similar records in input order, never including the focal one.
    strategy : MatchStrategy
        Strategy used for the comparison.
    """

    focal: BookRecord
    matches: tuple[BookRecord, ...]
    strategy: MatchStrategy

    def __len__(self) -> int:
        return len(self.matches)

    def __bool__(self) -> bool:
        return bool(self.matches)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "strategy": self.strategy.value,
            "focal": self.focal.to_dict(),
            "match_count": len(self.matches),
            "matches": [m.to_dict() for m in self.matches],
        }
