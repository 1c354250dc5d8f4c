"""Identifier token sets for book records.

Calibre encodes external identifiers as a single string of
``scheme:value`` pairs separated by commas (``isbn:0345339681,
asin:B000FC1PJI``). This module turns that string into a comparable
value type so every strategy compares identifiers the same way.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

__all__ = ["IdentifierSet", "NULL_TOKEN", "normalize_identifier_token"]

# Calibre writes this literal for identifiers that were cleared
NULL_TOKEN = "null"


def normalize_identifier_token(token: str) -> str:
    """Trim and lower-case a single identifier token.

    Parameters
    ----------
    token : str
        Raw token such as ``" ISBN:123 "``.

    Returns
    -------
    str
        Normalized token (``"isbn:123"``), possibly empty.
    """
    return token.strip().lower()


@dataclass(frozen=True)
class IdentifierSet:
    """Ordered, duplicate-free set of normalized identifier tokens.

    Attributes
    ----------
    tokens : tuple[str, ...]
        Tokens in first-seen order. Never contains empty strings or
        the literal ``null``.
    """

    tokens: tuple[str, ...] = ()

    @classmethod
    def parse(cls, raw: str | None) -> "IdentifierSet":
        """Parse a comma-separated identifier string.

        Malformed input is tolerated: empty tokens and ``null`` are
        skipped, anything else is kept verbatim after normalization.

        Parameters
        ----------
        raw : str | None
            Identifier string, or None for a record without identifiers.

        Returns
        -------
        IdentifierSet
            Parsed token set (empty when nothing usable was found).
        """
        if not raw:
            return cls()
        return cls.from_tokens(raw.split(","))

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "IdentifierSet":
        """Build a set from raw tokens, normalizing and deduplicating."""
        seen: dict[str, None] = {}
        for token in tokens:
            norm = normalize_identifier_token(token)
            if norm and norm != NULL_TOKEN:
                seen.setdefault(norm, None)
        return cls(tuple(seen))

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __bool__(self) -> bool:
        return bool(self.tokens)

    def __contains__(self, token: object) -> bool:
        return token in self.tokens

    def shares(self, other: "IdentifierSet") -> bool:
        """Return True if at least one token appears in both sets."""
        return not frozenset(self.tokens).isdisjoint(other.tokens)

    def common(self, other: "IdentifierSet") -> tuple[str, ...]:
        """Return the shared tokens in this set's order."""
        other_tokens = frozenset(other.tokens)
        return tuple(t for t in self.tokens if t in other_tokens)

    @property
    def schemes(self) -> tuple[str, ...]:
        """Distinct identifier schemes (the part before ``:``), in order."""
        found: dict[str, None] = {}
        for token in self.tokens:
            scheme, sep, _ = token.partition(":")
            if sep and scheme:
                found.setdefault(scheme, None)
        return tuple(found)
