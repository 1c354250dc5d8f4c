"""Normalization of record fields into comparison keys.

- ``normalize_title``: article/subtitle/punctuation-free title
- ``author_key``: case-folded author bucket key
- ``parse_identifiers``: identifier string to ``IdentifierSet``
- ``comparison_keys``: all keys for one record at once
"""

from dataclasses import dataclass

from bookdedupe.models import BookRecord, IdentifierSet
from bookdedupe.normalize._fields import author_key, normalize_title, parse_identifiers

__all__ = [
    "ComparisonKeys",
    "author_key",
    "comparison_keys",
    "normalize_title",
    "parse_identifiers",
]


@dataclass(frozen=True)
class ComparisonKeys:
    """Pre-computed comparison keys for one record.

    Attributes
    ----------
    title : str
        Normalized title.
    author : str
        Author bucket key.
    identifiers : IdentifierSet
        Parsed identifier tokens.
    """

    title: str
    author: str
    identifiers: IdentifierSet


def comparison_keys(record: BookRecord) -> ComparisonKeys:
    """Derive every comparison key for *record*.

    Parameters
    ----------
    record : BookRecord
        Record to normalize.

    Returns
    -------
    ComparisonKeys
        Title, author and identifier keys.
    """
    return ComparisonKeys(
        title=normalize_title(record.title),
        author=author_key(record.authors),
        identifiers=parse_identifiers(record.identifiers),
    )
