"""Field comparators for pairwise matching.

This module provides pure, deterministic functions for comparing book
record fields. Title similarity is a token-overlap (Jaccard) score, so
word order and punctuation noise do not matter.

All functions are locale-independent and reproducible.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bookdedupe.normalize import ComparisonKeys


def jaccard_similarity(set_a: set[str] | frozenset[str], set_b: set[str] | frozenset[str]) -> float:
    """Calculate Jaccard similarity between two sets.

    Parameters
    ----------
    set_a : set[str]
        First set.
    set_b : set[str]
        Second set.

    Returns
    -------
    float
        Jaccard similarity (0.0-1.0).

    Notes
    -----
    Jaccard = |A ∩ B| / |A ∪ B|

    Empty sets never agree: if either set is empty the result is 0.0.
    Callers that treat identical inputs as a perfect match must check
    equality before tokenizing.
    """
    if not set_a or not set_b:
        return 0.0

    intersection = len(set_a & set_b)
    union = len(set_a | set_b)

    if union == 0:
        return 0.0

    return intersection / union


def title_similarity(title_a: str, title_b: str) -> float:
    """Compare two normalized titles.

    Parameters
    ----------
    title_a : str
        First normalized title.
    title_b : str
        Second normalized title.

    Returns
    -------
    float
        1.0 for identical strings, 0.0 when either is empty, otherwise the
        Jaccard index of their whitespace-separated token sets.

    Notes
    -----
    Symmetric: ``title_similarity(a, b) == title_similarity(b, a)``.
    Duplicate words inside one title count once.
    """
    if title_a == title_b:
        return 1.0
    if not title_a or not title_b:
        return 0.0

    return jaccard_similarity(set(title_a.split()), set(title_b.split()))


def same_author(keys_a: "ComparisonKeys", keys_b: "ComparisonKeys") -> bool:
    """Return True if both records have the same author bucket key."""
    return keys_a.author == keys_b.author


def shares_identifier(keys_a: "ComparisonKeys", keys_b: "ComparisonKeys") -> bool:
    """Return True if the records have at least one identifier token in common."""
    return keys_a.identifiers.shares(keys_b.identifiers)


@dataclass(frozen=True, slots=True)
class TitleComparator:
    """Threshold test over normalized titles.

    Attributes
    ----------
    threshold : float
        Minimum similarity for two titles to match.
    scorer : Callable[[str, str], float]
        Similarity function, ``title_similarity`` by default.
    """

    threshold: float
    scorer: Callable[[str, str], float] = title_similarity

    def matches(self, title_a: str, title_b: str) -> bool:
        """Return True if the titles score at or above the threshold."""
        return self.scorer(title_a, title_b) >= self.threshold
