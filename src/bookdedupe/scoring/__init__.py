"""Pairwise comparison of book records.

This module provides the similarity scorer used by the grouping engine
and the small predicates built on the comparison keys.
"""

from bookdedupe.scoring.comparators import (
    TitleComparator,
    jaccard_similarity,
    same_author,
    shares_identifier,
    title_similarity,
)

__all__ = [
    "TitleComparator",
    "jaccard_similarity",
    "same_author",
    "shares_identifier",
    "title_similarity",
]
