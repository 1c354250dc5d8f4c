"""Shared data types for bookdedupe.

This package contains the records the engine compares, the result types
it returns, and the identifier value type shared by every strategy.
"""

from bookdedupe.models.identifiers import (
    NULL_TOKEN,
    IdentifierSet,
    normalize_identifier_token,
)
from bookdedupe.models.records import (
    BookRecord,
    DuplicateGroup,
    GroupingMode,
    MatchStrategy,
    TargetedMatch,
)

__all__ = [
    # Record models
    "BookRecord",
    "DuplicateGroup",
    "TargetedMatch",
    # Enums
    "MatchStrategy",
    "GroupingMode",
    # Identifiers
    "IdentifierSet",
    "NULL_TOKEN",
    "normalize_identifier_token",
]
