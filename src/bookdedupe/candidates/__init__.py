"""Blocking: partition records by shared author or identifier keys."""

from bookdedupe.candidates.blockers import (
    AuthorBlocker,
    Blocker,
    IdentifierBlocker,
    build_blocks,
)
from bookdedupe.candidates.models import Block, BlockerStats

__all__ = [
    # Protocol
    "Blocker",
    # Blockers
    "AuthorBlocker",
    "IdentifierBlocker",
    # Output
    "Block",
    "BlockerStats",
    "build_blocks",
]
