"""Duplicate detection engine.

This package provides the scan and targeted entry points, the strategy
registry, and the configuration and result types.
"""

from bookdedupe.engine.config import DedupeConfig, ScanResult
from bookdedupe.engine.finder import find_duplicates, find_duplicates_of
from bookdedupe.engine.runner import run_scan
from bookdedupe.engine.strategies import (
    STRATEGY_REGISTRY,
    AuthorTitleStrategy,
    GroupingStrategy,
    IdentifierStrategy,
    TitleStrategy,
    create_strategy,
)

__all__ = [
    "DedupeConfig",
    "ScanResult",
    "find_duplicates",
    "find_duplicates_of",
    "run_scan",
    "STRATEGY_REGISTRY",
    "GroupingStrategy",
    "TitleStrategy",
    "AuthorTitleStrategy",
    "IdentifierStrategy",
    "create_strategy",
]
