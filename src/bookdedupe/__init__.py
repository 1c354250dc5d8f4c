"""Duplicate detection for e-book library metadata.

This package provides:
- Data models (bookdedupe.models): records, groups, strategies
- Normalization (bookdedupe.normalize): title, author and identifier keys
- Scoring (bookdedupe.scoring): title similarity
- Candidates (bookdedupe.candidates): author and identifier blocking
- Clustering (bookdedupe.clustering): greedy and connected grouping
- Engine (bookdedupe.engine): scan and targeted detection
- Parsing (bookdedupe.parse): JSON/JSONL files and calibredb
- Audit (bookdedupe.audit): JSONL event logging
- Report (bookdedupe.report): markdown, text and JSON output
- CLI (bookdedupe.cli): command-line interface
- Public API (bookdedupe.api): high-level convenience functions
"""

__version__ = "0.1.0"
__license__ = "MIT"

from bookdedupe.api import (
    ScanError,
    check_file,
    find_duplicates,
    find_duplicates_of,
    scan_file,
    scan_library,
    write_groups_jsonl,
)
from bookdedupe.exceptions import (
    BookDedupeError,
    BookNotFoundError,
    InvalidParameterError,
    RecordValidationError,
    SourceError,
)
from bookdedupe.models import (
    BookRecord,
    DuplicateGroup,
    GroupingMode,
    IdentifierSet,
    MatchStrategy,
    TargetedMatch,
)
from bookdedupe.normalize import normalize_title
from bookdedupe.scoring import title_similarity

__all__ = [
    "__version__",
    "__license__",
    "BookRecord",
    "DuplicateGroup",
    "TargetedMatch",
    "MatchStrategy",
    "GroupingMode",
    "IdentifierSet",
    "find_duplicates",
    "find_duplicates_of",
    "scan_file",
    "check_file",
    "scan_library",
    "write_groups_jsonl",
    "normalize_title",
    "title_similarity",
    "BookDedupeError",
    "InvalidParameterError",
    "BookNotFoundError",
    "RecordValidationError",
    "SourceError",
    "ScanError",
]
