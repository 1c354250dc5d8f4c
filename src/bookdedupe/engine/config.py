"""Detection configuration and scan result dataclasses."""

import math
from dataclasses import asdict, dataclass, field
from numbers import Real
from typing import Any

from bookdedupe.exceptions import InvalidParameterError
from bookdedupe.models import DuplicateGroup, GroupingMode, MatchStrategy

__all__ = [
    "DEFAULT_MAX_GROUPS",
    "DEFAULT_THRESHOLD",
    "DedupeConfig",
    "ScanResult",
    "coerce_grouping",
    "coerce_strategy",
    "validate_max_groups",
    "validate_threshold",
]

DEFAULT_THRESHOLD = 0.8
DEFAULT_MAX_GROUPS = 20


def validate_threshold(threshold: Any) -> float:
    """Check that *threshold* is a real number in [0, 1].

    Raises
    ------
    InvalidParameterError
        If the value is a bool, not a real number, NaN or out of range.
    """
    if isinstance(threshold, bool) or not isinstance(threshold, Real):
        raise InvalidParameterError(f"threshold must be a number in [0, 1], got {threshold!r}")
    value = float(threshold)
    if math.isnan(value) or not 0.0 <= value <= 1.0:
        raise InvalidParameterError(f"threshold must be in [0, 1], got {threshold}")
    return value


def validate_max_groups(max_groups: Any) -> int:
    """Check that *max_groups* is a positive integer.

    Raises
    ------
    InvalidParameterError
        If the value is a bool, not an int, or less than 1.
    """
    if isinstance(max_groups, bool) or not isinstance(max_groups, int):
        raise InvalidParameterError(f"max_groups must be a positive integer, got {max_groups!r}")
    if max_groups < 1:
        raise InvalidParameterError(f"max_groups must be >= 1, got {max_groups}")
    return max_groups


def coerce_strategy(strategy: Any) -> MatchStrategy:
    """Return *strategy* as a ``MatchStrategy``, accepting its string value."""
    try:
        return MatchStrategy(strategy)
    except ValueError:
        valid = ", ".join(s.value for s in MatchStrategy)
        raise InvalidParameterError(
            f"Unknown strategy {strategy!r}. Valid strategies: {valid}"
        ) from None


def coerce_grouping(grouping: Any) -> GroupingMode:
    """Return *grouping* as a ``GroupingMode``, accepting its string value."""
    try:
        return GroupingMode(grouping)
    except ValueError:
        valid = ", ".join(g.value for g in GroupingMode)
        raise InvalidParameterError(
            f"Unknown grouping mode {grouping!r}. Valid modes: {valid}"
        ) from None


@dataclass
class DedupeConfig:
    """Configuration for one duplicate detection run.

    Attributes
    ----------
    strategy : MatchStrategy
        Matching strategy (default: author_title).
    threshold : float
        Minimum title similarity in [0, 1] (default: 0.8).
    max_groups : int
        Maximum number of groups a scan reports (default: 20).
    grouping : GroupingMode
        Group assembly for title-based strategies (default: greedy).
    """

    strategy: MatchStrategy = MatchStrategy.AUTHOR_TITLE
    threshold: float = DEFAULT_THRESHOLD
    max_groups: int = DEFAULT_MAX_GROUPS
    grouping: GroupingMode = GroupingMode.GREEDY

    def __post_init__(self) -> None:
        """Coerce enum names and validate ranges."""
        self.strategy = coerce_strategy(self.strategy)
        self.grouping = coerce_grouping(self.grouping)
        self.threshold = validate_threshold(self.threshold)
        self.max_groups = validate_max_groups(self.max_groups)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["strategy"] = self.strategy.value
        data["grouping"] = self.grouping.value
        return data


@dataclass
class ScanResult:
    """Results from a scan run.

    Attributes
    ----------
    success : bool
        Whether the scan completed.
    books_scanned : int
        Number of records loaded from the source.
    groups : list[DuplicateGroup]
        Duplicate groups found, in discovery order.
    config : DedupeConfig
        Configuration the scan ran with.
    run_id : str | None
        Audit run identifier, when an audit log was written.
    error_message : str | None
        Error message if failed.
    """

    success: bool
    books_scanned: int
    groups: list[DuplicateGroup] = field(default_factory=list)
    config: DedupeConfig = field(default_factory=DedupeConfig)
    run_id: str | None = None
    error_message: str | None = None

    @property
    def books_in_groups(self) -> int:
        """Total number of records across all groups."""
        return sum(len(g) for g in self.groups)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "books_scanned": self.books_scanned,
            "group_count": len(self.groups),
            "groups": [g.to_dict() for g in self.groups],
            "config": self.config.to_dict(),
            "run_id": self.run_id,
            "error_message": self.error_message,
        }
