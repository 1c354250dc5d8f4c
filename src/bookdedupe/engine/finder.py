"""Scan and targeted duplicate detection.

The two public entry points validate their parameters, compute every
record's comparison keys once, and hand the work to the strategy picked
from the registry. Nothing here performs I/O apart from the optional
audit logger.
"""

from collections import Counter
from collections.abc import Iterable, Sequence
from contextlib import nullcontext

from bookdedupe.audit.logger import AuditLogger
from bookdedupe.engine.config import DedupeConfig
from bookdedupe.engine.strategies import create_strategy
from bookdedupe.exceptions import BookNotFoundError, InvalidParameterError
from bookdedupe.models import BookRecord, DuplicateGroup, GroupingMode, MatchStrategy, TargetedMatch
from bookdedupe.normalize import ComparisonKeys, comparison_keys

__all__ = ["DETECT_STAGE", "check_unique_ids", "find_duplicates", "find_duplicates_of"]

DETECT_STAGE = "detect"


def check_unique_ids(records: Iterable[BookRecord]) -> None:
    """Reject record sets in which an id occurs more than once.

    Raises
    ------
    InvalidParameterError
        If any id is duplicated.
    """
    counts = Counter(record.id for record in records)
    duplicated = sorted(rid for rid, count in counts.items() if count > 1)
    if duplicated:
        shown = ", ".join(str(rid) for rid in duplicated[:10])
        raise InvalidParameterError(f"Duplicate book id(s) in record set: {shown}")


def _compute_keys(records: Sequence[BookRecord]) -> dict[int, ComparisonKeys]:
    return {record.id: comparison_keys(record) for record in records}


def find_duplicates(
    strategy: MatchStrategy | str,
    threshold: float,
    max_groups: int,
    records: Sequence[BookRecord],
    *,
    grouping: GroupingMode | str = GroupingMode.GREEDY,
    logger: AuditLogger | None = None,
) -> list[DuplicateGroup]:
    """Find groups of likely duplicates across a whole record set.

    Parameters
    ----------
    strategy : MatchStrategy | str
        Matching strategy.
    threshold : float
        Minimum title similarity in [0, 1]. Ignored by the identifier
        strategy.
    max_groups : int
        Maximum number of groups to return (>= 1).
    records : Sequence[BookRecord]
        Records in input order. Input order decides greedy claiming.
    grouping : GroupingMode | str, optional
        Group assembly for title-based strategies.
    logger : AuditLogger | None, optional
        Audit logger for stage and group events.

    Returns
    -------
    list[DuplicateGroup]
        Groups in discovery order; empty when nothing matched.

    Raises
    ------
    InvalidParameterError
        On an invalid parameter or duplicated record id.

    Examples
    --------
    >>> from bookdedupe import BookRecord, find_duplicates
    >>> books = [
    ...     BookRecord(1, "The Hobbit", "J.R.R. Tolkien"),
    ...     BookRecord(2, "Hobbit", "J.R.R. Tolkien"),
    ... ]
    >>> [g.record_ids for g in find_duplicates("author_title", 0.8, 20, books)]
    [(1, 2)]
    """
    config = DedupeConfig(
        strategy=strategy,  # type: ignore[arg-type]
        threshold=threshold,
        max_groups=max_groups,
        grouping=grouping,  # type: ignore[arg-type]
    )
    records = list(records)
    check_unique_ids(records)

    stage = logger.stage(DETECT_STAGE, expected_records=len(records)) if logger else nullcontext({})
    with stage as counters:
        keys_by_id = _compute_keys(records)
        matcher = create_strategy(config)
        groups = matcher.group(records, keys_by_id)

        if logger:
            for group in groups:
                logger.group_found(
                    reason=group.reason,
                    book_ids=list(group.record_ids),
                    match_key=group.match_key,
                    stage=DETECT_STAGE,
                )
        counters["records"] = len(records)
        counters["blocks"] = matcher.stats.blocks_gt1 if matcher.stats is not None else 0
        counters["groups"] = len(groups)

    return groups


def find_duplicates_of(
    focal_id: int,
    strategy: MatchStrategy | str,
    threshold: float,
    records: Sequence[BookRecord],
    *,
    author_scoped: bool | None = None,
) -> TargetedMatch:
    """Find the records similar to one focal record.

    Parameters
    ----------
    focal_id : int
        Id of the record to search duplicates for.
    strategy : MatchStrategy | str
        Matching strategy.
    threshold : float
        Minimum title similarity in [0, 1].
    records : Sequence[BookRecord]
        Records to search, including the focal one.
    author_scoped : bool | None, optional
        Restrict title matches to the focal record's author. None uses the
        strategy default (True for author_title, False otherwise).

    Returns
    -------
    TargetedMatch
        The focal record and its matches in input order. An empty match is
        a successful result.

    Raises
    ------
    InvalidParameterError
        On an invalid parameter or duplicated record id.
    BookNotFoundError
        If ``focal_id`` is not among *records*.
    """
    config = DedupeConfig(strategy=strategy, threshold=threshold)  # type: ignore[arg-type]
    records = list(records)
    check_unique_ids(records)

    focal = next((record for record in records if record.id == focal_id), None)
    if focal is None:
        raise BookNotFoundError(focal_id)

    keys_by_id = _compute_keys(records)
    matcher = create_strategy(config)
    matches = matcher.match(focal, records, keys_by_id, author_scoped=author_scoped)

    return TargetedMatch(focal=focal, matches=tuple(matches), strategy=config.strategy)
