"""Matching strategies and the registry that dispatches on them.

Each strategy knows two things: how to partition a whole record set
into duplicate groups (scan mode) and how to find the records similar to
one focal record (targeted mode). New strategies are added by extending
``STRATEGY_REGISTRY``.

Architecture
------------
* ``GroupingStrategy``: structural protocol.
* ``TitleStrategy`` / ``AuthorTitleStrategy`` / ``IdentifierStrategy``.
* ``create_strategy``: registry lookup from a ``DedupeConfig``.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable

from bookdedupe.candidates import AuthorBlocker, BlockerStats, IdentifierBlocker, build_blocks
from bookdedupe.clustering import connected_title_groups, greedy_claim_groups
from bookdedupe.engine.config import DedupeConfig
from bookdedupe.models import BookRecord, DuplicateGroup, GroupingMode, MatchStrategy
from bookdedupe.normalize import ComparisonKeys, comparison_keys
from bookdedupe.scoring import TitleComparator, same_author, shares_identifier

__all__ = [
    "AuthorTitleStrategy",
    "GroupingStrategy",
    "IdentifierStrategy",
    "STRATEGY_REGISTRY",
    "TitleStrategy",
    "create_strategy",
    "threshold_percent",
]


def threshold_percent(threshold: float) -> int:
    """Threshold as a whole percentage, halves rounded up (0.625 -> 63)."""
    return math.floor(threshold * 100 + 0.5)


def _keys_for(
    records: Sequence[BookRecord],
    keys_by_id: Mapping[int, ComparisonKeys] | None,
) -> Mapping[int, ComparisonKeys]:
    if keys_by_id is not None:
        return keys_by_id
    return {record.id: comparison_keys(record) for record in records}


@runtime_checkable
class GroupingStrategy(Protocol):
    """Structural protocol every matching strategy must satisfy.

    Attributes
    ----------
    strategy : MatchStrategy
        The enum member the strategy is registered under.
    stats : BlockerStats | None
        Blocking counters from the most recent ``group`` call.
    """

    strategy: MatchStrategy
    stats: BlockerStats | None

    def group(
        self,
        records: Sequence[BookRecord],
        keys_by_id: Mapping[int, ComparisonKeys] | None = None,
    ) -> list[DuplicateGroup]:
        """Partition *records* into duplicate groups."""
        ...

    def match(
        self,
        focal: BookRecord,
        records: Sequence[BookRecord],
        keys_by_id: Mapping[int, ComparisonKeys] | None = None,
        *,
        author_scoped: bool | None = None,
    ) -> list[BookRecord]:
        """Return the records of *records* similar to *focal*."""
        ...


class _TitleMatching:
    """Shared title comparison machinery for all three strategies."""

    strategy: MatchStrategy
    default_author_scoped: bool = False

    def __init__(self, config: DedupeConfig) -> None:
        self.config = config
        self.comparator = TitleComparator(config.threshold)
        self.stats: BlockerStats | None = None

    def _assemble(
        self,
        records: Sequence[BookRecord],
        titles: Mapping[int, str],
        claimed: set[int],
        limit: int,
    ) -> list[tuple[BookRecord, ...]]:
        if self.config.grouping is GroupingMode.CONNECTED:
            return connected_title_groups(records, titles, self.comparator, limit)
        return greedy_claim_groups(records, titles, self.comparator, claimed, limit)

    def match(
        self,
        focal: BookRecord,
        records: Sequence[BookRecord],
        keys_by_id: Mapping[int, ComparisonKeys] | None = None,
        *,
        author_scoped: bool | None = None,
    ) -> list[BookRecord]:
        """Return every other record whose title matches the focal title.

        Parameters
        ----------
        focal : BookRecord
            Record to search duplicates for.
        records : Sequence[BookRecord]
            Records to search, in input order.
        keys_by_id : Mapping[int, ComparisonKeys] | None, optional
            Pre-computed comparison keys. Computed here if omitted.
        author_scoped : bool | None, optional
            Restrict candidates to the focal record's author. None means
            the strategy default.

        Returns
        -------
        list[BookRecord]
            Matches in input order, focal record excluded.
        """
        keys = _keys_for(records, keys_by_id)
        if focal.id not in keys:
            keys = {**keys, focal.id: comparison_keys(focal)}
        scoped = self.default_author_scoped if author_scoped is None else author_scoped
        return self._title_matches(focal, records, keys, scoped)

    def _title_matches(
        self,
        focal: BookRecord,
        records: Sequence[BookRecord],
        keys: Mapping[int, ComparisonKeys],
        author_scoped: bool,
    ) -> list[BookRecord]:
        focal_keys = keys[focal.id]
        matches = []
        for record in records:
            if record.id == focal.id:
                continue
            other = keys[record.id]
            if author_scoped and not same_author(focal_keys, other):
                continue
            if self.comparator.matches(focal_keys.title, other.title):
                matches.append(record)
        return matches


class TitleStrategy(_TitleMatching):
    """Similar normalized titles across the whole library."""

    strategy = MatchStrategy.TITLE

    @property
    def reason(self) -> str:
        return f"Similar titles ({threshold_percent(self.config.threshold)}%+ match)"

    def group(
        self,
        records: Sequence[BookRecord],
        keys_by_id: Mapping[int, ComparisonKeys] | None = None,
    ) -> list[DuplicateGroup]:
        """Group the whole record set by title similarity."""
        keys = _keys_for(records, keys_by_id)
        titles = {record.id: keys[record.id].title for record in records}
        n = len(records)
        self.stats = BlockerStats(
            records_seen=n,
            records_keyed=n,
            unique_keys=1 if n else 0,
            blocks_gt1=1 if n > 1 else 0,
            max_block=n,
        )

        found = self._assemble(records, titles, set(), self.config.max_groups)
        return [
            DuplicateGroup(reason=self.reason, members=members, strategy=self.strategy)
            for members in found
        ]


class AuthorTitleStrategy(_TitleMatching):
    """Similar titles among records with the same author string."""

    strategy = MatchStrategy.AUTHOR_TITLE
    default_author_scoped = True

    def group(
        self,
        records: Sequence[BookRecord],
        keys_by_id: Mapping[int, ComparisonKeys] | None = None,
    ) -> list[DuplicateGroup]:
        """Group records bucket by bucket, buckets in discovery order.

        The claimed set and the group cap are shared across buckets, so the
        cap applies to the scan as a whole.
        """
        keys = _keys_for(records, keys_by_id)
        titles = {record.id: keys[record.id].title for record in records}
        blocks, self.stats = build_blocks(AuthorBlocker(), records, keys)

        claimed: set[int] = set()
        groups: list[DuplicateGroup] = []
        for block in blocks:
            remaining = self.config.max_groups - len(groups)
            if remaining <= 0:
                break
            if len(block) < 2:
                continue

            for members in self._assemble(block.records, titles, claimed, remaining):
                groups.append(
                    DuplicateGroup(
                        reason=f'Same author "{block.key}" with similar titles',
                        members=members,
                        strategy=self.strategy,
                        match_key=block.key,
                    )
                )

        return groups


class IdentifierStrategy(_TitleMatching):
    """Records sharing an external identifier token.

    Groups are not exclusive: a record carrying two shared tokens appears
    in both groups.
    """

    strategy = MatchStrategy.IDENTIFIER

    def group(
        self,
        records: Sequence[BookRecord],
        keys_by_id: Mapping[int, ComparisonKeys] | None = None,
    ) -> list[DuplicateGroup]:
        """One group per identifier token held by two or more records."""
        keys = _keys_for(records, keys_by_id)
        blocks, self.stats = build_blocks(IdentifierBlocker(), records, keys)

        groups = [
            DuplicateGroup(
                reason=f"Matching identifier: {block.key}",
                members=block.records,
                strategy=self.strategy,
                match_key=block.key,
            )
            for block in blocks
            if len(block) > 1
        ]
        return groups[: self.config.max_groups]

    def match(
        self,
        focal: BookRecord,
        records: Sequence[BookRecord],
        keys_by_id: Mapping[int, ComparisonKeys] | None = None,
        *,
        author_scoped: bool | None = None,
    ) -> list[BookRecord]:
        """Records sharing a token with *focal*.

        A focal record without identifiers falls back to title matching.
        """
        keys = _keys_for(records, keys_by_id)
        if focal.id not in keys:
            keys = {**keys, focal.id: comparison_keys(focal)}

        focal_keys = keys[focal.id]
        if not focal_keys.identifiers:
            return super().match(focal, records, keys, author_scoped=author_scoped)

        return [
            record
            for record in records
            if record.id != focal.id and shares_identifier(focal_keys, keys[record.id])
        ]


# strategy enum member → strategy class
STRATEGY_REGISTRY: dict[MatchStrategy, type[_TitleMatching]] = {
    MatchStrategy.TITLE: TitleStrategy,
    MatchStrategy.AUTHOR_TITLE: AuthorTitleStrategy,
    MatchStrategy.IDENTIFIER: IdentifierStrategy,
}


def create_strategy(config: DedupeConfig) -> GroupingStrategy:
    """Instantiate the strategy named by *config*.

    Parameters
    ----------
    config : DedupeConfig
        Validated detection configuration.

    Returns
    -------
    GroupingStrategy
        Ready-to-use strategy instance.
    """
    return STRATEGY_REGISTRY[config.strategy](config)  # type: ignore[return-value]
