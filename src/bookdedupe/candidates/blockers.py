"""Blockers that partition records before pairwise comparison.

Each blocker maps a record's comparison keys to zero or more block keys.
Records sharing a key end up in the same block. Blocks keep discovery
order: the first record that produces a key fixes the block's position,
and records inside a block stay in input order. The greedy grouping
outcome depends on that order, so ``build_blocks`` must never sort.

Architecture
------------
* ``Blocker``: structural protocol (one attribute + one method).
* ``build_blocks``: pure function, no hidden state.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Protocol, runtime_checkable

from bookdedupe.candidates.models import Block, BlockerStats
from bookdedupe.models import BookRecord
from bookdedupe.normalize import ComparisonKeys


@runtime_checkable
class Blocker(Protocol):
    """Structural protocol every blocker must satisfy.

    Attributes
    ----------
    name : str
        Stable identifier used in audit logs.
    """

    name: str

    def block_keys(self, keys: ComparisonKeys) -> Iterable[str]:
        """Yield zero or more blocking keys for a record's comparison keys."""
        ...


class AuthorBlocker:
    """Block by exact case-insensitive author string."""

    name: str = "author_exact"

    def block_keys(self, keys: ComparisonKeys) -> Iterable[str]:
        """Yield the author key. Records without authors share the empty key."""
        yield keys.author


class IdentifierBlocker:
    """Block by identifier token; a record joins one block per token."""

    name: str = "identifier_token"

    def block_keys(self, keys: ComparisonKeys) -> Iterable[str]:
        """Yield every identifier token of the record."""
        yield from keys.identifiers


def build_blocks(
    blocker: Blocker,
    records: Sequence[BookRecord],
    keys_by_id: Mapping[int, ComparisonKeys],
) -> tuple[list[Block], BlockerStats]:
    """Partition *records* into blocks using *blocker*.

    Parameters
    ----------
    blocker : Blocker
        Blocker to apply.
    records : Sequence[BookRecord]
        Records in input order.
    keys_by_id : Mapping[int, ComparisonKeys]
        Pre-computed comparison keys for every record.

    Returns
    -------
    tuple[list[Block], BlockerStats]
        Blocks in discovery order (all sizes) and blocker counters.
    """
    stats = BlockerStats()
    index: dict[str, list[BookRecord]] = {}

    for record in records:
        stats.records_seen += 1
        keyed = False
        for key in blocker.block_keys(keys_by_id[record.id]):
            index.setdefault(key, []).append(record)
            keyed = True
        if keyed:
            stats.records_keyed += 1

    blocks = [Block(key=key, records=tuple(members)) for key, members in index.items()]

    stats.unique_keys = len(blocks)
    stats.blocks_gt1 = sum(1 for b in blocks if len(b) > 1)
    stats.max_block = max((len(b) for b in blocks), default=0)

    return blocks, stats
