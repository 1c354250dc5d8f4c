"""Greedy claim-and-group pass over a record sequence.

The pass walks records in input order. The first unclaimed record opens a
candidate group, every later unclaimed record whose title matches joins it,
and all of them are marked claimed. The outcome therefore depends on
record order: whichever group reaches a record first keeps it.

The claimed set is owned by the caller and passed in explicitly, so one
set can span several calls (the author buckets of a single scan) without
any module-level state.
"""

from collections.abc import Mapping, Sequence

from bookdedupe.models import BookRecord
from bookdedupe.scoring import TitleComparator


def greedy_claim_groups(
    records: Sequence[BookRecord],
    titles: Mapping[int, str],
    comparator: TitleComparator,
    claimed: set[int],
    limit: int,
) -> list[tuple[BookRecord, ...]]:
    """Group records with matching titles by greedy claiming.

    Parameters
    ----------
    records : Sequence[BookRecord]
        Records in the order they should be visited.
    titles : Mapping[int, str]
        Normalized title for every record id.
    comparator : TitleComparator
        Title match test.
    claimed : set[int]
        Ids already assigned to a group. Updated in place.
    limit : int
        Maximum number of groups to return. Once reached, no further
        candidate is opened.

    Returns
    -------
    list[tuple[BookRecord, ...]]
        Groups of two or more records, in discovery order.
    """
    groups: list[tuple[BookRecord, ...]] = []

    for i, record in enumerate(records):
        if len(groups) >= limit:
            break
        if record.id in claimed:
            continue

        claimed.add(record.id)
        title = titles[record.id]
        members = [record]

        for other in records[i + 1 :]:
            if other.id in claimed:
                continue
            if comparator.matches(title, titles[other.id]):
                members.append(other)
                claimed.add(other.id)

        if len(members) > 1:
            groups.append(tuple(members))

    return groups
