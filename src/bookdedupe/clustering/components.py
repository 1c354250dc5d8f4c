"""Order-independent title grouping via connected components.

Every pair of records whose titles match becomes an edge; each connected
component with two or more records is a group. Unlike the greedy pass,
chains are kept together: if A matches B and B matches C, all three are
grouped even when A and C do not match directly.
"""

from collections.abc import Mapping, Sequence
from itertools import combinations

from bookdedupe.clustering.union_find import UnionFind
from bookdedupe.models import BookRecord
from bookdedupe.scoring import TitleComparator


def connected_title_groups(
    records: Sequence[BookRecord],
    titles: Mapping[int, str],
    comparator: TitleComparator,
    limit: int,
) -> list[tuple[BookRecord, ...]]:
    """Group records by connected components of the title-match graph.

    Parameters
    ----------
    records : Sequence[BookRecord]
        Records in input order.
    titles : Mapping[int, str]
        Normalized title for every record id.
    comparator : TitleComparator
        Title match test.
    limit : int
        Maximum number of groups to return.

    Returns
    -------
    list[tuple[BookRecord, ...]]
        Groups ordered by their earliest member; members in input order.
    """
    if limit <= 0:
        return []

    uf: UnionFind[int] = UnionFind()
    for record in records:
        uf.make_set(record.id)

    for a, b in combinations(records, 2):
        if uf.find(a.id) == uf.find(b.id):
            continue
        if comparator.matches(titles[a.id], titles[b.id]):
            uf.union(a.id, b.id)

    by_id = {record.id: record for record in records}
    groups = [
        tuple(by_id[rid] for rid in component)
        for component in uf.get_components()
        if len(component) > 1
    ]
    return groups[:limit]
