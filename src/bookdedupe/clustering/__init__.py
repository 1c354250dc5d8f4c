"""Assembly of title matches into duplicate groups.

Two interchangeable procedures:
- ``greedy_claim_groups``: single pass, order-dependent claiming
- ``connected_title_groups``: union-find connected components
"""

from bookdedupe.clustering.components import connected_title_groups
from bookdedupe.clustering.greedy import greedy_claim_groups
from bookdedupe.clustering.union_find import UnionFind

__all__ = [
    "UnionFind",
    "connected_title_groups",
    "greedy_claim_groups",
]
