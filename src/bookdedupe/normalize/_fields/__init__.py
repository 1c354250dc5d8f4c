"""Field normalization functions.

Individual field normalizers that turn raw record fields into comparison
keys. Each function is pure and deterministic.
"""

from .authors import author_key
from .identifiers import parse_identifiers
from .title import normalize_title

__all__ = [
    "author_key",
    "normalize_title",
    "parse_identifiers",
]
