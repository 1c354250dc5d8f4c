"""Data models for blocking output."""

from dataclasses import asdict, dataclass
from typing import Any

from bookdedupe.models import BookRecord


@dataclass(frozen=True)
class Block:
    """Records sharing one blocking key.

    Attributes
    ----------
    key : str
        The shared key (author key or identifier token).
    records : tuple[BookRecord, ...]
        Records carrying the key, in input order.
    """

    key: str
    records: tuple[BookRecord, ...]

    def __len__(self) -> int:
        return len(self.records)


@dataclass
class BlockerStats:
    """Counters collected while running a single blocker.

    Attributes
    ----------
    records_seen : int
        Total records processed.
    records_keyed : int
        Records that produced at least one blocking key.
    unique_keys : int
        Distinct blocking keys generated.
    blocks_gt1 : int
        Blocks containing two or more records.
    max_block : int
        Largest block size encountered.
    """

    records_seen: int = 0
    records_keyed: int = 0
    unique_keys: int = 0
    blocks_gt1: int = 0
    max_block: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict."""
        return asdict(self)
