"""Tests for author and identifier blocking."""

from __future__ import annotations

import pytest

from bookdedupe.candidates import AuthorBlocker, Blocker, IdentifierBlocker, build_blocks
from bookdedupe.normalize import comparison_keys


def _keys(records):
    return {r.id: comparison_keys(r) for r in records}


@pytest.mark.unit
@pytest.mark.parametrize("blocker", [AuthorBlocker(), IdentifierBlocker()])
def test_blockers_satisfy_protocol(blocker) -> None:
    """Test built-in blockers implement the Blocker protocol."""
    assert isinstance(blocker, Blocker)
    assert blocker.name


@pytest.mark.unit
def test_author_blocks_in_discovery_order(make_book) -> None:
    """Test author buckets keep first-seen order and input order inside."""
    records = [
        make_book(1, authors="Frank Herbert"),
        make_book(2, authors="J.R.R. Tolkien"),
        make_book(3, authors="frank herbert "),
        make_book(4, authors="Isaac Asimov"),
        make_book(5, authors="J.R.R. TOLKIEN"),
    ]

    blocks, stats = build_blocks(AuthorBlocker(), records, _keys(records))

    assert [b.key for b in blocks] == ["frank herbert", "j.r.r. tolkien", "isaac asimov"]
    assert [[r.id for r in b.records] for b in blocks] == [[1, 3], [2, 5], [4]]
    assert stats.records_seen == 5
    assert stats.records_keyed == 5
    assert stats.unique_keys == 3
    assert stats.blocks_gt1 == 2
    assert stats.max_block == 2


@pytest.mark.unit
def test_identifier_blocks_one_per_token(make_book) -> None:
    """Test a record joins one block for each of its tokens."""
    records = [
        make_book(5, identifiers="isbn:123"),
        make_book(6, identifiers="ISBN:123, asin:999"),
        make_book(7),
        make_book(8, identifiers="asin:999, null"),
    ]

    blocks, stats = build_blocks(IdentifierBlocker(), records, _keys(records))

    assert [(b.key, [r.id for r in b.records]) for b in blocks] == [
        ("isbn:123", [5, 6]),
        ("asin:999", [6, 8]),
    ]
    assert stats.records_seen == 4
    assert stats.records_keyed == 3
    assert stats.blocks_gt1 == 2


@pytest.mark.unit
def test_identifier_block_lists_record_once_for_repeated_token(make_book) -> None:
    """Test a token repeated inside one record does not duplicate it."""
    records = [make_book(1, identifiers="isbn:1, ISBN:1"), make_book(2, identifiers="isbn:1")]

    blocks, _ = build_blocks(IdentifierBlocker(), records, _keys(records))

    assert [r.id for r in blocks[0].records] == [1, 2]


@pytest.mark.unit
def test_build_blocks_empty() -> None:
    """Test no records give no blocks and zeroed stats."""
    blocks, stats = build_blocks(AuthorBlocker(), [], {})

    assert blocks == []
    assert stats.to_dict() == {
        "records_seen": 0,
        "records_keyed": 0,
        "unique_keys": 0,
        "blocks_gt1": 0,
        "max_block": 0,
    }
