"""Integration tests for end-to-end duplicate detection.

These tests run the sample libraries through the scan runner, the
public API and the command line, and check they agree.
"""

import json
from pathlib import Path

import jsonschema
import pytest
from click.testing import CliRunner

from bookdedupe import check_file, scan_file, write_groups_jsonl
from bookdedupe.audit import LOG_EVENT_SCHEMA
from bookdedupe.cli.main import cli
from bookdedupe.engine import DedupeConfig, run_scan
from bookdedupe.parse import JsonRecordSource


@pytest.mark.integration
@pytest.mark.parametrize(
    ("strategy", "expected"),
    [
        ("title", [(1, 2), (3, 4), (6, 7), (8, 9)]),
        ("author_title", [(1, 2), (6, 7), (3, 4)]),
        ("identifier", [(1, 2), (8, 9)]),
    ],
)
def test_run_scan_sample_library(fixtures_dir: Path, strategy: str, expected: list) -> None:
    """Test every strategy on the sample JSON library."""
    source = JsonRecordSource(fixtures_dir / "library.json")

    result = run_scan(source, DedupeConfig(strategy=strategy))  # type: ignore[arg-type]

    assert result.success
    assert result.books_scanned == 9
    assert [g.record_ids for g in result.groups] == expected
    assert result.books_in_groups == sum(len(ids) for ids in expected)


@pytest.mark.integration
def test_jsonl_library_matches_json_conventions(fixtures_dir: Path) -> None:
    """Test the structured JSONL variants group like the flat ones."""
    by_author = scan_file(fixtures_dir / "library.jsonl")
    by_identifier = scan_file(fixtures_dir / "library.jsonl", strategy="identifier")

    assert [g.record_ids for g in by_author] == [(1, 2), (3, 4)]
    assert [(g.record_ids, g.match_key) for g in by_identifier] == [
        ((1, 2), "isbn:9780261102217")
    ]


@pytest.mark.integration
def test_connected_grouping_merges_chains(fixtures_dir: Path) -> None:
    """Test connected grouping at a loose threshold."""
    groups = scan_file(
        fixtures_dir / "library.json",
        strategy="title",
        threshold=0.5,
        grouping="connected",
    )

    assert (3, 4, 5) in [g.record_ids for g in groups]
    assert all(len(g) >= 2 for g in groups)


@pytest.mark.integration
def test_scan_then_check_agree(fixtures_dir: Path) -> None:
    """Test each scanned group member finds the others with check."""
    path = fixtures_dir / "library.json"

    for group in scan_file(path, strategy="author_title"):
        focal, *others = group.record_ids
        match = check_file(path, focal, strategy="author_title")
        assert [m.id for m in match.matches] == others


@pytest.mark.integration
def test_cli_scan_with_audit_and_export(fixtures_dir: Path, tmp_path: Path) -> None:
    """Test the CLI report, the audit log and the JSONL export together."""
    library = fixtures_dir / "library.json"
    report = tmp_path / "report.json"
    audit_log = tmp_path / "audit" / "events.jsonl"
    export = tmp_path / "groups.jsonl"

    result = CliRunner().invoke(
        cli,
        [
            "scan",
            str(library),
            "-s",
            "identifier",
            "-f",
            "json",
            "-o",
            str(report),
            "--audit-log",
            str(audit_log),
        ],
    )

    assert result.exit_code == 0
    data = json.loads(report.read_text(encoding="utf-8"))
    assert data["summary"]["total_groups"] == 2
    assert data["summary"]["duplicates_to_remove"] == 2

    events = [json.loads(line) for line in audit_log.read_text().splitlines()]
    for event in events:
        jsonschema.validate(instance=event, schema=LOG_EVENT_SCHEMA)
    found = [e["data"]["book_ids"] for e in events if e["event"] == "group_found"]
    assert found == [[1, 2], [8, 9]]

    write_groups_jsonl(scan_file(library, strategy="identifier"), export)
    exported = [json.loads(line) for line in export.read_text().splitlines()]
    assert [g["match_key"] for g in exported] == [g["match_key"] for g in data["groups"]]
