"""Tests for the calibredb record source."""

import json
import subprocess

import pytest

from bookdedupe.exceptions import RecordValidationError, SourceError
from bookdedupe.parse import CalibreDBSource, RecordSource
from bookdedupe.parse import calibredb as calibredb_module

BOOKS = [
    {
        "id": 1,
        "title": "The Hobbit",
        "authors": "J.R.R. Tolkien",
        "identifiers": "isbn:9780261102217",
        "formats": ["/lib/The Hobbit.epub"],
    },
    {"id": 2, "title": "Hobbit, The", "authors": "J.R.R. Tolkien"},
]


class FakeRun:
    """Stand-in for subprocess.run that records its calls."""

    def __init__(self, stdout: str = "", stderr: str = "", returncode: int = 0, exc=None):
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        self.exc = exc
        self.calls: list[tuple[list[str], dict]] = []

    def __call__(self, args, **kwargs):
        self.calls.append((args, kwargs))
        if self.exc is not None:
            raise self.exc
        return subprocess.CompletedProcess(args, self.returncode, self.stdout, self.stderr)


@pytest.fixture
def source() -> CalibreDBSource:
    """Source pointing at a fake library."""
    return CalibreDBSource("/books/Calibre Library", command="calibredb", timeout=2.5)


def _patch(monkeypatch: pytest.MonkeyPatch, fake: FakeRun) -> FakeRun:
    monkeypatch.setattr(calibredb_module.subprocess, "run", fake)
    return fake


@pytest.mark.unit
def test_source_satisfies_protocol(source: CalibreDBSource) -> None:
    """Test the calibredb source is a RecordSource."""
    assert isinstance(source, RecordSource)


@pytest.mark.unit
def test_fetch_all_records_command_line(monkeypatch, source: CalibreDBSource) -> None:
    """Test the list call uses the duplicate field preset and no shell."""
    fake = _patch(monkeypatch, FakeRun(stdout=json.dumps(BOOKS)))

    records = source.fetch_all_records()

    assert [r.id for r in records] == [1, 2]
    assert records[0].formats == "/lib/The Hobbit.epub"
    args, kwargs = fake.calls[0]
    assert args == [
        "calibredb",
        "--with-library",
        "/books/Calibre Library",
        "list",
        "--fields",
        "id,title,authors,identifiers,formats",
        "--for-machine",
    ]
    assert kwargs["timeout"] == 2.5
    assert kwargs["capture_output"] is True
    assert kwargs["text"] is True
    assert "shell" not in kwargs


@pytest.mark.unit
def test_fetch_record_by_id_searches_id(monkeypatch, source: CalibreDBSource) -> None:
    """Test a single-book lookup adds an id search."""
    fake = _patch(monkeypatch, FakeRun(stdout=json.dumps(BOOKS[1:])))

    record = source.fetch_record_by_id(2)

    assert record is not None
    assert record.title == "Hobbit, The"
    args, _ = fake.calls[0]
    assert args[-3:] == ["--search", "id:2", "--for-machine"]


@pytest.mark.unit
@pytest.mark.parametrize("stdout", ["", "  \n", "[]"])
def test_fetch_record_by_id_not_found(monkeypatch, source: CalibreDBSource, stdout: str) -> None:
    """Test empty output means the book does not exist."""
    _patch(monkeypatch, FakeRun(stdout=stdout))

    assert source.fetch_record_by_id(99) is None


@pytest.mark.unit
def test_empty_library(monkeypatch, source: CalibreDBSource) -> None:
    """Test empty output is an empty library."""
    _patch(monkeypatch, FakeRun(stdout=""))

    assert source.fetch_all_records() == []


@pytest.mark.unit
def test_nonzero_exit_uses_stderr(monkeypatch, source: CalibreDBSource) -> None:
    """Test a failing call raises SourceError with calibredb's message."""
    _patch(monkeypatch, FakeRun(stderr="No library found at /books\n", returncode=1))

    with pytest.raises(SourceError, match="No library found") as exc_info:
        source.fetch_all_records()

    assert exc_info.value.stderr == "No library found at /books"
    assert exc_info.value.command[0] == "calibredb"


@pytest.mark.unit
def test_nonzero_exit_without_stderr(monkeypatch, source: CalibreDBSource) -> None:
    """Test the exit code is reported when stderr is empty."""
    _patch(monkeypatch, FakeRun(returncode=3))

    with pytest.raises(SourceError, match="calibredb exited with code 3"):
        source.fetch_all_records()


@pytest.mark.unit
def test_missing_executable(monkeypatch, source: CalibreDBSource) -> None:
    """Test a missing calibredb binary raises SourceError."""
    _patch(monkeypatch, FakeRun(exc=FileNotFoundError("calibredb")))

    with pytest.raises(SourceError, match="not found"):
        source.fetch_all_records()


@pytest.mark.unit
def test_timeout(monkeypatch, source: CalibreDBSource) -> None:
    """Test a hung calibredb call raises SourceError."""
    _patch(monkeypatch, FakeRun(exc=subprocess.TimeoutExpired("calibredb", 2.5)))

    with pytest.raises(SourceError, match="timed out after 2500ms"):
        source.fetch_all_records()


@pytest.mark.unit
def test_unparsable_output(monkeypatch, source: CalibreDBSource) -> None:
    """Test non-JSON output raises SourceError."""
    _patch(monkeypatch, FakeRun(stdout="Traceback (most recent call last):"))

    with pytest.raises(SourceError, match="Unparsable"):
        source.fetch_all_records()


@pytest.mark.unit
def test_invalid_record_in_output(monkeypatch, source: CalibreDBSource) -> None:
    """Test records from calibredb are schema-validated too."""
    _patch(monkeypatch, FakeRun(stdout=json.dumps([{"id": 1, "title": "x"}])))

    with pytest.raises(RecordValidationError):
        source.fetch_all_records()


@pytest.mark.unit
@pytest.mark.parametrize("timeout", [0, -1.0])
def test_timeout_must_be_positive(timeout: float) -> None:
    """Test a non-positive timeout is rejected."""
    with pytest.raises(ValueError):
        CalibreDBSource("/lib", timeout=timeout)


@pytest.mark.unit
def test_run_non_utf8_output(monkeypatch, source: CalibreDBSource) -> None:
    """Test undecodable calibredb output is a SourceError."""
    error = UnicodeDecodeError("utf-8", b'[{"title": "Caf\xe9"}]', 13, 14, "invalid continuation byte")
    _patch(monkeypatch, FakeRun(exc=error))

    with pytest.raises(SourceError, match="calibredb output is not valid UTF-8"):
        source.fetch_all_records()
