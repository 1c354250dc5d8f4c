"""JSON and JSON Lines record files.

A record file is either one JSON array of records (the direct output of
``calibredb list --for-machine``) or one record object per line.
"""

import json
from pathlib import Path

from bookdedupe.exceptions import RecordValidationError, SourceError
from bookdedupe.models import BookRecord
from bookdedupe.parse.base import record_from_mapping, sniff_format

__all__ = ["JsonRecordSource", "load_records", "parse_records"]


def parse_records(payload: object, source: str | None = None) -> list[BookRecord]:
    """Build records from a decoded JSON array.

    Raises
    ------
    RecordValidationError
        If the payload is not a list or an element is invalid.
    """
    if not isinstance(payload, list):
        raise RecordValidationError(
            f"Expected a JSON array of records, got {type(payload).__name__}", source=source
        )
    return [record_from_mapping(item, index, source) for index, item in enumerate(payload)]


def _load_json(path: Path) -> list[BookRecord]:
    try:
        with path.open("r", encoding="utf-8-sig") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise SourceError(f"Invalid JSON in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise SourceError(f"Record file {path} is not valid UTF-8: {e}") from e
    return parse_records(payload, str(path))


def _load_jsonl(path: Path) -> list[BookRecord]:
    records: list[BookRecord] = []
    index = 0
    line_no = 0
    try:
        with path.open("r", encoding="utf-8-sig") as f:
            for line_no, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    item = json.loads(line)
                except json.JSONDecodeError as e:
                    raise SourceError(f"Invalid JSON on line {line_no} of {path}: {e}") from e
                records.append(record_from_mapping(item, index, str(path)))
                index += 1
    except UnicodeDecodeError as e:
        raise SourceError(
            f"Record file {path} is not valid UTF-8 after line {line_no}: {e}"
        ) from e
    return records


def load_records(path: Path | str) -> list[BookRecord]:
    """Load records from a JSON or JSONL file.

    Parameters
    ----------
    path : Path | str
        Record file.

    Returns
    -------
    list[BookRecord]
        Records in file order.

    Raises
    ------
    SourceError
        If the file cannot be read or decoded.
    RecordValidationError
        If a record does not match the record schema.
    """
    path = Path(path)
    if not path.is_file():
        raise SourceError(f"Record file does not exist: {path}")

    if sniff_format(path) == "json":
        return _load_json(path)
    return _load_jsonl(path)


class JsonRecordSource:
    """Record source backed by a JSON or JSONL file.

    The file is read on first use and cached for the lifetime of the
    source.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._records: list[BookRecord] | None = None

    def __repr__(self) -> str:
        return f"JsonRecordSource({str(self.path)!r})"

    def fetch_all_records(self) -> list[BookRecord]:
        """Return every record in file order."""
        if self._records is None:
            self._records = load_records(self.path)
        return list(self._records)

    def fetch_record_by_id(self, book_id: int) -> BookRecord | None:
        """Return the record with *book_id*, or None if absent."""
        return next((r for r in self.fetch_all_records() if r.id == book_id), None)
