"""Base types and utilities for record sources."""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import jsonschema

from bookdedupe.exceptions import RecordValidationError, SourceError
from bookdedupe.models import BookRecord

__all__ = [
    "RECORD_SCHEMA",
    "RecordSource",
    "record_from_mapping",
    "sniff_format",
    "validate_record",
]

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

# JSON Schema for one input record, as emitted by `calibredb list --for-machine`
RECORD_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "bookdedupe input record",
    "type": "object",
    "required": ["id", "title", "authors"],
    "properties": {
        "id": {"type": "integer", "minimum": 1},
        "title": {"type": "string"},
        "authors": {"anyOf": [{"type": "string"}, _STRING_LIST]},
        "identifiers": {
            "anyOf": [
                {"type": "string"},
                {"type": "object", "additionalProperties": {"type": "string"}},
                {"type": "null"},
            ]
        },
        "formats": {"anyOf": [{"type": "string"}, _STRING_LIST, {"type": "null"}]},
    },
}

_VALIDATOR = jsonschema.Draft202012Validator(RECORD_SCHEMA)


@runtime_checkable
class RecordSource(Protocol):
    """Anything that can supply book records to the engine."""

    def fetch_all_records(self) -> list[BookRecord]:
        """Return every record in source order."""
        ...

    def fetch_record_by_id(self, book_id: int) -> BookRecord | None:
        """Return the record with *book_id*, or None if absent."""
        ...


def validate_record(data: Any, index: int | None = None, source: str | None = None) -> None:
    """Validate one raw record against ``RECORD_SCHEMA``.

    Parameters
    ----------
    data : Any
        Decoded JSON value.
    index : int | None, optional
        0-based position of the record in its source.
    source : str | None, optional
        File or command the record came from.

    Raises
    ------
    RecordValidationError
        If the record does not match the schema. The message names the
        first offending field.
    """
    error = jsonschema.exceptions.best_match(_VALIDATOR.iter_errors(data))
    if error is None:
        return

    location = "/".join(str(p) for p in error.absolute_path) or "<record>"
    where = f"record {index}" if index is not None else "record"
    if source:
        where = f"{where} in {source}"
    raise RecordValidationError(f"Invalid {where}: {location}: {error.message}", index, source)


def record_from_mapping(
    data: Mapping[str, Any],
    index: int | None = None,
    source: str | None = None,
) -> BookRecord:
    """Validate *data* and build a ``BookRecord`` from it."""
    validate_record(data, index, source)
    return BookRecord.from_dict(data)


def sniff_format(path: Path) -> str:
    """Detect whether *path* holds a JSON array or JSON Lines.

    Parameters
    ----------
    path : Path
        File to inspect.

    Returns
    -------
    str
        ``"json"`` if the first non-blank character is ``[``, ``"jsonl"``
        if it is ``{``.

    Raises
    ------
    SourceError
        If the file cannot be read or starts with anything else.
    """
    try:
        with path.open("r", encoding="utf-8-sig") as f:
            head = f.read(4096).lstrip()
    except OSError as e:
        raise SourceError(f"Failed to read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise SourceError(f"Record file {path} is not valid UTF-8: {e}") from e

    if head.startswith("["):
        return "json"
    if head.startswith("{"):
        return "jsonl"
    if not head:
        raise SourceError(f"Record file is empty: {path}")
    raise SourceError(f"Unrecognized record file format (expected JSON or JSONL): {path}")
