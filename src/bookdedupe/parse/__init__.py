"""Record sources for the duplicate detection engine.

Supported sources:
- JSON array or JSON Lines files (``JsonRecordSource``, ``load_records``)
- A Calibre library via ``calibredb`` (``CalibreDBSource``)

Every record is validated against ``RECORD_SCHEMA`` before it becomes a
``BookRecord``.
"""

from bookdedupe.parse.base import (
    RECORD_SCHEMA,
    RecordSource,
    record_from_mapping,
    sniff_format,
    validate_record,
)
from bookdedupe.parse.calibredb import CalibreDBSource
from bookdedupe.parse.json_records import JsonRecordSource, load_records, parse_records

__all__ = [
    "RECORD_SCHEMA",
    "CalibreDBSource",
    "JsonRecordSource",
    "RecordSource",
    "load_records",
    "parse_records",
    "record_from_mapping",
    "sniff_format",
    "validate_record",
]
