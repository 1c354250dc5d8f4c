"""Data models and schema for audit logging."""

from dataclasses import dataclass
from typing import Any

__all__ = ["LogEvent", "LOG_EVENT_SCHEMA", "LOG_LEVELS"]

LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


@dataclass
class LogEvent:
    """Structured log event.

    Attributes
    ----------
    ts : str
        ISO8601 timestamp with microseconds (UTC).
    run_id : str
        Unique run identifier.
    level : str
        Log level ("DEBUG", "INFO", "WARN", "ERROR").
    event : str
        Event type identifier.
    data : dict[str, Any]
        Event-specific data payload.
    stage : str | None
        Current stage identifier.
    book_id : int | None
        Book id if the event concerns one record.
    """

    ts: str
    run_id: str
    level: str
    event: str
    data: dict[str, Any]
    stage: str | None = None
    book_id: int | None = None


# JSON Schema for one line of the events JSONL file
LOG_EVENT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "bookdedupe log event",
    "type": "object",
    "required": ["ts", "run_id", "level", "event", "data", "stage", "book_id"],
    "additionalProperties": False,
    "properties": {
        "ts": {"type": "string", "pattern": r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?Z$"},
        "run_id": {"type": "string", "minLength": 1},
        "level": {"enum": list(LOG_LEVELS)},
        "event": {"type": "string", "minLength": 1},
        "data": {"type": "object"},
        "stage": {"type": ["string", "null"]},
        "book_id": {"type": ["integer", "null"]},
    },
}
