"""Audit logging for bookdedupe runs.

Main Components
---------------
- AuditLogger: JSONL event logger
- LogEvent: event envelope
- LOG_EVENT_SCHEMA: JSON Schema for one log line
"""

from bookdedupe.audit.helpers import generate_run_id
from bookdedupe.audit.logger import AuditLogger
from bookdedupe.audit.models import LOG_EVENT_SCHEMA, LOG_LEVELS, LogEvent
from bookdedupe.utils import get_iso_timestamp

__all__ = [
    "AuditLogger",
    "LogEvent",
    "LOG_EVENT_SCHEMA",
    "LOG_LEVELS",
    "generate_run_id",
    "get_iso_timestamp",
]
