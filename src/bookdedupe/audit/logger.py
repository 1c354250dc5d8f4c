"""Structured audit logger for JSONL event logging.

Every scan can leave a trail of what it looked at and which groups it
reported. Events are appended one JSON object per line, flushed as they
are written, so a log cut short by a crash is still readable.
"""

import json
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict
from pathlib import Path
from typing import Any

from bookdedupe.audit.models import LogEvent
from bookdedupe.utils import get_iso_timestamp

__all__ = ["AuditLogger"]


def _present(**fields: Any) -> dict[str, Any]:
    """Keep only the payload fields that were given."""
    return {key: value for key, value in fields.items() if value is not None}


class AuditLogger:
    """Append-only JSONL event log for one scan run.

    Attributes
    ----------
    run_id : str
        Identifier stamped on every event.
    log_path : Path
        JSONL file the events are appended to.
    current_stage : str | None
        Stage attached to events that do not name one.
    """

    def __init__(self, run_id: str, log_path: Path) -> None:
        self.run_id = run_id
        self.log_path = Path(log_path)
        self.current_stage: str | None = None

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        """Whether the log file has been closed."""
        return self._file.closed

    def close(self) -> None:
        """Close the log file. Safe to call more than once."""
        if not self._file.closed:
            self._file.flush()
            self._file.close()

    def set_stage(self, stage: str | None) -> None:
        """Attach *stage* to subsequent events (None clears it)."""
        self.current_stage = stage

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        stage: str | None = None,
        book_id: int | None = None,
    ) -> None:
        """Append one event to the log.

        Parameters
        ----------
        event_type : str
            Event name, e.g. ``"group_found"``.
        data : dict[str, Any] | None, optional
            Event payload.
        level : str, optional
            One of ``LOG_LEVELS``, by default "INFO".
        stage : str | None, optional
            Stage name. Falls back to ``current_stage``.
        book_id : int | None, optional
            Book the event is about, if any.
        """
        record = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data or {},
            stage=stage if stage is not None else self.current_stage,
            book_id=book_id,
        )
        self._file.write(json.dumps(asdict(record), ensure_ascii=False, separators=(",", ":")))
        self._file.write("\n")
        self._file.flush()

    # -- run -------------------------------------------------------------

    def run_started(self, command: list[str], parameters: dict[str, Any]) -> None:
        """Record the command line and detection parameters of the run."""
        self.event("run_started", data={"command": command, "parameters": parameters})

    def run_finished(
        self,
        status: str,
        duration_seconds: float,
        books_scanned: int | None = None,
        groups_found: int | None = None,
    ) -> None:
        """Record how the run ended.

        The current stage is cleared first: run-level events carry none.

        Parameters
        ----------
        status : str
            ``"success"`` or ``"failed"``.
        duration_seconds : float
            Wall time of the whole run.
        books_scanned : int | None, optional
            Records loaded from the source.
        groups_found : int | None, optional
            Duplicate groups reported.
        """
        self.set_stage(None)
        data = {"status": status, "duration_seconds": duration_seconds}
        data.update(_present(books_scanned=books_scanned, groups_found=groups_found))
        self.event("run_finished", data=data, stage=None)

    # -- stages ----------------------------------------------------------

    def stage_started(self, stage: str, expected_records: int | None = None) -> None:
        """Open *stage*: log it and make it the current stage."""
        self.set_stage(stage)
        self.event("stage_started", data=_present(expected_records=expected_records), stage=stage)

    def stage_finished(
        self,
        stage: str,
        duration_seconds: float,
        counters: dict[str, int] | None = None,
    ) -> None:
        """Close *stage* with its duration and counters, then clear it."""
        data: dict[str, Any] = {"duration_seconds": duration_seconds}
        if counters:
            data["counters"] = counters
        self.event("stage_finished", data=data, stage=stage)
        self.set_stage(None)

    @contextmanager
    def stage(self, name: str, expected_records: int | None = None) -> Iterator[dict[str, int]]:
        """Time a stage and log its start and finish.

        Yields a counters dict the caller fills in; it is written with the
        ``stage_finished`` event. Nothing is written for the finish if the
        block raises, so the error event that follows keeps the stage.

        Examples
        --------
            >>> with logger.stage("load") as counters:
            ...     records = source.fetch_all_records()
            ...     counters["records"] = len(records)
        """
        counters: dict[str, int] = {}
        start = time.perf_counter()
        self.stage_started(name, expected_records=expected_records)
        yield counters
        self.stage_finished(name, time.perf_counter() - start, counters=counters)

    # -- findings --------------------------------------------------------

    def group_found(
        self,
        reason: str,
        book_ids: list[int],
        match_key: str | None = None,
        stage: str | None = None,
    ) -> None:
        """Record one reported duplicate group.

        The first member's id goes into the envelope so that a group can
        be traced back from the book that opened it.
        """
        data = {"reason": reason, "book_ids": book_ids, **_present(match_key=match_key)}
        self.event(
            "group_found",
            data=data,
            stage=stage,
            book_id=book_ids[0] if book_ids else None,
        )

    def error(
        self,
        exception_class: str,
        message: str,
        stage: str | None = None,
        book_id: int | None = None,
    ) -> None:
        """Record a failure at ERROR level."""
        self.event(
            "error",
            data={"exception_class": exception_class, "message": message},
            stage=stage,
            level="ERROR",
            book_id=book_id,
        )
