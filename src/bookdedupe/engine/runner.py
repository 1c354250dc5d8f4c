"""End-to-end scan runner.

Chains the two stages of a scan into one auditable run:

    Stage 1: load   read records from a source
    Stage 2: detect group duplicates with the configured strategy

Source failures are reported in the result instead of raised; invalid
parameters are programming errors and still raise.
"""

import sys
import time
from contextlib import nullcontext
from pathlib import Path

from bookdedupe.audit.helpers import generate_run_id
from bookdedupe.audit.logger import AuditLogger
from bookdedupe.engine.config import DedupeConfig, ScanResult
from bookdedupe.engine.finder import find_duplicates
from bookdedupe.exceptions import BookDedupeError, InvalidParameterError
from bookdedupe.models import BookRecord
from bookdedupe.parse.base import RecordSource

__all__ = ["LOAD_STAGE", "run_scan"]

LOAD_STAGE = "load"


def _load_stage(source: RecordSource, logger: AuditLogger | None) -> list[BookRecord]:
    with logger.stage(LOAD_STAGE) if logger else nullcontext({}) as counters:
        records = source.fetch_all_records()
        counters["records"] = len(records)
    return records


def _run(
    source: RecordSource,
    config: DedupeConfig,
    logger: AuditLogger | None,
) -> ScanResult:
    start = time.perf_counter()
    run_id = logger.run_id if logger else None
    if logger:
        logger.run_started(command=sys.argv, parameters=config.to_dict())

    books_scanned = 0
    try:
        records = _load_stage(source, logger)
        books_scanned = len(records)

        groups = find_duplicates(
            config.strategy,
            config.threshold,
            config.max_groups,
            records,
            grouping=config.grouping,
            logger=logger,
        )
    except InvalidParameterError:
        raise
    except (BookDedupeError, OSError) as e:
        error_msg = f"{type(e).__name__}: {e}"
        if logger:
            logger.error(type(e).__name__, str(e))
            logger.run_finished("failed", time.perf_counter() - start, books_scanned=books_scanned)
        return ScanResult(
            success=False,
            books_scanned=books_scanned,
            config=config,
            run_id=run_id,
            error_message=error_msg,
        )

    if logger:
        logger.run_finished(
            "success",
            time.perf_counter() - start,
            books_scanned=books_scanned,
            groups_found=len(groups),
        )

    return ScanResult(
        success=True,
        books_scanned=books_scanned,
        groups=groups,
        config=config,
        run_id=run_id,
    )


def run_scan(
    source: RecordSource,
    config: DedupeConfig | None = None,
    *,
    log_path: Path | str | None = None,
) -> ScanResult:
    """Load records from *source* and scan them for duplicates.

    Parameters
    ----------
    source : RecordSource
        Where the records come from.
    config : DedupeConfig | None, optional
        Detection configuration. If None, uses defaults.
    log_path : Path | str | None, optional
        JSONL audit log to append to. If None, no audit log is written.

    Returns
    -------
    ScanResult
        Scan outcome. ``success`` is False when the source failed.

    Raises
    ------
    InvalidParameterError
        If the record set contains duplicated ids.

    Examples
    --------
        >>> from bookdedupe.engine import DedupeConfig, run_scan
        >>> from bookdedupe.parse import JsonRecordSource
        >>> result = run_scan(JsonRecordSource("library.json"), DedupeConfig(strategy="title"))
        >>> if result.success:
        ...     print(f"{len(result.groups)} groups in {result.books_scanned} books")
    """
    if config is None:
        config = DedupeConfig()

    if log_path is None:
        return _run(source, config, None)

    with AuditLogger(generate_run_id(), Path(log_path)) as logger:
        return _run(source, config, logger)
