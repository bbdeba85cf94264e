"""
Work-session ingestion boundary.

Responsibility:
    Turn duck-typed raw rows (store rows from WorkSessionSelector, or records
    from a CSV/JSON/XLSX file) into explicit ``WorkSession`` values, reporting
    every data-quality problem as a ``PartialDataWarning``.

Architecture position:
    Ingestion -- the only lenient layer.  Engines receive only validated
    WorkSession values and never see a raw row.

Rules:
    - Missing worker linkage: worker_id "unknown-worker", MISSING_WORKER.
    - Missing worker name: "Unknown worker", MISSING_WORKER_NAME.
    - Missing project linkage / name: "unknown-project" / "Unknown project",
      MISSING_PROJECT / MISSING_PROJECT_NAME.
    - Missing numeric: 0, MISSING_VALUE.  Unreadable numeric: 0,
      INVALID_NUMBER.  Negative numeric: kept as recorded, NEGATIVE_VALUE.
    - Missing or unreadable work date: work_date None, INVALID_WORK_DATE.
    - No row is ever dropped.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

from settlement_kernel.domain.dtos import (
    INVALID_NUMBER,
    INVALID_WORK_DATE,
    MISSING_PROJECT,
    MISSING_PROJECT_NAME,
    MISSING_VALUE,
    MISSING_WORKER,
    MISSING_WORKER_NAME,
    NEGATIVE_VALUE,
    IngestionResult,
    PartialDataWarning,
)
from settlement_kernel.domain.values import ZERO, WorkSession
from settlement_kernel.logging_config import get_logger

logger = get_logger("ingestion.work_sessions")

UNKNOWN_WORKER_ID = "unknown-worker"
UNKNOWN_WORKER_NAME = "Unknown worker"
UNKNOWN_PROJECT_ID = "unknown-project"
UNKNOWN_PROJECT_NAME = "Unknown project"

NUMERIC_FIELDS = ("total_hours", "overtime_hours", "daily_wage", "overtime_rate")


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else str(value)


def _parse_decimal(value: Any) -> Decimal | None:
    """Decimal for ints, Decimals, floats and numeric strings; None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        return Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip().replace(",", ""))
        except InvalidOperation:
            return None
    else:
        return None
    if not result.is_finite():
        return None
    return result


def _parse_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        for parse in (date.fromisoformat, lambda t: datetime.fromisoformat(t).date()):
            try:
                return parse(text)
            except ValueError:
                continue
    return None


def build_work_session(
    row: Mapping[str, Any],
    source_ref: str,
) -> tuple[WorkSession, list[PartialDataWarning]]:
    """
    Validate one raw row.

    Args:
        row: Mapping with the canonical keys (id, worker_id, worker_name,
            project_id, project_name, work_date and the four numerics).
        source_ref: Row reference used in warnings and, when the row has no
            id, as the session id.

    Returns:
        The WorkSession and the warnings raised while building it.
    """
    warnings: list[PartialDataWarning] = []

    def warn(code: str, field: str, message: str) -> None:
        warnings.append(PartialDataWarning(code, message, field, source_ref))

    session_id = source_ref if _blank(row.get("id")) else _text(row["id"])

    raw_worker = row.get("worker_id")
    raw_worker_name = row.get("worker_name")
    if _blank(raw_worker):
        worker_id = UNKNOWN_WORKER_ID
        warn(MISSING_WORKER, "worker_id", "Session has no worker; aggregated as unknown worker")
    else:
        worker_id = _text(raw_worker)
    if _blank(raw_worker_name):
        worker_name = UNKNOWN_WORKER_NAME
        warn(MISSING_WORKER_NAME, "worker_name", f"No name for worker {worker_id}")
    else:
        worker_name = _text(raw_worker_name)

    raw_project = row.get("project_id")
    raw_project_name = row.get("project_name")
    if _blank(raw_project):
        project_id = UNKNOWN_PROJECT_ID
        warn(MISSING_PROJECT, "project_id", "Session has no project; aggregated as unknown project")
    else:
        project_id = _text(raw_project)
    if _blank(raw_project_name):
        project_name = UNKNOWN_PROJECT_NAME
        warn(MISSING_PROJECT_NAME, "project_name", f"No name for project {project_id}")
    else:
        project_name = _text(raw_project_name)

    raw_date = row.get("work_date")
    work_date = None if _blank(raw_date) else _parse_date(raw_date)
    if work_date is None:
        warn(INVALID_WORK_DATE, "work_date", f"Unreadable work date: {raw_date!r}")

    numbers: dict[str, Decimal] = {}
    for name in NUMERIC_FIELDS:
        raw = row.get(name)
        if _blank(raw):
            numbers[name] = ZERO
            warn(MISSING_VALUE, name, f"{name} missing; counted as 0")
            continue
        parsed = _parse_decimal(raw)
        if parsed is None:
            numbers[name] = ZERO
            warn(INVALID_NUMBER, name, f"{name} is not a number: {raw!r}; counted as 0")
            continue
        if parsed < 0:
            warn(NEGATIVE_VALUE, name, f"{name} is negative: {parsed}")
        numbers[name] = parsed

    session = WorkSession(
        session_id=session_id,
        worker_id=worker_id,
        worker_name=worker_name,
        project_id=project_id,
        project_name=project_name,
        work_date=work_date,
        **numbers,
    )
    return session, warnings


def ingest_rows(
    rows: Iterable[Mapping[str, Any]],
    source: str = "store",
) -> IngestionResult:
    """
    Validate every row, keeping input order.

    Rows without an id are referenced as ``row-<n>`` (1-based).  Each
    warning is logged once at WARNING level.
    """
    sessions: list[WorkSession] = []
    warnings: list[PartialDataWarning] = []
    for index, row in enumerate(rows, start=1):
        ref = f"row-{index}" if _blank(row.get("id")) else _text(row["id"])
        session, row_warnings = build_work_session(row, ref)
        sessions.append(session)
        warnings.extend(row_warnings)

    for w in warnings:
        logger.warning(
            "partial_data_warning",
            extra={
                "source": source,
                "warning_code": w.code,
                "field": w.field,
                "source_ref": w.source_ref,
                "detail": w.message,
            },
        )

    result = IngestionResult(sessions=tuple(sessions), warnings=tuple(warnings))
    logger.info(
        "rows_ingested",
        extra={
            "source": source,
            "session_count": len(sessions),
            "warning_count": len(warnings),
        },
    )
    return result
