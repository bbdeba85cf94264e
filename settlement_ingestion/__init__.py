"""
Ingestion boundary: raw work-session rows to validated WorkSession values.

Sources are either store rows (``WorkSessionSelector.rows_for_period``) or
records read from files by ``settlement_ingestion.adapters``.
"""

from settlement_ingestion.work_sessions import (
    UNKNOWN_PROJECT_ID,
    UNKNOWN_PROJECT_NAME,
    UNKNOWN_WORKER_ID,
    UNKNOWN_WORKER_NAME,
    build_work_session,
    ingest_rows,
)

__all__ = [
    "UNKNOWN_PROJECT_ID",
    "UNKNOWN_PROJECT_NAME",
    "UNKNOWN_WORKER_ID",
    "UNKNOWN_WORKER_NAME",
    "build_work_session",
    "ingest_rows",
]
