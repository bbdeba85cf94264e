"""
Module: settlement_kernel.selectors.work_session_selector
Responsibility: Fetch the raw work-session rows of a company for a date range,
    joined to workers and projects for their display names.
Architecture position: Kernel > Selectors.  Read-only.

Invariants enforced:
    - Both range ends are inclusive.
    - Rows are ordered by work_date, then session id, so aggregation output
      order is reproducible.
    - Outer joins: a session whose worker or project row is missing is still
      returned, with a NULL name, and reported later by ingestion.

Non-goals:
    - Rows are NOT validated here.  They are plain mappings handed to
      ``settlement_ingestion.work_sessions.ingest_rows``.
"""

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import select

from settlement_kernel.models.project import Project
from settlement_kernel.models.work_session import WorkSessionModel
from settlement_kernel.models.worker import Worker
from settlement_kernel.selectors.base import BaseSelector


class WorkSessionSelector(BaseSelector):
    """Work-session queries for settlement."""

    def rows_for_period(
        self,
        company_id: UUID,
        start_date: date,
        end_date: date,
        worker_id: UUID | None = None,
    ) -> list[dict[str, Any]]:
        """
        Raw rows dated between start_date and end_date inclusive.

        Args:
            company_id: Company whose sessions are read.
            start_date: First work date included.
            end_date: Last work date included.
            worker_id: When given, only that worker's sessions.
        """
        ws = WorkSessionModel
        stmt = (
            select(
                ws.id.label("id"),
                ws.worker_id.label("worker_id"),
                Worker.name.label("worker_name"),
                ws.project_id.label("project_id"),
                Project.name.label("project_name"),
                ws.work_date.label("work_date"),
                ws.total_hours.label("total_hours"),
                ws.overtime_hours.label("overtime_hours"),
                ws.daily_wage.label("daily_wage"),
                ws.overtime_rate.label("overtime_rate"),
            )
            .outerjoin(Worker, Worker.id == ws.worker_id)
            .outerjoin(Project, Project.id == ws.project_id)
            .where(
                ws.company_id == company_id,
                ws.work_date >= start_date,
                ws.work_date <= end_date,
            )
            .order_by(ws.work_date, ws.id)
        )
        if worker_id is not None:
            stmt = stmt.where(ws.worker_id == worker_id)

        return [dict(row) for row in self.session.execute(stmt).mappings()]
