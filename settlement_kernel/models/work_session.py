"""
Module: settlement_kernel.models.work_session
Responsibility: ORM persistence for raw per-day work records.  One row is one
    worker's work on one date for one project.
Architecture position: Kernel > Models.  May import from db/ only.

Invariants enforced:
    - work_date is always present.
    - Worker and project linkage and the four numeric columns are nullable:
      rows recorded by the field app may be incomplete.  Incompleteness is
      reported by settlement_ingestion as PartialDataWarning, never fixed
      here.
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import ForeignKey, Index, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from settlement_kernel.db.base import TrackedBase, UUIDString


class WorkSessionModel(TrackedBase):
    """A recorded work session."""

    __tablename__ = "work_sessions"

    __table_args__ = (
        Index("idx_work_session_company_date", "company_id", "work_date"),
        Index("idx_work_session_worker", "worker_id"),
    )

    company_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("companies.id"),
        nullable=False,
    )

    worker_id: Mapped[UUID | None] = mapped_column(
        UUIDString(),
        ForeignKey("workers.id"),
        nullable=True,
    )

    project_id: Mapped[UUID | None] = mapped_column(
        UUIDString(),
        ForeignKey("projects.id"),
        nullable=True,
    )

    work_date: Mapped[date] = mapped_column(nullable=False)

    total_hours: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)

    overtime_hours: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)

    daily_wage: Mapped[Decimal | None] = mapped_column(nullable=True)

    overtime_rate: Mapped[Decimal | None] = mapped_column(nullable=True)

    def __repr__(self) -> str:
        return f"<WorkSessionModel {self.id} worker={self.worker_id} date={self.work_date}>"
