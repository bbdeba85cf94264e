"""
Module: settlement_kernel.models.worker
Responsibility: ORM persistence for workers (the people whose sessions are
    settled).  Work sessions join here for the worker display name.
Architecture position: Kernel > Models.  May import from db/ only.

Failure modes:
    - A NULL name is allowed; ingestion reports MISSING_WORKER_NAME and the
      aggregate carries the fallback name.
"""

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from settlement_kernel.db.base import Base, UUIDString


class Worker(Base):
    """A worker belonging to one company."""

    __tablename__ = "workers"

    __table_args__ = (
        Index("idx_worker_company", "company_id"),
    )

    company_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("companies.id"),
        nullable=False,
    )

    name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    def __repr__(self) -> str:
        return f"<Worker {self.id}: {self.name}>"
