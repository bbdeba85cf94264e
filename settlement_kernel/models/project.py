"""
Module: settlement_kernel.models.project
Responsibility: ORM persistence for construction projects (sites) that work
    sessions are booked against.
Architecture position: Kernel > Models.  May import from db/ only.
"""

from uuid import UUID

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from settlement_kernel.db.base import Base, UUIDString


class Project(Base):
    """A project belonging to one company.  ``name`` may be NULL."""

    __tablename__ = "projects"

    __table_args__ = (
        Index("idx_project_company", "company_id"),
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

    def __repr__(self) -> str:
        return f"<Project {self.id}: {self.name}>"
