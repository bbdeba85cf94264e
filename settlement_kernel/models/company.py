"""
Module: settlement_kernel.models.company
Responsibility: ORM persistence for the companies whose payroll is settled.
    Only the display name is needed here; it is printed on payroll exports.
Architecture position: Kernel > Models.  May import from db/ only.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from settlement_kernel.db.base import Base


class Company(Base):
    """A tenant company.  Its ``id`` is the company_id used everywhere else."""

    __tablename__ = "companies"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Company {self.id}: {self.name}>"
