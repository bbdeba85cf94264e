"""
Module: settlement_kernel.models.payroll_settings
Responsibility: ORM persistence for each company's closing-day / pay-day
    convention.  One row per company.
Architecture position: Kernel > Models.  May import from db/ only.
    MUST NOT import from services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - One row per company (uq_payroll_settings_company).
    - Both days in 1-31 and closing_day != pay_day, enforced in the database
      by check constraints and in PayrollSettingsService before flush.

Failure modes:
    - IntegrityError on a second row for the same company, or on a row that
      bypassed the service and violates a check constraint.
"""

from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, SmallInteger, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from settlement_kernel.db.base import TrackedBase, UUIDString


class PayrollSettingsModel(TrackedBase):
    """
    Per-company payroll convention.

    Contract:
        Created once per company and updated rarely.  ``created_by_id`` is
        kept on update; ``updated_by_id`` records the last editor.
    """

    __tablename__ = "payroll_settings"

    __table_args__ = (
        UniqueConstraint("company_id", name="uq_payroll_settings_company"),
        CheckConstraint("closing_day BETWEEN 1 AND 31", name="ck_closing_day_range"),
        CheckConstraint("pay_day BETWEEN 1 AND 31", name="ck_pay_day_range"),
        CheckConstraint("closing_day <> pay_day", name="ck_closing_day_ne_pay_day"),
    )

    company_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("companies.id"),
        nullable=False,
    )

    closing_day: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    pay_day: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<PayrollSettingsModel company={self.company_id} "
            f"closing={self.closing_day} pay={self.pay_day}>"
        )
