"""
Module: settlement_kernel.selectors.settings_selector
Responsibility: Read a company's payroll settings and display name.
Architecture position: Kernel > Selectors.  Read-only.
"""

from uuid import UUID

from sqlalchemy import select

from settlement_kernel.domain.values import PayrollSettings
from settlement_kernel.models.company import Company
from settlement_kernel.models.payroll_settings import PayrollSettingsModel
from settlement_kernel.selectors.base import BaseSelector


class PayrollSettingsSelector(BaseSelector):
    """Settings lookups by company id.  Absence is returned as None."""

    def get(self, company_id: UUID) -> PayrollSettings | None:
        row = self.session.execute(
            select(PayrollSettingsModel).where(
                PayrollSettingsModel.company_id == company_id
            )
        ).scalar_one_or_none()
        if row is None:
            return None
        return PayrollSettings(
            company_id=str(row.company_id),
            closing_day=row.closing_day,
            pay_day=row.pay_day,
        )

    def company_name(self, company_id: UUID) -> str | None:
        return self.session.execute(
            select(Company.name).where(Company.id == company_id)
        ).scalar_one_or_none()
