"""
Service layer for payroll settings.

Owns the settings-edit boundary: the only write path to the
``payroll_settings`` table, and the only place the closing-day != pay-day
rule is enforced.  Returns PayrollSettings values, never ORM rows.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select

from settlement_kernel.domain.validation import validate_payroll_settings
from settlement_kernel.domain.values import PayrollSettings
from settlement_kernel.exceptions import ConfigurationError, SettingsNotFoundError
from settlement_kernel.logging_config import get_logger
from settlement_kernel.models.payroll_settings import PayrollSettingsModel
from settlement_kernel.selectors.settings_selector import PayrollSettingsSelector
from settlement_kernel.services.base import BaseService

logger = get_logger("services.settings")


class PayrollSettingsService(BaseService[PayrollSettingsModel]):
    """
    Read and upsert a company's closing-day / pay-day convention.

    Flushes only; the caller commits.
    """

    def get_settings(self, company_id: UUID) -> PayrollSettings:
        """
        Current settings of a company.

        Raises:
            SettingsNotFoundError: If the company has no settings row.
        """
        settings = PayrollSettingsSelector(self.session).get(company_id)
        if settings is None:
            logger.warning(
                "settings_not_found",
                extra={"company_id": str(company_id)},
            )
            raise SettingsNotFoundError(str(company_id))
        return settings

    def find_settings(self, company_id: UUID) -> PayrollSettings | None:
        return PayrollSettingsSelector(self.session).get(company_id)

    def save_settings(
        self,
        company_id: UUID,
        closing_day: int,
        pay_day: int,
        actor_id: UUID,
    ) -> PayrollSettings:
        """
        Create or update the company's settings.

        A new row records ``actor_id`` as its creator.  An existing row keeps
        its creator and records ``actor_id`` as the last editor.

        Raises:
            InvalidClosingDayError: closing_day outside 1-31.
            InvalidPayDayError: pay_day outside 1-31.
            ClosingDayEqualsPayDayError: closing_day == pay_day.
        """
        try:
            closing, pay = validate_payroll_settings(closing_day, pay_day)
        except ConfigurationError as exc:
            logger.warning(
                "settings_rejected",
                extra={
                    "company_id": str(company_id),
                    "closing_day": closing_day,
                    "pay_day": pay_day,
                    "reason": exc.code,
                },
            )
            raise

        row = self.session.execute(
            select(PayrollSettingsModel).where(
                PayrollSettingsModel.company_id == company_id
            )
        ).scalar_one_or_none()

        created = row is None
        if created:
            row = PayrollSettingsModel(
                company_id=company_id,
                closing_day=closing,
                pay_day=pay,
                created_by_id=actor_id,
            )
            self.session.add(row)
        else:
            row.closing_day = closing
            row.pay_day = pay
            row.updated_by_id = actor_id

        self.session.flush()

        logger.info(
            "settings_saved",
            extra={
                "company_id": str(company_id),
                "closing_day": closing,
                "pay_day": pay,
                "action": "create" if created else "update",
            },
        )
        return PayrollSettings(
            company_id=str(company_id),
            closing_day=closing,
            pay_day=pay,
        )
