"""
Validation -- day-selector checks shared by the engines and the settings boundary.

``require_closing_day`` / ``require_pay_day`` guard every period calculation.
``validate_payroll_settings`` adds the settings-edit rule that the two days
must differ; the calculator itself never applies that rule.
"""

from __future__ import annotations

from settlement_kernel.domain.values import PayrollSettings
from settlement_kernel.exceptions import (
    ClosingDayEqualsPayDayError,
    InvalidClosingDayError,
    InvalidPayDayError,
)

MIN_DAY = 1
MAX_DAY = 31


def _is_day_selector(value: object) -> bool:
    # bool is an int subclass; True must not pass as day 1
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MIN_DAY <= value <= MAX_DAY
    )


def require_closing_day(closing_day: object) -> int:
    if not _is_day_selector(closing_day):
        raise InvalidClosingDayError(closing_day)
    return closing_day  # type: ignore[return-value]


def require_pay_day(pay_day: object) -> int:
    if not _is_day_selector(pay_day):
        raise InvalidPayDayError(pay_day)
    return pay_day  # type: ignore[return-value]


def validate_payroll_settings(closing_day: object, pay_day: object) -> tuple[int, int]:
    """
    Validate a settings edit.

    Raises:
        InvalidClosingDayError: closing_day outside 1-31.
        InvalidPayDayError: pay_day outside 1-31.
        ClosingDayEqualsPayDayError: both days equal.
    """
    closing = require_closing_day(closing_day)
    pay = require_pay_day(pay_day)
    if closing == pay:
        raise ClosingDayEqualsPayDayError(closing)
    return closing, pay


def build_payroll_settings(company_id: str, closing_day: object, pay_day: object) -> PayrollSettings:
    closing, pay = validate_payroll_settings(closing_day, pay_day)
    return PayrollSettings(company_id=company_id, closing_day=closing, pay_day=pay)
