"""
Module: settlement_engines.period
Responsibility:
    Map a reference date and a company's (closing_day, pay_day) convention to
    the settlement period most recently closed as of that date.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import settlement_kernel.domain, exceptions and logging_config.

Invariants enforced:
    - Purity: no clock access.  The reference date is always an argument.
    - Last closed period: end_date <= reference date, and no closing date
      falls strictly between them.  The dates mapped to one period run from
      its closing date to the day before the next closing date.
    - Tiling: each period starts the day after the previous one ends.
    - Pay lag: pay_date lies in the calendar month after end_date's month.
    - Clamping: day selectors above a month's length select its last day
      (closing_day=31 in February closes on Feb 28, or Feb 29 in leap years).

Failure modes:
    - InvalidClosingDayError / InvalidPayDayError for selectors outside 1-31.
    - InvalidReferenceDateError for a reference date that cannot be parsed.
      There is NO fallback to "today": a guessed period would corrupt a wage
      calculation.

Usage:
    from datetime import date
    from settlement_engines.period import compute_period

    period = compute_period(date(2024, 3, 25), closing_day=20, pay_day=25)
    # PayrollPeriod(start_date=2024-02-21, end_date=2024-03-20,
    #               closing_date=2024-03-20, pay_date=2024-04-25)
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

from settlement_kernel.domain.validation import require_closing_day, require_pay_day
from settlement_kernel.domain.values import PayrollPeriod, PayrollSettings
from settlement_kernel.exceptions import InvalidReferenceDateError
from settlement_kernel.logging_config import get_logger
from settlement_engines.tracer import traced_engine

logger = get_logger("engines.period")


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move (year, month) by ``delta`` calendar months, rolling the year."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def clamp_day(year: int, month: int, day: int) -> date:
    """The ``day``-th of the month, or the month's last day if shorter."""
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last))


def coerce_reference_date(value: object) -> date:
    """
    Interpret ``value`` strictly as a calendar date.

    Accepts ``date``, ``datetime`` (its date part) and ISO-8601 strings
    (``YYYY-MM-DD`` or a full ISO timestamp).

    Raises:
        InvalidReferenceDateError: for anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            raise InvalidReferenceDateError(value) from None
    raise InvalidReferenceDateError(value)


def _compute_period(reference: date, closing_day: int, pay_day: int) -> PayrollPeriod:
    # Compare against the closing day as it falls in the reference month, so
    # a short month's clamped closing date maps to its own period.
    if reference.day >= clamp_day(reference.year, reference.month, closing_day).day:
        end_year, end_month = reference.year, reference.month
    else:
        end_year, end_month = shift_month(reference.year, reference.month, -1)

    end = clamp_day(end_year, end_month, closing_day)
    prev_year, prev_month = shift_month(end_year, end_month, -1)
    start = clamp_day(prev_year, prev_month, closing_day) + timedelta(days=1)
    pay_year, pay_month = shift_month(end_year, end_month, 1)
    pay_date = clamp_day(pay_year, pay_month, pay_day)

    return PayrollPeriod(
        start_date=start,
        end_date=end,
        closing_date=end,
        pay_date=pay_date,
    )


@traced_engine(
    "period", "1.0",
    fingerprint_fields=("reference_date", "closing_day", "pay_day"),
)
def compute_period(
    reference_date: date | datetime | str,
    closing_day: int,
    pay_day: int,
) -> PayrollPeriod:
    """
    Settlement period most recently closed on or before ``reference_date``.

    Let ``d`` be the reference day of month and ``c`` the closing day in the
    reference month.  If ``d >= c`` the period closed this month and started
    the day after last month's closing day; otherwise it closed last month
    and started the day after the closing day of the month before.  Wages
    are paid on ``pay_day`` of the month after closing.
    """
    closing = require_closing_day(closing_day)
    pay = require_pay_day(pay_day)
    reference = coerce_reference_date(reference_date)

    period = _compute_period(reference, closing, pay)
    logger.debug(
        "period_computed",
        extra={
            "reference_date": reference,
            "closing_day": closing,
            "pay_day": pay,
            "start_date": period.start_date,
            "end_date": period.end_date,
            "pay_date": period.pay_date,
        },
    )
    return period


class PeriodCalculator:
    """
    Stateless facade over ``compute_period``.

    Contract:
        Holds no state; instances are interchangeable and safe to share
        across threads.
    """

    def compute_period(
        self,
        reference_date: date | datetime | str,
        closing_day: int,
        pay_day: int,
    ) -> PayrollPeriod:
        return compute_period(reference_date, closing_day, pay_day)

    def period_for_settings(
        self,
        reference_date: date | datetime | str,
        settings: PayrollSettings,
    ) -> PayrollPeriod:
        return compute_period(reference_date, settings.closing_day, settings.pay_day)
