"""
Module: settlement_engines.period_series
Responsibility:
    Produce the list of selectable settlement periods for a company, most
    recent first, by applying the period calculation to the first day of
    each of the last N calendar months.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Purity: ``as_of`` is a parameter; the service supplies it from its
      injected Clock.
    - Ordering: element ``i`` is the period computed for the first day of the
      calendar month ``i`` months before ``as_of``'s month.
    - Distinct: consecutive first-of-month references map to consecutive
      periods, so the series never repeats a period.

Failure modes:
    - ValueError when months_back is not a positive integer.
    - InvalidClosingDayError / InvalidPayDayError for bad selectors.
    - InvalidReferenceDateError for an unparseable ``as_of``.
"""

from __future__ import annotations

from datetime import date, datetime

from settlement_kernel.domain.validation import require_closing_day, require_pay_day
from settlement_kernel.domain.values import PayrollPeriod, PayrollSettings
from settlement_kernel.logging_config import get_logger
from settlement_engines.period import _compute_period, coerce_reference_date, shift_month
from settlement_engines.tracer import traced_engine

logger = get_logger("engines.period_series")


@traced_engine(
    "period_series", "1.0",
    fingerprint_fields=("closing_day", "pay_day", "months_back", "as_of"),
)
def generate_periods(
    closing_day: int,
    pay_day: int,
    months_back: int,
    as_of: date | datetime | str,
) -> tuple[PayrollPeriod, ...]:
    """
    Periods for the last ``months_back`` calendar months, newest first.

    Each reference date is the first of a month; with any closing day above
    1 that lands in the period closing the month before, with closing day 1
    it lands in the period closing that same day.
    """
    if isinstance(months_back, bool) or not isinstance(months_back, int) or months_back < 1:
        raise ValueError(f"months_back must be a positive integer, got {months_back!r}")
    closing = require_closing_day(closing_day)
    pay = require_pay_day(pay_day)
    anchor = coerce_reference_date(as_of)

    periods: list[PayrollPeriod] = []
    for i in range(months_back):
        year, month = shift_month(anchor.year, anchor.month, -i)
        periods.append(_compute_period(date(year, month, 1), closing, pay))

    logger.debug(
        "periods_generated",
        extra={
            "as_of": anchor,
            "months_back": months_back,
            "newest": periods[0].period_key,
            "oldest": periods[-1].period_key,
        },
    )
    return tuple(periods)


class PeriodSeriesGenerator:
    """Stateless facade over ``generate_periods``."""

    def generate_periods(
        self,
        closing_day: int,
        pay_day: int,
        months_back: int,
        as_of: date | datetime | str,
    ) -> tuple[PayrollPeriod, ...]:
        return generate_periods(closing_day, pay_day, months_back, as_of)

    def periods_for_settings(
        self,
        settings: PayrollSettings,
        months_back: int,
        as_of: date | datetime | str,
    ) -> tuple[PayrollPeriod, ...]:
        return generate_periods(settings.closing_day, settings.pay_day, months_back, as_of)
