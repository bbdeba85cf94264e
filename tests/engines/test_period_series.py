"""
Tests for the selectable period series.

Covers:
- Newest-first ordering from the first day of each month
- Contiguous, non-repeating periods across year boundaries
- Closing day 1 and clamped closing days
- months_back validation
"""

from datetime import date, timedelta

import pytest

from settlement_engines.period import compute_period
from settlement_engines.period_series import PeriodSeriesGenerator, generate_periods
from settlement_kernel.domain.values import PayrollSettings
from settlement_kernel.exceptions import InvalidClosingDayError, InvalidReferenceDateError


class TestGeneratePeriods:
    """Closing day 20, pay day 25."""

    def test_three_months_newest_first(self):
        periods = generate_periods(20, 25, 3, date(2024, 3, 15))

        assert [(p.start_date, p.end_date, p.pay_date) for p in periods] == [
            (date(2024, 1, 21), date(2024, 2, 20), date(2024, 3, 25)),
            (date(2023, 12, 21), date(2024, 1, 20), date(2024, 2, 25)),
            (date(2023, 11, 21), date(2023, 12, 20), date(2024, 1, 25)),
        ]

    def test_each_element_matches_first_of_month_calculation(self):
        periods = generate_periods(20, 25, 12, date(2024, 6, 30))

        for i, period in enumerate(periods):
            month = 6 - i
            year = 2024 if month >= 1 else 2023
            month = month if month >= 1 else month + 12
            assert period == compute_period(date(year, month, 1), 20, 25)

    def test_as_of_day_within_month_is_irrelevant(self):
        assert generate_periods(20, 25, 4, date(2024, 3, 1)) == generate_periods(
            20, 25, 4, date(2024, 3, 31)
        )

    def test_periods_are_contiguous_and_distinct(self):
        periods = generate_periods(20, 25, 24, date(2024, 3, 15))

        assert len(set(periods)) == 24
        for newer, older in zip(periods, periods[1:]):
            assert older.end_date + timedelta(days=1) == newer.start_date

    def test_single_month(self):
        periods = generate_periods(20, 25, 1, "2024-03-15")

        assert len(periods) == 1
        assert periods[0].end_date == date(2024, 2, 20)


class TestSelectorEdges:
    """Closing days at either end of the month."""

    def test_closing_day_1_includes_current_month(self):
        periods = generate_periods(1, 25, 2, date(2024, 3, 15))

        assert periods[0].start_date == date(2024, 2, 2)
        assert periods[0].end_date == date(2024, 3, 1)
        assert periods[1].end_date == date(2024, 2, 1)

    def test_closing_day_31_clamps_each_month(self):
        periods = generate_periods(31, 10, 3, date(2024, 3, 31))

        assert [(p.start_date, p.end_date) for p in periods] == [
            (date(2024, 2, 1), date(2024, 2, 29)),
            (date(2024, 1, 1), date(2024, 1, 31)),
            (date(2023, 12, 1), date(2023, 12, 31)),
        ]

    def test_closing_day_31_still_contiguous(self):
        periods = generate_periods(31, 10, 13, date(2024, 3, 31))

        for newer, older in zip(periods, periods[1:]):
            assert older.end_date + timedelta(days=1) == newer.start_date


class TestValidation:
    """Rejected arguments."""

    @pytest.mark.parametrize("months_back", [0, -1, True, 1.5, "3", None])
    def test_months_back_must_be_positive_int(self, months_back):
        with pytest.raises(ValueError, match="months_back"):
            generate_periods(20, 25, months_back, date(2024, 3, 15))

    def test_invalid_closing_day(self):
        with pytest.raises(InvalidClosingDayError):
            generate_periods(32, 25, 3, date(2024, 3, 15))

    def test_invalid_as_of(self):
        with pytest.raises(InvalidReferenceDateError):
            generate_periods(20, 25, 3, "March 2024")


class TestPeriodSeriesGenerator:
    """Facade and logging."""

    def test_periods_for_settings(self):
        settings = PayrollSettings(company_id="c1", closing_day=20, pay_day=25)

        periods = PeriodSeriesGenerator().periods_for_settings(settings, 2, date(2024, 3, 15))

        assert periods == generate_periods(20, 25, 2, date(2024, 3, 15))

    def test_logs_newest_and_oldest(self, captured_logs):
        PeriodSeriesGenerator().generate_periods(20, 25, 3, date(2024, 3, 15))

        record = next(r for r in captured_logs() if r["message"] == "periods_generated")
        assert record["newest"] == "2024-01-21..2024-02-20"
        assert record["oldest"] == "2023-11-21..2023-12-20"
        assert record["as_of"] == "2024-03-15"
