"""
Tests for PayrollSettingsService, the settings-edit boundary.

Covers:
- Create and update with creator / editor tracking, logged as create or update
- Rejection of out-of-range and equal days, logged before re-raising
- Missing settings
"""

from uuid import uuid4

import pytest
from sqlalchemy import select

from settlement_kernel.db.engine import session_scope
from settlement_kernel.exceptions import (
    ClosingDayEqualsPayDayError,
    InvalidClosingDayError,
    InvalidPayDayError,
    SettingsNotFoundError,
)
from settlement_kernel.models import PayrollSettingsModel
from settlement_kernel.services import PayrollSettingsService

from tests.conftest import TEST_ACTOR_ID


def _row(session, company_id):
    return session.execute(
        select(PayrollSettingsModel).where(PayrollSettingsModel.company_id == company_id)
    ).scalar_one()


class TestSaveSettings:
    """Upsert path."""

    def test_create(self, session, company):
        service = PayrollSettingsService(session)

        settings = service.save_settings(company.id, 20, 25, actor_id=TEST_ACTOR_ID)

        assert settings.company_id == str(company.id)
        row = _row(session, company.id)
        assert (row.closing_day, row.pay_day) == (20, 25)
        assert row.created_by_id == TEST_ACTOR_ID
        assert row.updated_by_id is None

    def test_update_keeps_creator(self, session, company):
        service = PayrollSettingsService(session)
        editor = uuid4()
        service.save_settings(company.id, 20, 25, actor_id=TEST_ACTOR_ID)

        service.save_settings(company.id, 31, 10, actor_id=editor)

        row = _row(session, company.id)
        assert (row.closing_day, row.pay_day) == (31, 10)
        assert row.created_by_id == TEST_ACTOR_ID
        assert row.updated_by_id == editor
        assert len(session.execute(select(PayrollSettingsModel)).scalars().all()) == 1

    def test_logs_saved(self, session, company, captured_logs):
        PayrollSettingsService(session).save_settings(company.id, 20, 25, actor_id=TEST_ACTOR_ID)

        record = next(r for r in captured_logs() if r["message"] == "settings_saved")
        assert record["action"] == "create"
        assert record["company_id"] == str(company.id)

    def test_logs_update(self, session, company, captured_logs):
        service = PayrollSettingsService(session)
        service.save_settings(company.id, 20, 25, actor_id=TEST_ACTOR_ID)

        settings = service.save_settings(company.id, 15, 30, actor_id=TEST_ACTOR_ID)

        assert (settings.closing_day, settings.pay_day) == (15, 30)
        actions = [r["action"] for r in captured_logs() if r["message"] == "settings_saved"]
        assert actions == ["create", "update"]

    def test_saved_inside_session_scope_commits(self, session, company):
        company_id = company.id
        session.commit()

        with session_scope() as scoped:
            PayrollSettingsService(scoped).save_settings(
                company_id, 20, 25, actor_id=TEST_ACTOR_ID,
            )

        assert _row(session, company_id).closing_day == 20


class TestRejectedSettings:
    """Nothing is written for a rejected edit."""

    def test_closing_31_pay_31_rejected(self, session, company, captured_logs):
        service = PayrollSettingsService(session)

        with pytest.raises(ClosingDayEqualsPayDayError):
            service.save_settings(company.id, 31, 31, actor_id=TEST_ACTOR_ID)

        assert service.find_settings(company.id) is None
        record = next(r for r in captured_logs() if r["message"] == "settings_rejected")
        assert record["reason"] == "CLOSING_DAY_EQUALS_PAY_DAY"

    def test_closing_day_out_of_range(self, session, company):
        with pytest.raises(InvalidClosingDayError):
            PayrollSettingsService(session).save_settings(company.id, 0, 25, actor_id=TEST_ACTOR_ID)

    def test_pay_day_out_of_range(self, session, company):
        with pytest.raises(InvalidPayDayError):
            PayrollSettingsService(session).save_settings(company.id, 20, 32, actor_id=TEST_ACTOR_ID)

    def test_rejected_update_leaves_row_unchanged(self, session, company):
        service = PayrollSettingsService(session)
        service.save_settings(company.id, 20, 25, actor_id=TEST_ACTOR_ID)

        with pytest.raises(ClosingDayEqualsPayDayError):
            service.save_settings(company.id, 25, 25, actor_id=TEST_ACTOR_ID)

        assert service.get_settings(company.id).closing_day == 20


class TestGetSettings:
    """Reads."""

    def test_get_existing(self, session, company, add_settings):
        add_settings(closing_day=15, pay_day=30)

        settings = PayrollSettingsService(session).get_settings(company.id)

        assert (settings.closing_day, settings.pay_day) == (15, 30)

    def test_missing_raises(self, session, company):
        with pytest.raises(SettingsNotFoundError) as exc_info:
            PayrollSettingsService(session).get_settings(company.id)

        assert exc_info.value.company_id == str(company.id)
        assert exc_info.value.code == "SETTINGS_NOT_FOUND"

    def test_find_returns_none(self, session, company):
        assert PayrollSettingsService(session).find_settings(company.id) is None
