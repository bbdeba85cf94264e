"""
Tests for engine initialization and schema constraints.
"""

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import QueuePool, StaticPool

from settlement_kernel.db.engine import (
    _engine_options,
    get_session,
    is_postgres,
    reset_engine,
    session_scope,
)
from settlement_kernel.models import Company, PayrollSettingsModel

from tests.conftest import TEST_ACTOR_ID


def _options(backend, database):
    return _engine_options(backend, database, 20, 10, True, 30, 1800)


class TestEngineOptions:
    """Pooling per backend."""

    def test_sqlite_memory_shares_one_connection(self):
        options = _options("sqlite", None)

        assert options["poolclass"] is StaticPool
        assert options["connect_args"] == {"check_same_thread": False}

    def test_sqlite_file_uses_defaults(self):
        assert _options("sqlite", "settlement.db") == {}

    def test_postgres_pooled(self):
        options = _options("postgresql", "settlement")

        assert options["poolclass"] is QueuePool
        assert options["isolation_level"] == "READ COMMITTED"
        assert options["pool_size"] == 20


class TestUninitialized:
    """Access before init_engine_from_url."""

    def test_get_session_raises(self):
        reset_engine()

        with pytest.raises(RuntimeError, match="not initialized"):
            get_session()

        assert is_postgres() is False


class TestSchemaConstraints:
    """Database-level guards on payroll_settings."""

    def _settings(self, company_id, closing_day, pay_day):
        return PayrollSettingsModel(
            company_id=company_id,
            closing_day=closing_day,
            pay_day=pay_day,
            created_by_id=TEST_ACTOR_ID,
        )

    def test_equal_days_rejected(self, session, company):
        session.add(self._settings(company.id, 25, 25))

        with pytest.raises(IntegrityError):
            session.flush()

    def test_out_of_range_rejected(self, session, company):
        session.add(self._settings(company.id, 0, 25))

        with pytest.raises(IntegrityError):
            session.flush()

    def test_one_row_per_company(self, session, company, add_settings):
        add_settings()
        session.add(self._settings(company.id, 15, 30))

        with pytest.raises(IntegrityError):
            session.flush()


class TestSessionScope:
    """Commit and rollback."""

    def test_rollback_on_error(self, session):
        with pytest.raises(ValueError):
            with session_scope() as scoped:
                scoped.add(Company(name="Discarded"))
                scoped.flush()
                raise ValueError("abort")

        assert session.query(Company).filter_by(name="Discarded").count() == 0

    def test_commit_on_success(self, session):
        with session_scope() as scoped:
            scoped.add(Company(name="Kept"))

        assert session.query(Company).filter_by(name="Kept").count() == 1
