"""
PayrollSettlementService -- imperative shell for payroll settlement.

Responsibility:
    Wire the stores, the clock and the pure engines together: read a
    company's settings and work sessions, compute periods, aggregate, and
    assemble the format-neutral export payload.

Architecture position:
    Services -- stateful orchestration over engines + kernel.
    Receives its Session, Clock and SettlementConfig by constructor
    injection; holds no module-level client.

Invariants enforced:
    - Engines never read the clock: "today" is taken from the injected
      Clock in the configured payroll timezone and passed in explicitly.
    - Defaults (closing 20 / pay 25) are used only when a caller passes
      ``use_defaults=True``; otherwise a missing settings row raises
      SettingsNotFoundError.
    - Read-only: this service never flushes or commits.

Failure modes:
    - SettingsNotFoundError when the company has no settings row.
    - Partial data never fails a run; it is returned as warnings.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from settlement_config.schema import SettlementConfig
from settlement_engines.aggregation import aggregate, summarize_totals
from settlement_engines.period import compute_period
from settlement_engines.period_series import generate_periods
from settlement_kernel.domain.clock import Clock
from settlement_kernel.domain.dtos import PartialDataWarning
from settlement_kernel.domain.values import (
    PayrollExportData,
    PayrollPeriod,
    PayrollSettings,
    PayrollSummary,
    PayrollTotals,
)
from settlement_kernel.exceptions import SettingsNotFoundError
from settlement_kernel.logging_config import LogContext, get_logger
from settlement_kernel.selectors.settings_selector import PayrollSettingsSelector
from settlement_kernel.selectors.work_session_selector import WorkSessionSelector
from settlement_ingestion.work_sessions import ingest_rows

logger = get_logger("services.payroll")


@dataclass(frozen=True)
class SettlementResult:
    """Summaries for one period with their totals and data warnings."""

    period: PayrollPeriod
    summaries: tuple[PayrollSummary, ...]
    totals: PayrollTotals
    warnings: tuple[PartialDataWarning, ...] = ()

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


class PayrollSettlementService:
    """
    Settlement queries for one company at a time.

    Usage:
        service = PayrollSettlementService(session, SystemClock(), config)
        period = service.current_period(company_id)
        result = service.summaries(company_id, period)
    """

    def __init__(self, session: Session, clock: Clock, config: SettlementConfig):
        self._session = session
        self._clock = clock
        self._config = config
        self._tz = ZoneInfo(config.timezone)
        self._settings = PayrollSettingsSelector(session)
        self._sessions = WorkSessionSelector(session)

    def today(self) -> date:
        """Calendar date of the injected clock in the payroll timezone."""
        return self._clock.now().astimezone(self._tz).date()

    def settings_for(self, company_id: UUID, use_defaults: bool = False) -> PayrollSettings:
        settings = self._settings.get(company_id)
        if settings is not None:
            return settings
        if not use_defaults:
            logger.warning(
                "settings_not_found",
                extra={"company_id": str(company_id)},
            )
            raise SettingsNotFoundError(str(company_id))
        logger.info(
            "settings_defaulted",
            extra={
                "company_id": str(company_id),
                "closing_day": self._config.default_closing_day,
                "pay_day": self._config.default_pay_day,
            },
        )
        return PayrollSettings(
            company_id=str(company_id),
            closing_day=self._config.default_closing_day,
            pay_day=self._config.default_pay_day,
        )

    def current_period(self, company_id: UUID, use_defaults: bool = False) -> PayrollPeriod:
        """Most recently closed period as of today."""
        settings = self.settings_for(company_id, use_defaults)
        return compute_period(self.today(), settings.closing_day, settings.pay_day)

    def available_periods(
        self,
        company_id: UUID,
        months_back: int | None = None,
        use_defaults: bool = False,
    ) -> tuple[PayrollPeriod, ...]:
        """Selectable periods, most recent first."""
        settings = self.settings_for(company_id, use_defaults)
        return generate_periods(
            settings.closing_day,
            settings.pay_day,
            months_back if months_back is not None else self._config.months_back,
            self.today(),
        )

    def summaries(
        self,
        company_id: UUID,
        period: PayrollPeriod,
        worker_id: UUID | None = None,
    ) -> SettlementResult:
        """
        Aggregate the company's sessions dated inside ``period``.

        Args:
            company_id: Company to settle.
            period: Period whose inclusive date range selects sessions.
            worker_id: When given, settle only this worker.
        """
        with LogContext.bind(company_id=str(company_id), period_key=period.period_key):
            rows = self._sessions.rows_for_period(
                company_id, period.start_date, period.end_date, worker_id
            )
            ingested = ingest_rows(rows, source="store")
            summaries = aggregate(ingested.sessions, period)
            totals = summarize_totals(summaries)
            logger.info(
                "settlement_computed",
                extra={
                    "worker_filter": str(worker_id) if worker_id else None,
                    "worker_count": totals.worker_count,
                    "total_wage": totals.total_wage,
                    "warning_count": len(ingested.warnings),
                },
            )
        return SettlementResult(
            period=period,
            summaries=summaries,
            totals=totals,
            warnings=ingested.warnings,
        )

    def build_export_data(
        self,
        company_id: UUID,
        period: PayrollPeriod,
        exported_by: str,
        worker_id: UUID | None = None,
        include_project_breakdown: bool | None = None,
    ) -> PayrollExportData:
        """
        Format-neutral export payload for ``period``.

        ``export_date`` is the injected clock's time in the payroll
        timezone.  Rendering (PDF/CSV/XLSX) is left to the caller.
        """
        result = self.summaries(company_id, period, worker_id)
        company_name = self._settings.company_name(company_id)
        if company_name is None:
            logger.warning(
                "company_name_missing",
                extra={"company_id": str(company_id)},
            )
            company_name = str(company_id)
        if include_project_breakdown is None:
            include_project_breakdown = self._config.include_project_breakdown

        export = PayrollExportData(
            company_id=str(company_id),
            company_name=company_name,
            period=period,
            summaries=result.summaries,
            totals=result.totals,
            export_date=self._clock.now().astimezone(self._tz),
            exported_by=exported_by,
            include_project_breakdown=include_project_breakdown,
            warnings=result.warnings,
        )
        logger.info(
            "export_data_built",
            extra={
                "company_id": str(company_id),
                "period_key": period.period_key,
                "summary_count": len(export.summaries),
                "exported_by": exported_by,
            },
        )
        return export
