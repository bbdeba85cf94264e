"""
Values -- Immutable domain value objects for payroll settlement.

Responsibility:
    Provides the value types exchanged between the settlement engines, the
    ingestion boundary, the stores and the export sink: PayrollSettings,
    PayrollPeriod, WorkSession, ProjectWorkSummary, PayrollSummary,
    PayrollTotals and PayrollExportData.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by engines, ingestion, selectors and services.

Invariants enforced:
    - Money and hours are ``Decimal``; floats never enter a wage total.
    - PayrollPeriod.closing_date == PayrollPeriod.end_date.
    - PayrollSummary.total_wage == regular_wage + overtime_wage, and the
      project wages sum to total_wage (guaranteed by the aggregator that
      builds summaries; not re-checked here).

Failure modes:
    - ValueError when a PayrollPeriod is built with start_date > end_date
      or closing_date != end_date.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any

ZERO = Decimal("0")


def _num(value: Decimal) -> str:
    """Render a Decimal for format-neutral output without float conversion."""
    return str(value)


@dataclass(frozen=True, slots=True)
class PayrollSettings:
    """
    Per-company closing-day / pay-day convention.

    Contract:
        Both days are day-of-month selectors in 1-31; values above a month's
        length select that month's last day.  ``closing_day != pay_day`` is
        enforced where settings are edited (see
        ``settlement_kernel.domain.validation.validate_payroll_settings``),
        not here and not by the engines.
    """

    company_id: str
    closing_day: int
    pay_day: int


@dataclass(frozen=True, slots=True)
class PayrollPeriod:
    """
    One settlement period: the inclusive span of work days settled together.

    Contract:
        Computed from a reference date and PayrollSettings, never persisted
        as authoritative state.  Two periods are equal when all four dates
        are equal.
    """

    start_date: date
    end_date: date
    closing_date: date
    pay_date: date

    def __post_init__(self) -> None:
        if self.start_date > self.end_date:
            raise ValueError(
                f"start_date ({self.start_date}) cannot be after end_date ({self.end_date})"
            )
        if self.closing_date != self.end_date:
            raise ValueError(
                f"closing_date ({self.closing_date}) must equal end_date ({self.end_date})"
            )

    def contains(self, day: date) -> bool:
        """True if ``day`` falls inside the period (both ends inclusive)."""
        return self.start_date <= day <= self.end_date

    @property
    def day_count(self) -> int:
        return (self.end_date - self.start_date).days + 1

    @property
    def period_key(self) -> str:
        """Stable identifier, e.g. ``2024-01-21..2024-02-20``."""
        return f"{self.start_date.isoformat()}..{self.end_date.isoformat()}"

    def to_dict(self) -> dict[str, str]:
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "closing_date": self.closing_date.isoformat(),
            "pay_date": self.pay_date.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class WorkSession:
    """
    One worker's recorded work on one date for one project.

    Contract:
        Produced by the ingestion boundary from a store row or file row.
        ``worker_name`` / ``project_name`` are the denormalized names carried
        by the row (or fallbacks when linkage was missing).
    """

    session_id: str
    worker_id: str
    worker_name: str
    project_id: str
    project_name: str
    work_date: date | None
    total_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    daily_wage: Decimal = ZERO
    overtime_rate: Decimal = ZERO

    @property
    def overtime_wage(self) -> Decimal:
        return self.overtime_hours * self.overtime_rate

    @property
    def wage(self) -> Decimal:
        """Daily wage plus overtime wage for this session."""
        return self.daily_wage + self.overtime_wage


@dataclass(frozen=True, slots=True)
class ProjectWorkSummary:
    """Per-project totals for one worker within one period."""

    project_id: str
    project_name: str
    work_days: int
    work_hours: Decimal
    overtime_hours: Decimal
    wage: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "project_id": self.project_id,
            "project_name": self.project_name,
            "work_days": self.work_days,
            "work_hours": _num(self.work_hours),
            "overtime_hours": _num(self.overtime_hours),
            "wage": _num(self.wage),
        }


@dataclass(frozen=True, slots=True)
class PayrollSummary:
    """
    Aggregated totals for one worker over one period.

    Guarantees (when built by SessionAggregator):
        - total_wage == regular_wage + overtime_wage
        - sum(p.wage for p in projects) == total_wage
        - projects are in first-seen order
    """

    worker_id: str
    worker_name: str
    period: PayrollPeriod | None
    work_days: int
    work_hours: Decimal
    overtime_hours: Decimal
    regular_wage: Decimal
    overtime_wage: Decimal
    total_wage: Decimal
    projects: tuple[ProjectWorkSummary, ...] = ()

    def project(self, project_id: str) -> ProjectWorkSummary | None:
        for p in self.projects:
            if p.project_id == project_id:
                return p
        return None

    def to_dict(self, *, include_projects: bool = True) -> dict[str, Any]:
        data: dict[str, Any] = {
            "worker_id": self.worker_id,
            "worker_name": self.worker_name,
            "period": self.period.to_dict() if self.period else None,
            "work_days": self.work_days,
            "work_hours": _num(self.work_hours),
            "overtime_hours": _num(self.overtime_hours),
            "regular_wage": _num(self.regular_wage),
            "overtime_wage": _num(self.overtime_wage),
            "total_wage": _num(self.total_wage),
        }
        if include_projects:
            data["projects"] = [p.to_dict() for p in self.projects]
        return data


@dataclass(frozen=True, slots=True)
class PayrollTotals:
    """Company-level grand totals across a list of PayrollSummary."""

    worker_count: int = 0
    work_days: int = 0
    work_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    regular_wage: Decimal = ZERO
    overtime_wage: Decimal = ZERO
    total_wage: Decimal = ZERO

    def to_dict(self) -> dict[str, Any]:
        return {
            "worker_count": self.worker_count,
            "work_days": self.work_days,
            "work_hours": _num(self.work_hours),
            "overtime_hours": _num(self.overtime_hours),
            "regular_wage": _num(self.regular_wage),
            "overtime_wage": _num(self.overtime_wage),
            "total_wage": _num(self.total_wage),
        }


@dataclass(frozen=True)
class PayrollExportData:
    """
    Format-neutral payload handed to the export sink.

    Non-goals:
        - Does not render PDF/CSV/XLSX; format selection and file
          generation belong to the export collaborator.
    """

    company_id: str
    company_name: str
    period: PayrollPeriod
    summaries: tuple[PayrollSummary, ...]
    totals: PayrollTotals
    export_date: datetime
    exported_by: str
    include_project_breakdown: bool = True
    warnings: tuple[Any, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "company_id": self.company_id,
            "company_name": self.company_name,
            "period": self.period.to_dict(),
            "summaries": [
                s.to_dict(include_projects=self.include_project_breakdown)
                for s in self.summaries
            ],
            "totals": self.totals.to_dict(),
            "export_date": self.export_date.isoformat(),
            "exported_by": self.exported_by,
            "warnings": [w.to_dict() for w in self.warnings],
        }
