"""
Module: settlement_engines.aggregation
Responsibility:
    Fold a flat collection of WorkSession records into one PayrollSummary
    per worker, each carrying a per-project breakdown.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Wage identity: total_wage == regular_wage + overtime_wage, and the
      project wages of a worker sum to that worker's total_wage.
    - Ordering: workers appear in first-seen order; projects in first-seen
      order within their worker.
    - Permutation: reordering the input changes only the output order,
      never the totals.
    - Every session counts as one work day, whatever its hours.

Failure modes:
    - None for well-typed WorkSession input.  Data-quality problems are
      resolved (and reported) upstream by settlement_ingestion, so
      aggregation never partially fails.

Non-goals:
    - No date filtering: ``aggregate`` totals every session it is given.
      ``sessions_within`` is the separate, explicit filter.

Usage:
    from settlement_engines.aggregation import aggregate, summarize_totals

    summaries = aggregate(sessions, period=period)
    totals = summarize_totals(summaries)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Sequence

from settlement_kernel.domain.values import (
    ZERO,
    PayrollPeriod,
    PayrollSummary,
    PayrollTotals,
    ProjectWorkSummary,
    WorkSession,
)
from settlement_kernel.logging_config import get_logger
from settlement_engines.tracer import traced_engine

logger = get_logger("engines.aggregation")


@dataclass
class _ProjectTally:
    project_id: str
    project_name: str
    work_days: int = 0
    work_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    wage: Decimal = ZERO

    def freeze(self) -> ProjectWorkSummary:
        return ProjectWorkSummary(
            project_id=self.project_id,
            project_name=self.project_name,
            work_days=self.work_days,
            work_hours=self.work_hours,
            overtime_hours=self.overtime_hours,
            wage=self.wage,
        )


@dataclass
class _WorkerTally:
    worker_id: str
    worker_name: str
    work_days: int = 0
    work_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    regular_wage: Decimal = ZERO
    overtime_wage: Decimal = ZERO
    projects: dict[str, _ProjectTally] = field(default_factory=dict)

    def add(self, session: WorkSession) -> None:
        overtime_wage = session.overtime_wage
        self.work_days += 1
        self.work_hours += session.total_hours
        self.overtime_hours += session.overtime_hours
        self.regular_wage += session.daily_wage
        self.overtime_wage += overtime_wage

        project = self.projects.get(session.project_id)
        if project is None:
            project = _ProjectTally(session.project_id, session.project_name)
            self.projects[session.project_id] = project
        project.work_days += 1
        project.work_hours += session.total_hours
        project.overtime_hours += session.overtime_hours
        project.wage += session.daily_wage + overtime_wage

    def freeze(self, period: PayrollPeriod | None) -> PayrollSummary:
        return PayrollSummary(
            worker_id=self.worker_id,
            worker_name=self.worker_name,
            period=period,
            work_days=self.work_days,
            work_hours=self.work_hours,
            overtime_hours=self.overtime_hours,
            regular_wage=self.regular_wage,
            overtime_wage=self.overtime_wage,
            total_wage=self.regular_wage + self.overtime_wage,
            projects=tuple(p.freeze() for p in self.projects.values()),
        )


@traced_engine("aggregation", "1.0", fingerprint_fields=("sessions", "period"))
def aggregate(
    sessions: Iterable[WorkSession],
    period: PayrollPeriod | None = None,
) -> tuple[PayrollSummary, ...]:
    """
    Group sessions by worker, then by project, and total them.

    Args:
        sessions: Work sessions, already restricted to the period of
            interest by the caller.
        period: Attached to every summary as-is; not used for filtering.

    Returns:
        One PayrollSummary per distinct worker_id, in first-seen order.
    """
    workers: dict[str, _WorkerTally] = {}
    count = 0
    for session in sessions:
        count += 1
        tally = workers.get(session.worker_id)
        if tally is None:
            tally = _WorkerTally(session.worker_id, session.worker_name)
            workers[session.worker_id] = tally
        tally.add(session)

    summaries = tuple(t.freeze(period) for t in workers.values())
    logger.info(
        "sessions_aggregated",
        extra={
            "session_count": count,
            "worker_count": len(summaries),
            "period_key": period.period_key if period else None,
        },
    )
    return summaries


def summarize_totals(summaries: Sequence[PayrollSummary]) -> PayrollTotals:
    """Company-level grand totals across worker summaries."""
    work_days = 0
    work_hours = overtime_hours = regular_wage = overtime_wage = ZERO
    for s in summaries:
        work_days += s.work_days
        work_hours += s.work_hours
        overtime_hours += s.overtime_hours
        regular_wage += s.regular_wage
        overtime_wage += s.overtime_wage
    return PayrollTotals(
        worker_count=len(summaries),
        work_days=work_days,
        work_hours=work_hours,
        overtime_hours=overtime_hours,
        regular_wage=regular_wage,
        overtime_wage=overtime_wage,
        total_wage=regular_wage + overtime_wage,
    )


def sessions_within(
    period: PayrollPeriod,
    sessions: Iterable[WorkSession],
) -> tuple[WorkSession, ...]:
    """Sessions dated inside ``period``.  Undated sessions are excluded."""
    return tuple(
        s for s in sessions
        if s.work_date is not None and period.contains(s.work_date)
    )


class SessionAggregator:
    """Stateless facade over ``aggregate`` and ``summarize_totals``."""

    def aggregate(
        self,
        sessions: Iterable[WorkSession],
        period: PayrollPeriod | None = None,
    ) -> tuple[PayrollSummary, ...]:
        return aggregate(sessions, period)

    def summarize_totals(self, summaries: Sequence[PayrollSummary]) -> PayrollTotals:
        return summarize_totals(summaries)
