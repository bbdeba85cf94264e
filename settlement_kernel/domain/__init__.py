"""
Settlement kernel domain: value objects, DTOs, validation and the clock.

Pure, zero I/O.  Engines may import from here and nowhere else in the kernel
except ``exceptions`` and ``logging_config``.
"""

from settlement_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from settlement_kernel.domain.dtos import IngestionResult, PartialDataWarning
from settlement_kernel.domain.validation import (
    build_payroll_settings,
    require_closing_day,
    require_pay_day,
    validate_payroll_settings,
)
from settlement_kernel.domain.values import (
    PayrollExportData,
    PayrollPeriod,
    PayrollSettings,
    PayrollSummary,
    PayrollTotals,
    ProjectWorkSummary,
    WorkSession,
)

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "IngestionResult",
    "PartialDataWarning",
    "build_payroll_settings",
    "require_closing_day",
    "require_pay_day",
    "validate_payroll_settings",
    "PayrollExportData",
    "PayrollPeriod",
    "PayrollSettings",
    "PayrollSummary",
    "PayrollTotals",
    "ProjectWorkSummary",
    "WorkSession",
]
