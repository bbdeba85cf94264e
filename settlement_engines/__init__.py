"""
Module: settlement_engines
Responsibility:
    Package entrypoint re-exporting the pure settlement engines.  This is
    the import surface for settlement_services and scripts.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import settlement_kernel.domain, settlement_kernel.exceptions
    and settlement_kernel.logging_config.  MUST NOT import settlement_services.

Invariants enforced:
    - Purity: engines never call ``datetime.now()`` or ``date.today()``.
      Reference dates are explicit parameters.
    - Decimal-only arithmetic for wages and hours.
    - Determinism: identical ordered inputs give identical outputs.

Audit relevance:
    Every public engine call is traced via ``@traced_engine`` (see
    ``settlement_engines.tracer``), emitting SETTLEMENT_ENGINE_TRACE records.

Usage:
    from settlement_engines import compute_period, generate_periods, aggregate
"""

from settlement_kernel.logging_config import get_logger

logger = get_logger("engines")

from settlement_engines.aggregation import (
    SessionAggregator,
    aggregate,
    sessions_within,
    summarize_totals,
)
from settlement_engines.period import (
    PeriodCalculator,
    clamp_day,
    coerce_reference_date,
    compute_period,
    shift_month,
)
from settlement_engines.period_series import PeriodSeriesGenerator, generate_periods
from settlement_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    "PeriodCalculator",
    "PeriodSeriesGenerator",
    "SessionAggregator",
    "aggregate",
    "clamp_day",
    "coerce_reference_date",
    "compute_input_fingerprint",
    "compute_period",
    "generate_periods",
    "sessions_within",
    "shift_month",
    "summarize_totals",
    "traced_engine",
]
