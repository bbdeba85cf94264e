"""
DTOs -- data-quality records passed between ingestion, services and callers.

Responsibility:
    ``PartialDataWarning`` describes one data-quality problem found while
    turning a raw row into a ``WorkSession``.  ``IngestionResult`` bundles the
    sessions with every warning raised while building them.

Architecture position:
    Kernel > Domain -- pure, zero I/O.

Non-goals:
    - Warnings do NOT raise.  A session with a warning is still aggregated;
      discarding financial data silently is worse than flagging it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from settlement_kernel.domain.values import WorkSession


# Warning codes
MISSING_WORKER = "MISSING_WORKER"
MISSING_WORKER_NAME = "MISSING_WORKER_NAME"
MISSING_PROJECT = "MISSING_PROJECT"
MISSING_PROJECT_NAME = "MISSING_PROJECT_NAME"
MISSING_VALUE = "MISSING_VALUE"
INVALID_NUMBER = "INVALID_NUMBER"
NEGATIVE_VALUE = "NEGATIVE_VALUE"
INVALID_WORK_DATE = "INVALID_WORK_DATE"


@dataclass(frozen=True)
class PartialDataWarning:
    """
    A single data-quality warning for one source row.

    Contract:
        Carries a machine-readable code, human-readable message, the field
        at fault, and a reference back to the source row (row number or
        session id).
    """

    code: str
    message: str
    field: str | None = None
    source_ref: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "field": self.field,
            "source_ref": self.source_ref,
        }


@dataclass(frozen=True)
class IngestionResult:
    """Sessions built from raw rows plus all warnings raised on the way."""

    sessions: tuple[WorkSession, ...] = ()
    warnings: tuple[PartialDataWarning, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        return not self.warnings

    def warnings_by_code(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for w in self.warnings:
            counts[w.code] = counts.get(w.code, 0) + 1
        return counts
