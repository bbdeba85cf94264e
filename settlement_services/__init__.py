"""Settlement services: orchestration over the kernel stores and the engines."""

from settlement_services.payroll_service import PayrollSettlementService, SettlementResult

__all__ = [
    "PayrollSettlementService",
    "SettlementResult",
]
