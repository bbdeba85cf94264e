"""ORM models for the settlement kernel."""

from settlement_kernel.models.company import Company
from settlement_kernel.models.payroll_settings import PayrollSettingsModel
from settlement_kernel.models.project import Project
from settlement_kernel.models.work_session import WorkSessionModel
from settlement_kernel.models.worker import Worker

__all__ = [
    "Company",
    "PayrollSettingsModel",
    "Project",
    "WorkSessionModel",
    "Worker",
]
