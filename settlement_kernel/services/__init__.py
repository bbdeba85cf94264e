"""Kernel services: the write paths of the settlement kernel."""

from settlement_kernel.services.base import BaseService
from settlement_kernel.services.settings_service import PayrollSettingsService

__all__ = [
    "BaseService",
    "PayrollSettingsService",
]
