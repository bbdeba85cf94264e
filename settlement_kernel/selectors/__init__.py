"""Read-only selectors over the settlement tables."""

from settlement_kernel.selectors.base import BaseSelector
from settlement_kernel.selectors.settings_selector import PayrollSettingsSelector
from settlement_kernel.selectors.work_session_selector import WorkSessionSelector

__all__ = [
    "BaseSelector",
    "PayrollSettingsSelector",
    "WorkSessionSelector",
]
