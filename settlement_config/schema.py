"""
SettlementConfig schema.

The parsed, validated runtime configuration.  Built only by
``settlement_config.loader.parse_config``; callers obtain it through
``settlement_config.get_active_config()``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SettlementConfig:
    """Runtime settings for the settlement service and CLI."""

    database_url: str
    timezone: str = "Asia/Tokyo"
    default_closing_day: int = 20
    default_pay_day: int = 25
    months_back: int = 12
    log_level: str = "INFO"
    echo_sql: bool = False
    include_project_breakdown: bool = True
    checksum: str = ""
