"""
settlement_config -- single public entrypoint for settlement configuration.

Responsibility:
    ``get_active_config()`` is the only way runtime code obtains
    configuration.  No other component reads configuration files or the
    SETTLEMENT_* environment variables directly.

Architecture position:
    Configuration -- sits above ``settlement_kernel`` and below
    ``settlement_services`` and ``scripts``.  The kernel MUST NEVER import
    from ``settlement_config``.

Failure modes:
    - ``ConfigLoadError`` -- missing or malformed file, or an invalid value.

Audit relevance:
    Every successful call emits a ``SETTLEMENT_CONFIG_TRACE`` log entry with
    the source and checksum of the configuration in force.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from settlement_config.loader import load_config
from settlement_config.schema import SettlementConfig
from settlement_kernel.logging_config import get_logger

_logger = get_logger("config")


def get_active_config(
    path: Path | str | None = None,
    env: Mapping[str, str] | None = None,
) -> SettlementConfig:
    """
    The ONLY public configuration entrypoint.

    Args:
        path: Optional site YAML file merged over the bundled defaults.
        env: Environment mapping for overrides.  Defaults to ``os.environ``.

    Raises:
        ConfigLoadError: If any layer cannot be loaded or validated.
    """
    config = load_config(
        Path(path) if path is not None else None,
        os.environ if env is None else env,
    )
    _logger.info(
        "SETTLEMENT_CONFIG_TRACE",
        extra={
            "trace_type": "SETTLEMENT_CONFIG_TRACE",
            "source": str(path) if path is not None else "defaults",
            "checksum": config.checksum,
            "timezone": config.timezone,
            "months_back": config.months_back,
        },
    )
    return config


__all__ = ["SettlementConfig", "get_active_config"]
