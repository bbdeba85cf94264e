"""
Configuration Loader (``settlement_config.loader``).

Responsibility
--------------
Loads YAML files, merges them with the bundled defaults and environment
overrides, and parses the result into a frozen ``SettlementConfig``.
Runtime callers use ``settlement_config.get_active_config()`` instead of
calling this module directly.

Invariants enforced
-------------------
* Every failure (missing file, malformed YAML, wrong type, bad value)
  raises ``ConfigLoadError`` naming the source; nothing falls back silently.
* The default closing and pay days obey the same rules as a settings edit.
* ``compute_checksum`` produces a deterministic SHA-256 hash of the merged
  configuration for change detection.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any, Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from settlement_config.schema import SettlementConfig
from settlement_kernel.domain.validation import validate_payroll_settings
from settlement_kernel.exceptions import ConfigLoadError, ConfigurationError

DEFAULTS_PATH = Path(__file__).parent / "defaults.yaml"

ENV_DATABASE_URL = "SETTLEMENT_DATABASE_URL"
ENV_LOG_LEVEL = "SETTLEMENT_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file as a dict (empty for an empty file).

    Raises:
        ConfigLoadError: if the file is missing, unreadable, malformed, or
            its top level is not a mapping.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigLoadError(str(path), exc.strerror or str(exc)) from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(str(path), f"invalid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigLoadError(str(path), "top level must be a mapping")
    return data


def merge_config(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into ``base``; nested mappings merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def apply_env_overrides(data: Mapping[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if env.get(ENV_DATABASE_URL):
        overrides["database"] = {"url": env[ENV_DATABASE_URL]}
    if env.get(ENV_LOG_LEVEL):
        overrides["logging"] = {"level": env[ENV_LOG_LEVEL]}
    return merge_config(data, overrides)


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def _section(data: Mapping[str, Any], name: str, source: str) -> Mapping[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, Mapping):
        raise ConfigLoadError(source, f"section '{name}' must be a mapping")
    return section


def _require_type(value: Any, kind: type, key: str, source: str) -> Any:
    # bool is an int subclass; an int setting must not accept true/false
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ConfigLoadError(source, f"'{key}' must be {kind.__name__}, got {value!r}")
    return value


def parse_config(data: Mapping[str, Any], source: str = "<merged>") -> SettlementConfig:
    """
    Build a SettlementConfig from merged configuration data.

    Raises:
        ConfigLoadError: on any missing or invalid value.
    """
    database = _section(data, "database", source)
    payroll = _section(data, "payroll", source)
    export = _section(data, "export", source)
    logging_section = _section(data, "logging", source)

    url = database.get("url")
    if not isinstance(url, str) or not url.strip():
        raise ConfigLoadError(source, "'database.url' is required")

    timezone = _require_type(payroll.get("timezone", "Asia/Tokyo"), str, "payroll.timezone", source)
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigLoadError(source, f"unknown timezone {timezone!r}") from exc

    try:
        closing, pay = validate_payroll_settings(
            payroll.get("default_closing_day", 20),
            payroll.get("default_pay_day", 25),
        )
    except ConfigurationError as exc:
        raise ConfigLoadError(source, str(exc)) from exc

    months_back = _require_type(payroll.get("months_back", 12), int, "payroll.months_back", source)
    if months_back < 1:
        raise ConfigLoadError(source, f"'payroll.months_back' must be positive, got {months_back}")

    level = str(logging_section.get("level", "INFO")).upper()
    if level not in _LOG_LEVELS:
        raise ConfigLoadError(source, f"unknown log level {level!r}")

    return SettlementConfig(
        database_url=url.strip(),
        timezone=timezone,
        default_closing_day=closing,
        default_pay_day=pay,
        months_back=months_back,
        log_level=level,
        echo_sql=_require_type(database.get("echo_sql", False), bool, "database.echo_sql", source),
        include_project_breakdown=_require_type(
            export.get("include_project_breakdown", True), bool,
            "export.include_project_breakdown", source,
        ),
        checksum=compute_checksum(dict(data)),
    )


def load_config(
    path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> SettlementConfig:
    """Bundled defaults, then ``path`` (if given), then environment overrides."""
    data = load_yaml_file(DEFAULTS_PATH)
    source = str(DEFAULTS_PATH)
    if path is not None:
        data = merge_config(data, load_yaml_file(Path(path)))
        source = str(path)
    data = apply_env_overrides(data, env or {})
    return parse_config(data, source)
