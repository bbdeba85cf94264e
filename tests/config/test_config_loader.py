"""
Tests for settlement configuration loading.

Covers:
- Bundled defaults
- Site file merge and environment overrides
- Checksum determinism
- Every validation failure raising ConfigLoadError
- SETTLEMENT_CONFIG_TRACE emission
"""

import pytest

from settlement_config import get_active_config
from settlement_config.loader import (
    compute_checksum,
    load_config,
    load_yaml_file,
    merge_config,
    parse_config,
)
from settlement_kernel.exceptions import ConfigLoadError, ConfigurationError


def _data(**payroll):
    base = {
        "database": {"url": "sqlite://"},
        "payroll": {"default_closing_day": 20, "default_pay_day": 25},
    }
    base["payroll"].update(payroll)
    return base


class TestDefaults:
    """Bundled defaults.yaml."""

    def test_defaults(self):
        config = load_config(env={})

        assert config.database_url == "sqlite:///settlement.db"
        assert config.timezone == "Asia/Tokyo"
        assert (config.default_closing_day, config.default_pay_day) == (20, 25)
        assert config.months_back == 12
        assert config.log_level == "INFO"
        assert config.echo_sql is False
        assert config.include_project_breakdown is True
        assert len(config.checksum) == 64


class TestLayering:
    """Site file and environment."""

    def test_site_file_merged_per_key(self, tmp_path):
        site = tmp_path / "site.yaml"
        site.write_text("payroll:\n  default_closing_day: 31\n  default_pay_day: 10\n")

        config = load_config(site, env={})

        assert (config.default_closing_day, config.default_pay_day) == (31, 10)
        assert config.timezone == "Asia/Tokyo"
        assert config.database_url == "sqlite:///settlement.db"

    def test_env_overrides_last(self, tmp_path):
        site = tmp_path / "site.yaml"
        site.write_text("database:\n  url: sqlite:///site.db\n")

        config = load_config(site, env={
            "SETTLEMENT_DATABASE_URL": "postgresql://localhost/settlement",
            "SETTLEMENT_LOG_LEVEL": "debug",
        })

        assert config.database_url == "postgresql://localhost/settlement"
        assert config.log_level == "DEBUG"

    def test_empty_env_values_ignored(self):
        config = load_config(env={"SETTLEMENT_DATABASE_URL": ""})

        assert config.database_url == "sqlite:///settlement.db"

    def test_empty_site_file(self, tmp_path):
        site = tmp_path / "empty.yaml"
        site.write_text("")

        assert load_config(site, env={}).months_back == 12

    def test_merge_config_nested(self):
        merged = merge_config({"a": {"x": 1, "y": 2}, "b": 1}, {"a": {"y": 3}, "c": 4})

        assert merged == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}


class TestChecksum:
    """Change detection."""

    def test_key_order_irrelevant(self):
        assert compute_checksum({"a": 1, "b": 2}) == compute_checksum({"b": 2, "a": 1})

    def test_value_change_detected(self):
        assert compute_checksum({"a": 1}) != compute_checksum({"a": 2})


class TestValidation:
    """Invalid configuration never falls back."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigLoadError) as exc_info:
            load_yaml_file(tmp_path / "missing.yaml")

        assert exc_info.value.source.endswith("missing.yaml")
        assert isinstance(exc_info.value, ConfigurationError)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("payroll: [unclosed\n")

        with pytest.raises(ConfigLoadError, match="invalid YAML"):
            load_yaml_file(path)

    def test_top_level_not_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")

        with pytest.raises(ConfigLoadError, match="mapping"):
            load_yaml_file(path)

    def test_missing_database_url(self):
        with pytest.raises(ConfigLoadError, match="database.url"):
            parse_config({"database": {}})

    def test_section_must_be_mapping(self):
        with pytest.raises(ConfigLoadError, match="payroll"):
            parse_config({"database": {"url": "sqlite://"}, "payroll": "20/25"})

    def test_unknown_timezone(self):
        with pytest.raises(ConfigLoadError, match="timezone"):
            parse_config(_data(timezone="Mars/Olympus"))

    def test_equal_default_days(self):
        with pytest.raises(ConfigLoadError, match="must differ"):
            parse_config(_data(default_closing_day=25, default_pay_day=25))

    def test_default_day_out_of_range(self):
        with pytest.raises(ConfigLoadError, match="closing_day"):
            parse_config(_data(default_closing_day=32))

    @pytest.mark.parametrize("months_back", [0, -3, True, "12"])
    def test_bad_months_back(self, months_back):
        with pytest.raises(ConfigLoadError, match="months_back"):
            parse_config(_data(months_back=months_back))

    def test_unknown_log_level(self):
        data = _data()
        data["logging"] = {"level": "VERBOSE"}

        with pytest.raises(ConfigLoadError, match="log level"):
            parse_config(data)

    def test_echo_sql_must_be_bool(self):
        data = _data()
        data["database"]["echo_sql"] = "yes"

        with pytest.raises(ConfigLoadError, match="echo_sql"):
            parse_config(data)


class TestGetActiveConfig:
    """Public entrypoint."""

    def test_emits_config_trace(self, captured_logs):
        config = get_active_config(env={})

        record = next(r for r in captured_logs() if r["message"] == "SETTLEMENT_CONFIG_TRACE")
        assert record["checksum"] == config.checksum
        assert record["source"] == "defaults"

    def test_path_as_string(self, tmp_path):
        site = tmp_path / "site.yaml"
        site.write_text("payroll:\n  months_back: 6\n")

        assert get_active_config(str(site), env={}).months_back == 6
