"""Unit tests for configuration management."""

import pytest
from datetime import timedelta, timezone
from pathlib import Path
from zoneinfo import ZoneInfo

from signal_exporter.config.defaults import DEFAULT_CRON_EXPRESSION, get_default_config
from signal_exporter.config.loader import ConfigLoader, ExporterConfig
from signal_exporter.config.validation import ConfigValidator
from signal_exporter.errors import InvalidConfigurationError


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        config = get_default_config()
        assert config.server.listen_address == ":8080"
        assert config.server.metrics_path == "/metrics"
        assert config.oscillation.period == "5m"
        assert config.schedule.expression == DEFAULT_CRON_EXPRESSION
        assert config.schedule.timezone == "UTC"
        assert config.exposition.process_metrics is True
        assert config.logging.level == "INFO"

    def test_default_expression(self) -> None:
        assert DEFAULT_CRON_EXPRESSION == "0-5,10-15,20-25,30-35,40-45,50-55 * * * *"


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        loader = ConfigLoader.create()
        assert loader.config_path is None

    def test_config_loader_path_conversion(self) -> None:
        loader = ConfigLoader.create("exporter.yaml")
        assert isinstance(loader.config_path, Path)

    def test_merge_config_defaults_only(self) -> None:
        config = ConfigLoader.create().merge_config()

        assert config["server"]["listen_address"] == ":8080"
        assert config["schedule"]["expression"] == DEFAULT_CRON_EXPRESSION

    def test_merge_config_with_overrides(self) -> None:
        overrides = {"oscillation": {"period": "4s"}}

        config = ConfigLoader.create().merge_config(overrides)

        assert config["oscillation"]["period"] == "4s"
        # Other defaults should remain
        assert config["server"]["listen_address"] == ":8080"

    def test_file_overrides_defaults(self, config_file) -> None:
        path = config_file("schedule:\n  expression: '*/5 * * * *'\n")

        config = ConfigLoader.create(path).merge_config()

        assert config["schedule"]["expression"] == "*/5 * * * *"
        assert config["schedule"]["timezone"] == "UTC"

    def test_overrides_beat_file(self, config_file) -> None:
        path = config_file(
            "schedule:\n  expression: '*/5 * * * *'\n"
            "oscillation:\n  period: 10s\n"
        )

        config = ConfigLoader.create(path).merge_config(
            {"schedule": {"expression": "0 * * * *"}}
        )

        assert config["schedule"]["expression"] == "0 * * * *"
        assert config["oscillation"]["period"] == "10s"

    def test_empty_file(self, config_file) -> None:
        path = config_file("")
        assert ConfigLoader.create(path).load_file_config() == {}

    def test_missing_file(self, tmp_path) -> None:
        loader = ConfigLoader.create(tmp_path / "missing.yaml")
        with pytest.raises(InvalidConfigurationError) as exc_info:
            loader.load_file_config()
        assert exc_info.value.field == "config"

    def test_invalid_yaml(self, config_file) -> None:
        path = config_file("server: [unclosed\n")
        with pytest.raises(InvalidConfigurationError, match="Invalid YAML"):
            ConfigLoader.create(path).load_file_config()

    def test_non_mapping_file(self, config_file) -> None:
        path = config_file("- just\n- a list\n")
        with pytest.raises(InvalidConfigurationError, match="must contain a mapping"):
            ConfigLoader.create(path).load_file_config()


class TestResolve:
    """Test suite for resolving the immutable configuration."""

    def test_resolve_defaults(self) -> None:
        config = ConfigLoader.create().resolve()

        assert isinstance(config, ExporterConfig)
        assert config.host == ""
        assert config.port == 8080
        assert config.oscillation_period == timedelta(minutes=5)
        assert config.schedule.expression == DEFAULT_CRON_EXPRESSION
        assert config.schedule.zone is timezone.utc
        assert config.process_metrics is True
        assert config.log_level == "INFO"
        assert config.log_json is False

    def test_resolve_overrides(self) -> None:
        config = ConfigLoader.create().resolve({
            "server": {"listen_address": "127.0.0.1:9100"},
            "oscillation": {"period": "4s"},
            "schedule": {"expression": "0-5 * * * *", "timezone": "Europe/Berlin"},
            "logging": {"level": "debug"},
        })

        assert config.host == "127.0.0.1"
        assert config.port == 9100
        assert config.oscillation_period == timedelta(seconds=4)
        assert config.schedule.fields == "0-5 * * * *"
        assert config.schedule.zone == ZoneInfo("Europe/Berlin")
        assert config.log_level == "DEBUG"

    def test_numeric_period_is_seconds(self) -> None:
        config = ConfigLoader.create().resolve({"oscillation": {"period": 90}})
        assert config.oscillation_period == timedelta(seconds=90)

    @pytest.mark.parametrize("period", ["0s", "-5m", "abc", 0, -1])
    def test_rejects_invalid_period(self, period) -> None:
        with pytest.raises(InvalidConfigurationError) as exc_info:
            ConfigLoader.create().resolve({"oscillation": {"period": period}})
        assert exc_info.value.field == "oscillation.period"

    def test_rejects_invalid_schedule(self) -> None:
        with pytest.raises(InvalidConfigurationError) as exc_info:
            ConfigLoader.create().resolve({"schedule": {"expression": "0 0 32 * *"}})
        assert exc_info.value.field == "schedule.expression"

    def test_reports_every_error(self) -> None:
        with pytest.raises(InvalidConfigurationError) as exc_info:
            ConfigLoader.create().resolve({
                "oscillation": {"period": "0s"},
                "schedule": {"expression": "bogus"},
            })
        assert len(exc_info.value.context["errors"]) == 2

    def test_as_dict_round_trip(self) -> None:
        loader = ConfigLoader.create()
        config = loader.resolve({"oscillation": {"period": "1h30m"}})

        assert config.as_dict()["oscillation"]["period"] == "1h30m"
        assert loader.resolve(config.as_dict()) == config


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_valid_defaults(self) -> None:
        config = ConfigLoader.create().merge_config()
        assert ConfigValidator.validate_config(config) == []

    @pytest.mark.parametrize("address", ["8080", "host:port", ":70000", "::1:80", 8080])
    def test_invalid_listen_address(self, address) -> None:
        errors = ConfigValidator.validate_server_params({"listen_address": address})
        assert len(errors) == 1
        assert errors[0].field == "server.listen_address"

    @pytest.mark.parametrize("path", ["metrics", "/", 5])
    def test_invalid_metrics_path(self, path) -> None:
        errors = ConfigValidator.validate_server_params({"metrics_path": path})
        assert len(errors) == 1
        assert errors[0].field == "server.metrics_path"

    def test_invalid_period_messages(self) -> None:
        errors = ConfigValidator.validate_oscillation_params({"period": "-1s"})
        assert errors[0].message == "Must be a positive duration"

        errors = ConfigValidator.validate_oscillation_params({"period": "soon"})
        assert "Must be a duration" in errors[0].message

    def test_invalid_timezone(self) -> None:
        errors = ConfigValidator.validate_schedule_params(
            {"expression": "* * * * *", "timezone": "Nowhere/Special"}
        )
        assert len(errors) == 1
        assert errors[0].field == "schedule.timezone"

    def test_invalid_booleans(self) -> None:
        errors = ConfigValidator.validate_exposition_params({"process_metrics": "yes"})
        assert errors[0].field == "exposition.process_metrics"

        errors = ConfigValidator.validate_logging_params({"format_json": 1})
        assert errors[0].field == "logging.format_json"

    def test_invalid_log_level(self) -> None:
        errors = ConfigValidator.validate_logging_params({"level": "LOUD"})
        assert errors[0].field == "logging.level"

    def test_unknown_section(self) -> None:
        errors = ConfigValidator.validate_config({"metrics": {}})
        assert errors[0].field == "metrics"
        assert errors[0].message == "Unknown configuration section"

    def test_unknown_key(self) -> None:
        errors = ConfigValidator.validate_config({"server": {"port": 9100}})
        assert errors[0].field == "server.port"

    def test_section_must_be_mapping(self) -> None:
        errors = ConfigValidator.validate_config({"server": None})
        assert errors[0].message == "Must be a mapping"
