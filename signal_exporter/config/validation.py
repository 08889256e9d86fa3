"""Configuration validation utilities."""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from ..errors import InvalidConfigurationError
from ..schedule.cron import CronSchedule
from ..utils.net import parse_listen_address
from ..utils.time import parse_duration

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

KNOWN_SECTIONS = {
    "server": ("listen_address", "metrics_path"),
    "oscillation": ("period",),
    "schedule": ("expression", "timezone"),
    "exposition": ("process_metrics",),
    "logging": ("level", "format_json"),
}


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_server_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate collection endpoint parameters."""
        errors = []

        if "listen_address" in params:
            value = params["listen_address"]
            try:
                parse_listen_address(value)
            except ValueError as e:
                errors.append(ValidationError(
                    field="server.listen_address",
                    message=f"Must be host:port ({e})",
                    value=value
                ))

        if "metrics_path" in params:
            value = params["metrics_path"]
            if not isinstance(value, str) or not value.startswith("/") or value == "/":
                errors.append(ValidationError(
                    field="server.metrics_path",
                    message="Must be an absolute path other than /",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_oscillation_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate oscillation parameters."""
        errors = []

        if "period" in params:
            value = params["period"]
            try:
                period = parse_duration(value)
            except ValueError:
                errors.append(ValidationError(
                    field="oscillation.period",
                    message="Must be a duration such as 4s, 5m or 1h30m",
                    value=value
                ))
            else:
                if period <= timedelta(0):
                    errors.append(ValidationError(
                        field="oscillation.period",
                        message="Must be a positive duration",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_schedule_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate the window schedule by parsing it."""
        errors = []

        try:
            CronSchedule.parse(
                params.get("expression", ""),
                params.get("timezone", "UTC"),
            )
        except InvalidConfigurationError as e:
            errors.append(ValidationError(
                field=e.field or "schedule.expression",
                message=str(e),
                value=e.value
            ))

        return errors

    @staticmethod
    def validate_exposition_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate exposition parameters."""
        errors = []

        if "process_metrics" in params:
            value = params["process_metrics"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="exposition.process_metrics",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="logging.level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params:
            value = params["format_json"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="logging.format_json",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_known_keys(config: dict[str, Any]) -> list[ValidationError]:
        """Reject sections and keys the exporter does not understand."""
        errors = []

        for section, params in config.items():
            if section not in KNOWN_SECTIONS:
                errors.append(ValidationError(
                    field=section,
                    message="Unknown configuration section",
                    value=params
                ))
                continue

            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=params
                ))
                continue

            for key in params:
                if key not in KNOWN_SECTIONS[section]:
                    errors.append(ValidationError(
                        field=f"{section}.{key}",
                        message="Unknown configuration key",
                        value=params[key]
                    ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = ConfigValidator.validate_known_keys(config)
        if errors:
            return errors

        if "server" in config:
            errors.extend(ConfigValidator.validate_server_params(config["server"]))

        if "oscillation" in config:
            errors.extend(ConfigValidator.validate_oscillation_params(config["oscillation"]))

        if "schedule" in config:
            errors.extend(ConfigValidator.validate_schedule_params(config["schedule"]))

        if "exposition" in config:
            errors.extend(ConfigValidator.validate_exposition_params(config["exposition"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        return errors
