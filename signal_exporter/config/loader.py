"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any, Optional

import structlog
import yaml

from ..errors import InvalidConfigurationError
from ..schedule.cron import CronSchedule
from ..utils.net import parse_listen_address
from ..utils.time import format_duration, parse_duration
from .defaults import DefaultConfig, get_default_config
from .validation import ConfigValidator

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ExporterConfig:
    """Fully resolved and validated configuration, fixed for the process lifetime."""
    listen_address: str
    host: str
    port: int
    metrics_path: str
    oscillation_period: timedelta
    schedule: CronSchedule
    process_metrics: bool
    log_level: str
    log_json: bool

    def as_dict(self) -> dict[str, Any]:
        """Render back into the nested layout of the configuration file."""
        return {
            "server": {
                "listen_address": self.listen_address,
                "metrics_path": self.metrics_path,
            },
            "oscillation": {
                "period": format_duration(self.oscillation_period),
            },
            "schedule": {
                "expression": self.schedule.expression,
                "timezone": str(self.schedule.zone),
            },
            "exposition": {
                "process_metrics": self.process_metrics,
            },
            "logging": {
                "level": self.log_level,
                "format_json": self.log_json,
            },
        }


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_path: Optional[Path]
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_path is not None:
            config_path = Path(config_path)

        return cls(
            config_path=config_path,
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """
        Load overrides from the YAML configuration file.

        Returns an empty mapping when no file was given. A file that was
        given but cannot be read or parsed is a configuration error.
        """
        if self.config_path is None:
            return {}

        try:
            with open(self.config_path) as f:
                file_config = yaml.safe_load(f)
        except OSError as e:
            raise InvalidConfigurationError(
                f"Cannot read configuration file {self.config_path}: {e}",
                field="config",
                value=str(self.config_path),
            ) from e
        except yaml.YAMLError as e:
            raise InvalidConfigurationError(
                f"Invalid YAML in {self.config_path}: {e}",
                field="config",
                value=str(self.config_path),
            ) from e

        if file_config is None:
            return {}

        if not isinstance(file_config, dict):
            raise InvalidConfigurationError(
                f"Configuration file {self.config_path} must contain a mapping",
                field="config",
                value=str(self.config_path),
            )

        return file_config

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Command-line overrides (highest priority)
        2. Configuration file
        3. Built-in defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_file_config())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def resolve(self, overrides: Optional[dict[str, Any]] = None) -> ExporterConfig:
        """
        Merge, validate and build the immutable configuration.

        Raises:
            InvalidConfigurationError: Listing every validation problem found
        """
        config = self.merge_config(overrides)

        errors = ConfigValidator.validate_config(config)
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value!r})" for err in errors]
            logger.error("Configuration validation failed", errors=error_msgs)
            raise InvalidConfigurationError(
                "Invalid configuration: " + "; ".join(error_msgs),
                field=errors[0].field,
                value=errors[0].value,
                context={"errors": error_msgs},
            )

        host, port = parse_listen_address(config["server"]["listen_address"])

        resolved = ExporterConfig(
            listen_address=config["server"]["listen_address"],
            host=host,
            port=port,
            metrics_path=config["server"]["metrics_path"],
            oscillation_period=parse_duration(config["oscillation"]["period"]),
            schedule=CronSchedule.parse(
                config["schedule"]["expression"],
                config["schedule"]["timezone"],
            ),
            process_metrics=config["exposition"]["process_metrics"],
            log_level=config["logging"]["level"].upper(),
            log_json=config["logging"]["format_json"],
        )

        logger.debug("Configuration resolved", config=resolved.as_dict())
        return resolved

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
