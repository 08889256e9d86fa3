"""Default configuration parameters for the signal exporter."""

from dataclasses import dataclass

# Six-minute windows every ten minutes
DEFAULT_CRON_EXPRESSION = "0-5,10-15,20-25,30-35,40-45,50-55 * * * *"


@dataclass(frozen=True)
class ServerParams:
    """Collection endpoint parameters."""
    listen_address: str = ":8080"
    metrics_path: str = "/metrics"


@dataclass(frozen=True)
class OscillationParams:
    """Oscillation signal parameters."""
    period: str = "5m"                  # One full sine cycle


@dataclass(frozen=True)
class ScheduleParams:
    """Window schedule parameters."""
    expression: str = DEFAULT_CRON_EXPRESSION
    timezone: str = "UTC"


@dataclass(frozen=True)
class ExpositionParams:
    """Extra collectors exposed next to the signals."""
    process_metrics: bool = True        # Process and platform collectors


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    server: ServerParams
    oscillation: OscillationParams
    schedule: ScheduleParams
    exposition: ExpositionParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        server=ServerParams(),
        oscillation=OscillationParams(),
        schedule=ScheduleParams(),
        exposition=ExpositionParams(),
        logging=LoggingParams(),
    )
