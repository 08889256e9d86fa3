"""Command-line entry point for the signal exporter."""

import argparse
import sys
from pathlib import Path
from typing import Any, Optional

import yaml

from . import __version__
from .app import SignalExporter
from .config.loader import ConfigLoader
from .errors import InvalidConfigurationError, TransportError
from .logging.config import configure_logging, get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_TRANSPORT_ERROR = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="signal-exporter",
        description="Expose synthetic signals for Prometheus scraping.",
    )
    parser.add_argument("--config", type=Path,
                        help="YAML configuration file")
    parser.add_argument("--listen-address",
                        help="The address to listen on for HTTP requests (default :8080)")
    parser.add_argument("--oscillation-period",
                        help="The duration of the rate oscillation period (default 5m)")
    parser.add_argument("--cron-expression",
                        help="Cron expression for the time_interval window signal")
    parser.add_argument("--timezone",
                        help="Timezone the cron expression is evaluated in (default UTC)")
    parser.add_argument("--metrics-path",
                        help="HTTP path serving the metrics (default /metrics)")
    parser.add_argument("--no-process-metrics", dest="process_metrics",
                        action="store_false", default=None,
                        help="Do not expose process and platform metrics")
    parser.add_argument("--log-level",
                        help="DEBUG, INFO, WARNING, ERROR or CRITICAL (default INFO)")
    parser.add_argument("--log-json", dest="log_json",
                        action="store_true", default=None,
                        help="Emit logs as JSON")
    parser.add_argument("--check-config", action="store_true",
                        help="Validate the configuration, print it and exit")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def overrides_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Nested configuration overrides for the flags that were given."""
    flags = {
        ("server", "listen_address"): args.listen_address,
        ("server", "metrics_path"): args.metrics_path,
        ("oscillation", "period"): args.oscillation_period,
        ("schedule", "expression"): args.cron_expression,
        ("schedule", "timezone"): args.timezone,
        ("exposition", "process_metrics"): args.process_metrics,
        ("logging", "level"): args.log_level,
        ("logging", "format_json"): args.log_json,
    }

    overrides: dict[str, Any] = {}
    for (section, key), value in flags.items():
        if value is not None:
            overrides.setdefault(section, {})[key] = value
    return overrides


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    overrides = overrides_from_args(args)

    # Provisional until the file and flags are merged
    configure_logging(level="INFO", format_json=bool(args.log_json), cache_loggers=False)

    try:
        config = ConfigLoader.create(args.config).resolve(overrides)
    except InvalidConfigurationError as e:
        logger.error("Refusing to start", field=e.field, error=str(e))
        return EXIT_CONFIG_ERROR

    configure_logging(level=config.log_level, format_json=config.log_json)

    if args.check_config:
        sys.stdout.write(yaml.safe_dump(config.as_dict(), sort_keys=False))
        return EXIT_OK

    exporter = SignalExporter(config)

    try:
        exporter.serve()
    except TransportError as e:
        logger.critical("Metrics endpoint failed", address=e.address, error=str(e))
        return EXIT_TRANSPORT_ERROR
    except KeyboardInterrupt:
        logger.info("Shutting down")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
