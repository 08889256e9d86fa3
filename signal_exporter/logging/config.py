"""
Centralized logging configuration for the signal exporter.

This module configures structlog on top of the standard library logging
module. Every component obtains its logger through get_logger so that
console and JSON output share one processor chain.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    cache_loggers: bool = True
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        cache_loggers: Freeze each logger on first use; turn off for a
            provisional configuration that will be replaced
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=cache_loggers,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_collection_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound to the collection subsystem.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger carrying subsystem context for scrape handling
    """
    # Initial values keep the proxy lazy until configure_logging has run
    return structlog.get_logger(name, subsystem="collection")


def log_collection_failure(
    logger: FilteringBoundLogger,
    signal_name: str,
    error: BaseException,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a failed signal evaluation with standardized fields.

    Args:
        logger: Structlog logger instance
        signal_name: Name of the signal that raised
        error: The exception raised by the signal
        context: Additional context data
    """
    bound_logger = logger.bind(
        signal_name=signal_name,
        error_type=type(error).__name__,
        error=str(error),
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.error("Signal evaluation failed")
