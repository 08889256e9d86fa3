"""
Configuration error classifications.

These exceptions are raised while resolving configuration at startup and
prevent the exporter from serving any signal.
"""

from typing import Optional, Dict, Any


class ExporterError(Exception):
    """Base class for all exporter errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class InvalidConfigurationError(ExporterError):
    """Configuration value that the exporter cannot start with."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class InvalidScheduleError(InvalidConfigurationError):
    """Cron expression that is malformed or can never match."""

    def __init__(self, message: str, expression: Optional[str] = None, **kwargs):
        kwargs.setdefault("field", "schedule.expression")
        kwargs.setdefault("value", expression)
        super().__init__(message, **kwargs)
        self.expression = expression
