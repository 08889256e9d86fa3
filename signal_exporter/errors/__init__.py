"""
Error classification for the signal exporter.

Configuration problems are fatal at startup, collection problems fail a
single scrape, and transport problems end the process.
"""

from .configuration import (
    ExporterError,
    InvalidConfigurationError,
    InvalidScheduleError,
)
from .system_failures import (
    SignalError,
    DuplicateSignalError,
    CollectionError,
    TransportError,
)

__all__ = [
    "ExporterError",
    # Configuration Errors
    "InvalidConfigurationError",
    "InvalidScheduleError",
    # System Failures
    "SignalError",
    "DuplicateSignalError",
    "CollectionError",
    "TransportError",
]
