"""
Configuration module.

Defaults, YAML file loading, command-line overrides and validation,
resolved into one immutable ExporterConfig at startup.
"""

from .defaults import DEFAULT_CRON_EXPRESSION, DefaultConfig, get_default_config
from .loader import ConfigLoader, ExporterConfig

__all__ = [
    "DEFAULT_CRON_EXPRESSION",
    "DefaultConfig",
    "get_default_config",
    "ConfigLoader",
    "ExporterConfig",
]
