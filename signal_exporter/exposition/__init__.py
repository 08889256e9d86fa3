"""
Collection endpoint module.

Adapts the signal registry to prometheus_client and serves it over HTTP.
"""

from .collector import SignalCollector, create_collector_registry
from .server import create_server, make_app

__all__ = [
    "SignalCollector",
    "create_collector_registry",
    "create_server",
    "make_app",
]
