"""Prometheus collector backed by the signal registry"""

import platform
from typing import Iterator

from prometheus_client import CollectorRegistry, Info, PlatformCollector, ProcessCollector
from prometheus_client.core import GaugeMetricFamily, Metric
from prometheus_client.registry import Collector

from .. import __version__
from ..signals.registry import SignalRegistry


class SignalCollector(Collector):
    """
    Exposes every registered signal as a gauge.

    Values are computed on each scrape through SignalRegistry.collect, so
    a failing signal fails the whole scrape with CollectionError.
    """

    def __init__(self, registry: SignalRegistry):
        self.registry = registry

    def describe(self) -> Iterator[Metric]:
        for signal in self.registry.signals:
            yield GaugeMetricFamily(signal.name, signal.documentation)

    def collect(self) -> Iterator[Metric]:
        documentation = {signal.name: signal.documentation for signal in self.registry.signals}
        snapshot = self.registry.collect()

        for name, value in snapshot.values.items():
            yield GaugeMetricFamily(name, documentation.get(name, ""), value=value)


def create_collector_registry(signal_registry: SignalRegistry,
                              process_metrics: bool = True) -> CollectorRegistry:
    """
    Build the prometheus_client registry served on the metrics path.

    Args:
        signal_registry: Registry holding the synthetic signals
        process_metrics: Also expose process and platform collectors

    Returns:
        Registry with the signal collector and build information
    """
    registry = CollectorRegistry()
    registry.register(SignalCollector(signal_registry))

    build_info = Info(
        "signal_exporter_build",
        "Build information of the signal exporter.",
        registry=registry,
    )
    build_info.info({
        "version": __version__,
        "python_version": platform.python_version(),
    })

    if process_metrics:
        ProcessCollector(registry=registry)
        PlatformCollector(registry=registry)

    return registry
