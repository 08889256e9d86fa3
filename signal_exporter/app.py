"""
Exporter coordinator.

Wires resolved configuration into signals, the signal registry, the
prometheus_client registry and the HTTP endpoint.
"""

from datetime import datetime, timedelta
from typing import Optional

import structlog

from .config.loader import ExporterConfig
from .errors import TransportError
from .exposition.collector import create_collector_registry
from .exposition.server import WSGIApp, create_server, make_app
from .schedule.cron import CronSchedule
from .signals import OscillationSignal, SignalRegistry, WallClockSignal, WindowSignal
from .signals.registry import SignalSnapshot
from .utils.time import utc_now

logger = structlog.get_logger(__name__)


def build_signal_registry(
    oscillation_period: timedelta,
    schedule: CronSchedule,
    start_time: Optional[datetime] = None,
) -> SignalRegistry:
    """
    Register the built-in signals.

    Args:
        oscillation_period: Length of one sine cycle
        schedule: Schedule driving the window indicator
        start_time: Oscillation phase reference, defaults to now

    Returns:
        Registry with the sin, epoch_seconds and time_interval signals
    """
    start_time = start_time or utc_now()

    registry = SignalRegistry()
    registry.add(OscillationSignal(start_time=start_time, period=oscillation_period))
    registry.add(WallClockSignal())
    registry.add(WindowSignal(schedule=schedule))
    return registry


class SignalExporter:
    """
    Main coordinator for the exporter process.

    Everything is constructed before serving starts, so requests only ever
    read immutable state.
    """

    def __init__(self, config: ExporterConfig, start_time: Optional[datetime] = None) -> None:
        self.config = config
        self.start_time = start_time or utc_now()

        self.signal_registry = build_signal_registry(
            config.oscillation_period,
            config.schedule,
            self.start_time,
        )
        self.collector_registry = create_collector_registry(
            self.signal_registry,
            process_metrics=config.process_metrics,
        )
        self.app: WSGIApp = make_app(self.collector_registry, config.metrics_path)

        logger.info(
            "Signal exporter initialized",
            signals=self.signal_registry.names(),
            oscillation_period_s=config.oscillation_period.total_seconds(),
            schedule=config.schedule.expression,
            timezone=str(config.schedule.zone),
        )

    def collect(self, now: Optional[datetime] = None) -> SignalSnapshot:
        """Current values of every signal."""
        return self.signal_registry.collect(now)

    def serve(self) -> None:
        """
        Serve collection requests until interrupted.

        Raises:
            TransportError: If the endpoint cannot bind or stops serving
        """
        server = create_server(self.config.host, self.config.port, self.app)
        logger.info(
            "Serving metrics",
            listen_address=self.config.listen_address,
            metrics_path=self.config.metrics_path,
        )

        try:
            server.serve_forever()
        except OSError as e:
            raise TransportError(
                f"Metrics endpoint stopped: {e}",
                address=self.config.listen_address,
            ) from e
        finally:
            server.server_close()
