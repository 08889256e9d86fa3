"""Wall-clock signal"""

from dataclasses import dataclass
from datetime import datetime

from .base import Signal


@dataclass(frozen=True)
class WallClockSignal(Signal):
    """Whole seconds since the Unix epoch, for liveness and clock-skew checks."""

    name: str = "epoch_seconds"
    documentation: str = "Seconds since Unix epoch."

    def value(self, now: datetime) -> float:
        return float(int(now.timestamp()))
