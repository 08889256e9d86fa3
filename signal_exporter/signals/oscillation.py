"""Sine wave signal phased on process start"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from ..errors import InvalidConfigurationError
from ..utils.time import elapsed_seconds, ensure_utc
from .base import Signal


def oscillation_value(start_time: datetime, period: timedelta, now: datetime) -> float:
    """
    Position on a sine wave that completes one cycle per period.

    value = sin(2π · (now - start_time) / period)

    Args:
        start_time: Phase reference, value is 0 here
        period: Length of one full cycle, must be positive
        now: Instant to evaluate at

    Returns:
        Value in [-1, 1]
    """
    elapsed = elapsed_seconds(ensure_utc(start_time), ensure_utc(now))
    return math.sin(2 * math.pi * elapsed / period.total_seconds())


@dataclass(frozen=True)
class OscillationSignal(Signal):
    """Oscillation that restarts at phase zero with every process start."""

    start_time: datetime
    period: timedelta
    name: str = "sin"
    documentation: str = "Oscillating sin function."

    def __post_init__(self) -> None:
        if not isinstance(self.period, timedelta) or self.period <= timedelta(0):
            raise InvalidConfigurationError(
                f"Oscillation period must be positive, got {self.period}",
                field="oscillation.period",
                value=self.period,
            )
        object.__setattr__(self, "start_time", ensure_utc(self.start_time))

    def value(self, now: datetime) -> float:
        return oscillation_value(self.start_time, self.period, now)
