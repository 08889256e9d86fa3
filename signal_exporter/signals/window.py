"""Cron window proximity signal"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from ..schedule.cron import CronSchedule
from ..utils.time import ensure_utc
from .base import Signal

# How far ahead of the next occurrence the indicator switches on
WINDOW_LOOKAHEAD = timedelta(minutes=1)


def window_indicator(schedule: CronSchedule, now: datetime,
                     lookahead: timedelta = WINDOW_LOOKAHEAD) -> float:
    """
    1.0 when the next occurrence after now is less than lookahead away.

    The same instant is used for the lookup and the comparison. Inside a
    window such as minutes 0-5 the next occurrence is the following minute
    boundary, so the indicator stays at 1 from one minute before the window
    until its last minute starts. At an exact minute boundary the next
    occurrence is a full lookahead away and the indicator reads 0.
    """
    now = ensure_utc(now)
    next_time = schedule.next(now)
    if next_time - now < lookahead:
        return 1.0
    return 0.0


@dataclass(frozen=True)
class WindowSignal(Signal):
    """Binary indicator of proximity to the next scheduled window."""

    schedule: CronSchedule
    lookahead: timedelta = WINDOW_LOOKAHEAD
    name: str = "time_interval"
    documentation: str = "1 when the next scheduled window starts within a minute."

    def value(self, now: datetime) -> float:
        return window_indicator(self.schedule, now, self.lookahead)
