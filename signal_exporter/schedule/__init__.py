"""Recurring time-window schedules"""

from .cron import CronSchedule, resolve_timezone

__all__ = [
    "CronSchedule",
    "resolve_timezone",
]
