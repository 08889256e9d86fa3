"""Pytest configuration and shared fixtures."""

import pytest
from datetime import datetime, timedelta, timezone

from signal_exporter.config.defaults import DEFAULT_CRON_EXPRESSION
from signal_exporter.schedule.cron import CronSchedule


@pytest.fixture
def start_time() -> datetime:
    """Fixed process start instant."""
    return datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def oscillation_period() -> timedelta:
    return timedelta(seconds=4)


@pytest.fixture
def default_schedule() -> CronSchedule:
    """Six-minute windows every ten minutes."""
    return CronSchedule.parse(DEFAULT_CRON_EXPRESSION)


@pytest.fixture
def first_minutes_schedule() -> CronSchedule:
    """Minutes 0-5 of every hour."""
    return CronSchedule.parse("0-5 * * * *")


@pytest.fixture
def config_file(tmp_path):
    """Write a YAML configuration file and return its path."""
    def _write(content: str):
        path = tmp_path / "exporter.yaml"
        path.write_text(content)
        return path
    return _write
