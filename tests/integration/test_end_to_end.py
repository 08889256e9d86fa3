"""End-to-end tests from resolved configuration to scraped values."""

import threading
import urllib.request
import pytest
from datetime import datetime, timedelta, timezone

from prometheus_client.parser import text_string_to_metric_families

from signal_exporter.app import SignalExporter
from signal_exporter.config.loader import ConfigLoader
from signal_exporter.exposition.server import create_server


def _resolve(**sections):
    overrides = {"server": {"listen_address": "127.0.0.1:0"}}
    overrides.update(sections)
    return ConfigLoader.create().resolve(overrides)


@pytest.mark.integration
class TestSignalScenarios:
    """Signal values over time for known configurations."""

    def test_four_second_oscillation(self, start_time):
        exporter = SignalExporter(_resolve(oscillation={"period": "4s"}), start_time=start_time)

        values = [
            exporter.collect(start_time + timedelta(seconds=offset))["sin"]
            for offset in range(5)
        ]

        assert values == pytest.approx([0.0, 1.0, 0.0, -1.0, 0.0], abs=1e-9)

    def test_epoch_seconds_follows_clock(self, start_time):
        exporter = SignalExporter(_resolve(), start_time=start_time)
        now = start_time + timedelta(seconds=42, microseconds=900000)

        assert exporter.collect(now)["epoch_seconds"] == start_time.timestamp() + 42

    def test_window_before_the_hour(self):
        config = _resolve(schedule={"expression": "0-5 * * * *"})
        exporter = SignalExporter(config)
        at_58 = datetime(2024, 3, 10, 14, 58, 0, tzinfo=timezone.utc)

        assert config.schedule.next(at_58) == datetime(2024, 3, 10, 15, 0, tzinfo=timezone.utc)
        assert exporter.collect(at_58)["time_interval"] == 0.0
        assert exporter.collect(at_58 + timedelta(seconds=90))["time_interval"] == 1.0
        assert exporter.collect(at_58 + timedelta(minutes=5, seconds=30))["time_interval"] == 1.0
        assert exporter.collect(at_58 + timedelta(minutes=7, seconds=30))["time_interval"] == 0.0

    def test_window_in_configured_timezone(self):
        config = _resolve(schedule={"expression": "0 9 * * *", "timezone": "Europe/Berlin"})
        exporter = SignalExporter(config)

        # 09:00 in Berlin is 08:00 UTC in winter
        assert exporter.collect(datetime(2024, 1, 15, 7, 59, 30, tzinfo=timezone.utc))["time_interval"] == 1.0
        assert exporter.collect(datetime(2024, 1, 15, 8, 59, 30, tzinfo=timezone.utc))["time_interval"] == 0.0


@pytest.mark.integration
class TestScrape:
    """Scraping a running endpoint."""

    def test_scrape_running_server(self):
        exporter = SignalExporter(_resolve(exposition={"process_metrics": False}))
        server = create_server("127.0.0.1", 0, exporter.app)
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()

        try:
            port = server.server_address[1]
            with urllib.request.urlopen(f"http://127.0.0.1:{port}/metrics", timeout=5) as response:
                body = response.read().decode("utf-8")
        finally:
            server.shutdown()
            server.server_close()
            thread.join(timeout=5)

        families = {family.name: family for family in text_string_to_metric_families(body)}
        assert -1.0 <= families["sin"].samples[0].value <= 1.0
        assert families["epoch_seconds"].samples[0].value > 1.7e9
        assert families["time_interval"].samples[0].value in (0.0, 1.0)
        assert families["sin"].type == "gauge"
