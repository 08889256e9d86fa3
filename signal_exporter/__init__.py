"""
Signal Exporter - Synthetic Prometheus signals

A long-running process that computes synthetic signals (a sine oscillation,
the wall clock and a cron-window indicator) and exposes them over HTTP for
exercising metrics pipelines without a real workload.
"""

__version__ = "0.1.0"
__author__ = "Signal Exporter Team"
