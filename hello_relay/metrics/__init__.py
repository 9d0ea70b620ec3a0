"""Relay metrics collection and results."""

from hello_relay.metrics.collector import MetricsCollector
from hello_relay.metrics.results import RelayResults

__all__ = ["MetricsCollector", "RelayResults"]
