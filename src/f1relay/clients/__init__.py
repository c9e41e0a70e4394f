"""Upstream API clients."""

from f1relay.clients.results import HourlyRateLimit, ResultsClient
from f1relay.clients.telemetry import TelemetryClient

__all__ = ["HourlyRateLimit", "ResultsClient", "TelemetryClient"]
