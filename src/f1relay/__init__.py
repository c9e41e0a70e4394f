"""f1relay: polls F1 timing APIs and pushes live standings over Socket.IO."""

from f1relay._filters import Filter
from f1relay.cache import MISS, TTLCache
from f1relay.clients import ResultsClient, TelemetryClient
from f1relay.exceptions import (
    F1RelayError,
    RateLimitExceeded,
    UpstreamAPIError,
    UpstreamConnectionError,
    UpstreamTimeoutError,
    UpstreamValidationError,
)
from f1relay.relay import LiveRelay, TickOutcome
from f1relay.sessions import SessionResolver, classify_session_type, is_live

__all__ = [
    "F1RelayError",
    "Filter",
    "LiveRelay",
    "MISS",
    "RateLimitExceeded",
    "ResultsClient",
    "SessionResolver",
    "TTLCache",
    "TelemetryClient",
    "TickOutcome",
    "UpstreamAPIError",
    "UpstreamConnectionError",
    "UpstreamTimeoutError",
    "UpstreamValidationError",
    "classify_session_type",
    "is_live",
]

__version__ = "0.1.0"
