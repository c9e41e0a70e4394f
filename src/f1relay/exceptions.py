"""Exceptions raised by the upstream transport and clients."""

from __future__ import annotations


class F1RelayError(Exception):
    """Base exception for all relay errors."""


class UpstreamConnectionError(F1RelayError):
    """Raised when an upstream API cannot be reached."""


class UpstreamTimeoutError(F1RelayError):
    """Raised when an upstream request exceeds its timeout."""


class UpstreamAPIError(F1RelayError):
    """Raised when an upstream API answers with a 4xx/5xx status."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


class UpstreamValidationError(F1RelayError):
    """Raised when upstream data does not match the expected model."""


class RateLimitExceeded(F1RelayError):
    """Raised when the local request budget for an upstream API is spent."""
