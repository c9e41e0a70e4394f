"""Async HTTP transport shared by the upstream clients."""

from __future__ import annotations

from typing import Any

import httpx

from f1relay.exceptions import (
    UpstreamAPIError,
    UpstreamConnectionError,
    UpstreamTimeoutError,
    UpstreamValidationError,
)

OPENF1_BASE_URL = "https://api.openf1.org/v1"
RESULTS_BASE_URL = "https://api.jolpi.ca/ergast/f1"
DEFAULT_TIMEOUT = 10.0


def _handle_response(response: httpx.Response) -> Any:
    """Validate response status and return parsed JSON."""
    if response.status_code >= 400:
        raise UpstreamAPIError(
            status_code=response.status_code,
            message=response.text[:200],
        )
    try:
        return response.json()
    except ValueError as exc:
        raise UpstreamValidationError(f"Invalid JSON from {response.url}") from exc


class AsyncTransport:
    """Asynchronous HTTP transport using httpx.AsyncClient."""

    def __init__(
        self,
        base_url: str = OPENF1_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def get(self, endpoint: str, params: list[tuple[str, str]] | None = None) -> Any:
        """Perform an async GET request and return parsed JSON."""
        try:
            response = await self._client.get(endpoint, params=params or [])
        except httpx.TimeoutException as exc:
            raise UpstreamTimeoutError(f"{endpoint}: {exc}") from exc
        except httpx.TransportError as exc:
            raise UpstreamConnectionError(f"{endpoint}: {exc}") from exc
        return _handle_response(response)

    async def close(self) -> None:
        await self._client.aclose()
