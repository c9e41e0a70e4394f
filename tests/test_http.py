"""Tests for the HTTP transport layer."""

from __future__ import annotations

import httpx
import pytest
import respx

from f1relay._http import AsyncTransport
from f1relay.exceptions import (
    UpstreamAPIError,
    UpstreamConnectionError,
    UpstreamTimeoutError,
    UpstreamValidationError,
)

BASE_URL = "https://api.openf1.org/v1"


class TestAsyncTransport:
    @respx.mock
    @pytest.mark.asyncio
    async def test_get_success(self) -> None:
        respx.get(f"{BASE_URL}/drivers").mock(
            return_value=httpx.Response(200, json=[{"driver_number": 1}])
        )
        transport = AsyncTransport()
        result = await transport.get("/drivers", [("session_key", "9161")])
        assert result == [{"driver_number": 1}]
        await transport.close()

    @respx.mock
    @pytest.mark.asyncio
    async def test_params_sent(self) -> None:
        route = respx.get(f"{BASE_URL}/intervals").mock(
            return_value=httpx.Response(200, json=[])
        )
        transport = AsyncTransport()
        await transport.get("/intervals", [("session_key", "9161"), ("limit", "100")])
        request = route.calls.last.request
        assert request.url.params["session_key"] == "9161"
        assert request.url.params["limit"] == "100"
        await transport.close()

    @respx.mock
    @pytest.mark.asyncio
    async def test_get_500(self) -> None:
        respx.get(f"{BASE_URL}/drivers").mock(
            return_value=httpx.Response(500, text="Internal Server Error")
        )
        transport = AsyncTransport()
        with pytest.raises(UpstreamAPIError) as exc_info:
            await transport.get("/drivers", [])
        assert exc_info.value.status_code == 500
        await transport.close()

    @respx.mock
    @pytest.mark.asyncio
    async def test_invalid_json(self) -> None:
        respx.get(f"{BASE_URL}/drivers").mock(
            return_value=httpx.Response(200, text="<html>busy</html>")
        )
        transport = AsyncTransport()
        with pytest.raises(UpstreamValidationError):
            await transport.get("/drivers", [])
        await transport.close()

    @respx.mock
    @pytest.mark.asyncio
    async def test_connection_error(self) -> None:
        respx.get(f"{BASE_URL}/drivers").mock(side_effect=httpx.ConnectError("fail"))
        transport = AsyncTransport()
        with pytest.raises(UpstreamConnectionError):
            await transport.get("/drivers", [])
        await transport.close()

    @respx.mock
    @pytest.mark.asyncio
    async def test_timeout_error(self) -> None:
        respx.get(f"{BASE_URL}/drivers").mock(side_effect=httpx.ReadTimeout("timeout"))
        transport = AsyncTransport()
        with pytest.raises(UpstreamTimeoutError):
            await transport.get("/drivers", [])
        await transport.close()

    @respx.mock
    @pytest.mark.asyncio
    async def test_custom_base_url(self) -> None:
        respx.get("https://api.jolpi.ca/ergast/f1/current.json").mock(
            return_value=httpx.Response(200, json={"MRData": {}})
        )
        transport = AsyncTransport(base_url="https://api.jolpi.ca/ergast/f1")
        assert await transport.get("/current.json") == {"MRData": {}}
        await transport.close()
