"""Client for the live-telemetry (OpenF1) API.

Every public method degrades to an empty result when the upstream call
fails, so callers never have to handle transport errors.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from f1relay._filters import Filter, build_query_params
from f1relay._http import OPENF1_BASE_URL, AsyncTransport
from f1relay.api_logging import log_api_call
from f1relay.exceptions import F1RelayError, UpstreamValidationError
from f1relay.models.session import Session
from f1relay.models.timing import CarData, Driver, Interval, Lap

logger = logging.getLogger(__name__)


def _validate_list[T](model_type: type[T], data: Any) -> list[T]:
    """Validate a JSON array against a Pydantic model."""
    if not isinstance(data, list):
        raise UpstreamValidationError(
            f"Expected a list of {model_type.__name__}, got {type(data).__name__}"
        )
    try:
        return TypeAdapter(list[model_type]).validate_python(data)
    except ValidationError as exc:
        raise UpstreamValidationError(
            f"Failed to validate {model_type.__name__} response: {exc}"
        ) from exc


class TelemetryClient:
    """Async client for the telemetry endpoints the relay consumes.

    Usage:
        async with TelemetryClient() as telemetry:
            laps = await telemetry.fetch_laps_for_session(9161)
    """

    def __init__(self, transport: AsyncTransport | None = None) -> None:
        self._transport = transport or AsyncTransport(base_url=OPENF1_BASE_URL)

    async def __aenter__(self) -> TelemetryClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection."""
        await self._transport.close()

    async def _fetch[T](self, endpoint: str, model: type[T], **kwargs: Any) -> list[T]:
        params = build_query_params(**kwargs)
        try:
            data = await self._transport.get(endpoint, params)
            return _validate_list(model, data)
        except F1RelayError as exc:
            logger.warning("Telemetry fetch %s %s failed: %s", endpoint, params, exc)
            return []

    # ── Endpoints ──────────────────────────────────────────────

    @log_api_call
    async def fetch_sessions(
        self,
        year: int | None = None,
        session_key: int | str | None = None,
        date_start: Filter | None = None,
    ) -> list[Session]:
        """Get sessions for a season, a single session key, or a date range."""
        return await self._fetch(
            "/sessions", Session, year=year, session_key=session_key, date_start=date_start,
        )

    @log_api_call
    async def fetch_drivers_for_session(self, session_key: int | str) -> list[Driver]:
        """Get driver metadata for one session."""
        return await self._fetch("/drivers", Driver, session_key=session_key)

    @log_api_call
    async def fetch_laps_for_session(self, session_key: int | str) -> list[Lap]:
        """Get the full lap history of a session (no limit)."""
        return await self._fetch("/laps", Lap, session_key=session_key)

    @log_api_call
    async def fetch_intervals_and_car_data(
        self, session_key: int | str, limit: int,
    ) -> tuple[list[Interval], list[CarData]]:
        """Get bounded interval and car telemetry feeds concurrently.

        Either request may fail without affecting the other; a failed part
        comes back as an empty list.
        """
        intervals, car_data = await asyncio.gather(
            self._fetch("/intervals", Interval, session_key=session_key, limit=limit),
            self._fetch("/car_data", CarData, session_key=session_key, limit=limit),
            return_exceptions=True,
        )
        if isinstance(intervals, BaseException):
            logger.error("Interval fetch for session %s crashed", session_key, exc_info=intervals)
            intervals = []
        if isinstance(car_data, BaseException):
            logger.error("Car data fetch for session %s crashed", session_key, exc_info=car_data)
            car_data = []
        return intervals[:limit], car_data[:limit]
