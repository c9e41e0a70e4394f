"""Client for the historical-results (Jolpica / Ergast) API."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable

from pydantic import BaseModel, ValidationError

from f1relay._http import RESULTS_BASE_URL, AsyncTransport
from f1relay.api_logging import log_api_call
from f1relay.exceptions import F1RelayError, RateLimitExceeded
from f1relay.models.results import (
    ChampionshipWinner,
    ConstructorStanding,
    DriverStanding,
    QualifyingResult,
    Race,
    RaceResult,
)

logger = logging.getLogger(__name__)

_HOUR = 3600.0
_SEASON_CONCURRENCY = 5


class HourlyRateLimit:
    """Fixed one-hour request budget, reset when the window expires."""

    def __init__(
        self,
        max_requests: int = 200,
        window: float = _HOUR,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window = window
        self._clock = clock
        self._requests = 0
        self._reset_at = clock() + window

    @property
    def remaining(self) -> int:
        self._maybe_reset()
        return self.max_requests - self._requests

    def _maybe_reset(self) -> None:
        now = self._clock()
        if now > self._reset_at:
            self._requests = 0
            self._reset_at = now + self.window

    def acquire(self) -> None:
        """Consume one request or raise RateLimitExceeded."""
        self._maybe_reset()
        if self._requests >= self.max_requests:
            raise RateLimitExceeded(
                f"Historical results budget of {self.max_requests} requests/hour spent"
            )
        self._requests += 1


def _dig(data: Any, *path: str | int) -> Any:
    """Walk nested Ergast containers, returning None on any missing step."""
    node = data
    for step in path:
        try:
            node = node[step]
        except (KeyError, IndexError, TypeError):
            return None
    return node


def _parse_list[M: BaseModel](model: type[M], items: Any) -> list[M]:
    if not isinstance(items, list):
        return []
    return [model.model_validate(item) for item in items]


class ResultsClient:
    """Async client for season, standings and results data.

    Usage:
        async with ResultsClient() as results:
            standings = await results.driver_standings(2024)
    """

    def __init__(
        self,
        transport: AsyncTransport | None = None,
        rate_limit: HourlyRateLimit | None = None,
    ) -> None:
        self._transport = transport or AsyncTransport(base_url=RESULTS_BASE_URL)
        self._rate_limit = rate_limit or HourlyRateLimit()

    async def __aenter__(self) -> ResultsClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._transport.close()

    async def _get_json(self, path: str) -> Any:
        self._rate_limit.acquire()
        return await self._transport.get(path)

    async def _fetch_list[M: BaseModel](
        self, path: str, model: type[M], *container: str | int,
    ) -> list[M]:
        try:
            data = await self._get_json(path)
            return _parse_list(model, _dig(data, "MRData", *container))
        except (F1RelayError, ValidationError) as exc:
            logger.warning("Results fetch %s failed: %s", path, exc)
            return []

    # ── Endpoints ──────────────────────────────────────────────

    @log_api_call
    async def current_season_races(self) -> list[Race]:
        """Get the race calendar of the current season."""
        return await self._fetch_list("/current.json", Race, "RaceTable", "Races")

    @log_api_call
    async def driver_standings(self, season: int | str = "current") -> list[DriverStanding]:
        """Get the drivers' championship table."""
        return await self._fetch_list(
            f"/{season}/driverStandings.json", DriverStanding,
            "StandingsTable", "StandingsLists", 0, "DriverStandings",
        )

    @log_api_call
    async def constructor_standings(
        self, season: int | str = "current",
    ) -> list[ConstructorStanding]:
        """Get the constructors' championship table."""
        return await self._fetch_list(
            f"/{season}/constructorStandings.json", ConstructorStanding,
            "StandingsTable", "StandingsLists", 0, "ConstructorStandings",
        )

    @log_api_call
    async def race_results(self, season: int | str, round: int | str) -> list[RaceResult]:
        """Get the classification of one race."""
        return await self._fetch_list(
            f"/{season}/{round}/results.json", RaceResult,
            "RaceTable", "Races", 0, "Results",
        )

    @log_api_call
    async def qualifying_results(
        self, season: int | str, round: int | str,
    ) -> list[QualifyingResult]:
        """Get the qualifying classification of one round."""
        return await self._fetch_list(
            f"/{season}/{round}/qualifying.json", QualifyingResult,
            "RaceTable", "Races", 0, "QualifyingResults",
        )

    async def _season_champions(self, year: int) -> ChampionshipWinner | None:
        drivers_data, constructors_data = await asyncio.gather(
            self._get_json(f"/{year}/driverStandings/1.json"),
            self._get_json(f"/{year}/constructorStandings/1.json"),
        )
        driver_row = _dig(
            drivers_data, "MRData", "StandingsTable", "StandingsLists", 0, "DriverStandings", 0,
        )
        constructor_row = _dig(
            constructors_data, "MRData", "StandingsTable", "StandingsLists", 0,
            "ConstructorStandings", 0,
        )
        if driver_row is None or constructor_row is None:
            return None

        driver = DriverStanding.model_validate(driver_row)
        constructor = ConstructorStanding.model_validate(constructor_row)
        team = driver.constructors[0] if driver.constructors else None
        return ChampionshipWinner(
            year=year,
            driver=driver.driver.full_name,
            driver_id=driver.driver.driver_id,
            team=team.name if team else None,
            constructor_id=team.constructor_id if team else None,
            points=driver.points,
            wins=driver.wins,
            constructor_champion=constructor.constructor.name,
            constructor_points=constructor.points,
            constructor_wins=constructor.wins,
        )

    @log_api_call
    async def championship_winners(
        self, start_year: int = 2020, end_year: int | None = None,
    ) -> list[ChampionshipWinner]:
        """Get drivers' and constructors' champions per season, newest first.

        Seasons are fetched concurrently (bounded); a season that fails or
        has no classification yet is left out.
        """
        if end_year is None:
            end_year = time.gmtime().tm_year
        semaphore = asyncio.Semaphore(_SEASON_CONCURRENCY)

        async def bounded(year: int) -> ChampionshipWinner | None:
            async with semaphore:
                return await self._season_champions(year)

        years = list(range(end_year, start_year - 1, -1))
        outcomes = await asyncio.gather(*(bounded(y) for y in years), return_exceptions=True)

        winners: list[ChampionshipWinner] = []
        for year, outcome in zip(years, outcomes):
            if isinstance(outcome, Exception):
                logger.warning("Championship data for %s unavailable: %s", year, outcome)
            elif outcome is not None:
                winners.append(outcome)
        return winners
