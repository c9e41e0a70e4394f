"""Derived leaderboard rows and the payload pushed to subscribers."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from f1relay.models.session import Session
from f1relay.models.timing import CarData, Driver, Interval

NO_PREDECESSOR = "-"


class SessionMode(str, Enum):
    """Which shape of data a session produces."""

    PRACTICE = "practice"
    QUALIFYING = "qualifying"
    RACE = "race"

    @property
    def uses_lap_standings(self) -> bool:
        return self is not SessionMode.RACE


class Standing(BaseModel):
    """One ranked row of a best-lap leaderboard."""

    model_config = ConfigDict(frozen=True)

    position: int
    driver_number: int
    best_lap: float
    lap_time: str
    interval: str = NO_PREDECESSOR
    gap: str = NO_PREDECESSOR
    name: str
    acronym: str | None = None
    team_name: str
    team_colour: str


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class LiveBroadcastPayload(BaseModel):
    """Unit delivered on ``live_data_update``.

    Practice and qualifying carry lap-derived standings with empty
    ``intervals``/``car_data``; race mode carries upstream records untouched.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    mode: SessionMode
    drivers: list[Standing] | list[Driver] = Field(default_factory=list)
    intervals: list[Interval] = Field(default_factory=list)
    car_data: list[CarData] = Field(default_factory=list, alias="carData")
    current_session: Session | None = Field(default=None, alias="currentSession")
    is_live: bool = Field(default=False, alias="isLive")
    timestamp: str = Field(default_factory=_utc_now_iso)

    def to_wire(self) -> dict:
        """JSON-ready dict using the camelCase event field names."""
        return self.model_dump(mode="json", by_alias=True)

    def feed_snapshot(self) -> dict:
        """The ``{drivers, intervals, carData}`` triple used for change detection."""
        wire = self.to_wire()
        return {key: wire[key] for key in ("drivers", "intervals", "carData")}
