"""Per-session timing records from the telemetry API.

Field names mirror the upstream JSON so records validate straight from the
response body. Every field is optional because the live feed routinely omits
values mid-session.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

DEFAULT_TEAM_COLOUR = "888888"
UNKNOWN_TEAM = "Unknown"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)

    driver_number: int | None = None
    meeting_key: int | None = None
    session_key: int | None = None


class Driver(_Record):
    """Driver metadata, scoped to one session."""

    broadcast_name: str | None = None
    country_code: str | None = None
    first_name: str | None = None
    full_name: str | None = None
    headshot_url: str | None = None
    last_name: str | None = None
    name_acronym: str | None = None
    team_colour: str | None = None
    team_name: str | None = None

    @property
    def display_name(self) -> str:
        """Full name, else acronym, else the car number as text."""
        if self.full_name:
            return self.full_name
        if self.name_acronym:
            return self.name_acronym
        return str(self.driver_number)


class Lap(_Record):
    """One driver's timing sample for a single lap."""

    date_start: datetime | None = None
    duration_sector_1: float | None = None
    duration_sector_2: float | None = None
    duration_sector_3: float | None = None
    is_pit_out_lap: bool | None = None
    lap_duration: float | None = None
    lap_number: int | None = None

    @property
    def total_sector_time(self) -> float | None:
        """Sum of all three sector durations, or None if any is missing."""
        s1, s2, s3 = self.duration_sector_1, self.duration_sector_2, self.duration_sector_3
        if s1 is None or s2 is None or s3 is None:
            return None
        return s1 + s2 + s3


class Interval(_Record):
    """Gap to the car ahead and to the leader (race sessions only)."""

    date: datetime | None = None
    gap_to_leader: float | str | None = None
    interval: float | str | None = None


class CarData(_Record):
    """Car telemetry sample (~3.7 Hz)."""

    brake: int | None = None
    date: datetime | None = None
    drs: int | None = None
    n_gear: int | None = None
    rpm: int | None = None
    speed: int | None = None
    throttle: int | None = None
