"""Shared test fixtures and sample API responses."""

from __future__ import annotations

from typing import Any

import pytest

from f1relay.config import Settings

OPENF1_URL = "https://api.openf1.org/v1"
RESULTS_URL = "https://api.jolpi.ca/ergast/f1"


SAMPLE_DRIVER = {
    "broadcast_name": "M VERSTAPPEN",
    "country_code": "NED",
    "driver_number": 1,
    "first_name": "Max",
    "full_name": "Max VERSTAPPEN",
    "headshot_url": "https://example.com/ver.png",
    "last_name": "Verstappen",
    "meeting_key": 1219,
    "name_acronym": "VER",
    "session_key": 9161,
    "team_colour": "3671C6",
    "team_name": "Red Bull Racing",
}

SAMPLE_SESSION = {
    "circuit_key": 61,
    "circuit_short_name": "Bahrain",
    "country_code": "BHR",
    "country_name": "Bahrain",
    "date_end": "2023-03-05T17:02:48+00:00",
    "date_start": "2023-03-05T15:00:00+00:00",
    "gmt_offset": "03:00:00",
    "location": "Sakhir",
    "meeting_key": 1219,
    "session_key": 9161,
    "session_name": "Race",
    "session_type": "Race",
    "year": 2023,
}

SAMPLE_LAP = {
    "date_start": "2023-03-05T15:10:00",
    "driver_number": 1,
    "duration_sector_1": 28.5,
    "duration_sector_2": 35.2,
    "duration_sector_3": 30.1,
    "is_pit_out_lap": False,
    "lap_duration": 93.8,
    "lap_number": 5,
    "meeting_key": 1219,
    "session_key": 9161,
}

SAMPLE_INTERVAL = {
    "date": "2023-03-05T15:30:00.200",
    "driver_number": 11,
    "gap_to_leader": 4.212,
    "interval": 4.212,
    "meeting_key": 1219,
    "session_key": 9161,
}

SAMPLE_CAR_DATA = {
    "brake": 0,
    "date": "2023-03-05T15:10:00.100",
    "driver_number": 1,
    "drs": 12,
    "meeting_key": 1219,
    "n_gear": 7,
    "rpm": 10500,
    "session_key": 9161,
    "speed": 305,
    "throttle": 100,
}

SAMPLE_ERGAST_DRIVER = {
    "driverId": "max_verstappen",
    "permanentNumber": "33",
    "code": "VER",
    "givenName": "Max",
    "familyName": "Verstappen",
    "nationality": "Dutch",
}

SAMPLE_ERGAST_CONSTRUCTOR = {
    "constructorId": "red_bull",
    "name": "Red Bull",
    "nationality": "Austrian",
}


def ergast_driver_standings(season: int | str = 2023) -> dict[str, Any]:
    return {
        "MRData": {
            "StandingsTable": {
                "season": str(season),
                "StandingsLists": [{
                    "season": str(season),
                    "round": "22",
                    "DriverStandings": [{
                        "position": "1",
                        "positionText": "1",
                        "points": "575",
                        "wins": "19",
                        "Driver": SAMPLE_ERGAST_DRIVER,
                        "Constructors": [SAMPLE_ERGAST_CONSTRUCTOR],
                    }],
                }],
            },
        },
    }


def ergast_constructor_standings(season: int | str = 2023) -> dict[str, Any]:
    return {
        "MRData": {
            "StandingsTable": {
                "season": str(season),
                "StandingsLists": [{
                    "season": str(season),
                    "round": "22",
                    "ConstructorStandings": [{
                        "position": "1",
                        "positionText": "1",
                        "points": "860",
                        "wins": "21",
                        "Constructor": SAMPLE_ERGAST_CONSTRUCTOR,
                    }],
                }],
            },
        },
    }


def make_session(**overrides: Any) -> dict[str, Any]:
    return {**SAMPLE_SESSION, **overrides}


def make_lap(driver_number: int, lap_duration: float | None, **overrides: Any) -> dict[str, Any]:
    lap = {
        "driver_number": driver_number,
        "lap_duration": lap_duration,
        "duration_sector_1": None,
        "duration_sector_2": None,
        "duration_sector_3": None,
        "session_key": 9161,
    }
    lap.update(overrides)
    return lap


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        poll_interval=0.01,
        driver_cache_ttl=30.0,
        broadcast_cache_ttl=300.0,
        join_rate_limit=5.0,
    )
