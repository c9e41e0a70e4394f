"""Typed records for upstream data and relay output."""

from f1relay.models.results import (
    ChampionshipWinner,
    Constructor,
    ConstructorStanding,
    DriverStanding,
    QualifyingResult,
    Race,
    RaceResult,
    ResultsDriver,
)
from f1relay.models.session import Session
from f1relay.models.standing import LiveBroadcastPayload, SessionMode, Standing
from f1relay.models.timing import CarData, Driver, Interval, Lap

__all__ = [
    "CarData",
    "ChampionshipWinner",
    "Constructor",
    "ConstructorStanding",
    "Driver",
    "DriverStanding",
    "Interval",
    "Lap",
    "LiveBroadcastPayload",
    "QualifyingResult",
    "Race",
    "RaceResult",
    "ResultsDriver",
    "Session",
    "SessionMode",
    "Standing",
]
