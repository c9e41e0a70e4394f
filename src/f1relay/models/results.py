"""Historical results records (Jolpica / Ergast JSON shapes).

Ergast returns numbers as strings and capitalised nested keys; aliases map
them onto snake_case attributes and pydantic coerces the numeric strings.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _ErgastModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ResultsDriver(_ErgastModel):
    driver_id: str | None = Field(default=None, alias="driverId")
    permanent_number: int | None = Field(default=None, alias="permanentNumber")
    code: str | None = None
    given_name: str | None = Field(default=None, alias="givenName")
    family_name: str | None = Field(default=None, alias="familyName")
    nationality: str | None = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.given_name, self.family_name) if part)


class Constructor(_ErgastModel):
    constructor_id: str | None = Field(default=None, alias="constructorId")
    name: str | None = None
    nationality: str | None = None


class Circuit(_ErgastModel):
    circuit_id: str | None = Field(default=None, alias="circuitId")
    circuit_name: str | None = Field(default=None, alias="circuitName")


class DriverStanding(_ErgastModel):
    position: int | None = None
    points: float = 0.0
    wins: int = 0
    driver: ResultsDriver = Field(alias="Driver")
    constructors: list[Constructor] = Field(default_factory=list, alias="Constructors")


class ConstructorStanding(_ErgastModel):
    position: int | None = None
    points: float = 0.0
    wins: int = 0
    constructor: Constructor = Field(alias="Constructor")


class Race(_ErgastModel):
    season: int
    round: int
    race_name: str | None = Field(default=None, alias="raceName")
    date: str | None = None
    time: str | None = None
    circuit: Circuit | None = Field(default=None, alias="Circuit")


class RaceResult(_ErgastModel):
    number: int | None = None
    position: int | None = None
    points: float = 0.0
    grid: int | None = None
    laps: int | None = None
    status: str | None = None
    driver: ResultsDriver = Field(alias="Driver")
    constructor: Constructor | None = Field(default=None, alias="Constructor")


class QualifyingResult(_ErgastModel):
    number: int | None = None
    position: int | None = None
    driver: ResultsDriver = Field(alias="Driver")
    constructor: Constructor | None = Field(default=None, alias="Constructor")
    q1: str | None = Field(default=None, alias="Q1")
    q2: str | None = Field(default=None, alias="Q2")
    q3: str | None = Field(default=None, alias="Q3")


class ChampionshipWinner(BaseModel):
    """Drivers' and constructors' champions of one season."""

    model_config = ConfigDict(frozen=True)

    year: int
    driver: str
    driver_id: str | None = None
    team: str | None = None
    constructor_id: str | None = None
    points: float
    wins: int
    constructor_champion: str | None = None
    constructor_points: float
    constructor_wins: int
