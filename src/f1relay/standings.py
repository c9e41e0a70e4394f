"""Best-lap leaderboard derivation from raw lap records.

Pure functions: laps in, ranked ``Standing`` rows out. Used for practice and
qualifying sessions, where the telemetry API offers no interval feed.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from f1relay.models.standing import NO_PREDECESSOR, Standing
from f1relay.models.timing import DEFAULT_TEAM_COLOUR, UNKNOWN_TEAM, Driver, Lap

MISSING_TIME = "N/A"


@dataclass(frozen=True)
class BestLap:
    """A driver's fastest valid lap."""

    driver_number: int
    seconds: float


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and not math.isnan(value)


def format_lap_time(seconds: float | None) -> str:
    """Format seconds as m:ss.fff, or 'N/A' when missing, NaN or zero."""
    if not _is_number(seconds) or not seconds:
        return MISSING_TIME
    millis = round(seconds * 1000)
    minutes, rest = divmod(millis, 60_000)
    return f"{minutes}:{rest / 1000:06.3f}"


def format_interval(seconds: float | None) -> str:
    """Format a time delta as +s.fff, or '-' for non-numeric input."""
    if not _is_number(seconds):
        return NO_PREDECESSOR
    return f"+{seconds:.3f}"


def lap_seconds(lap: Lap) -> float | None:
    """Return the usable duration of a lap, rebuilding it from sectors if needed."""
    if lap.lap_duration and lap.lap_duration > 0:
        return lap.lap_duration
    total = lap.total_sector_time
    if total is not None and total > 0:
        return total
    return None


def best_lap_per_driver(laps: Iterable[Lap]) -> list[BestLap]:
    """Return each driver's fastest valid lap, in order of first appearance."""
    best: dict[int, float] = {}
    for lap in laps:
        if lap.driver_number is None:
            continue
        seconds = lap_seconds(lap)
        if seconds is None:
            continue
        current = best.get(lap.driver_number)
        if current is None or seconds < current:
            best[lap.driver_number] = seconds
    return [BestLap(number, seconds) for number, seconds in best.items()]


def rank_standings(
    best_laps: Iterable[BestLap],
    drivers: Mapping[int, Driver],
) -> list[Standing]:
    """Rank best laps ascending (stable) and attach driver display fields.

    Interval and gap are left at the no-predecessor sentinel; see
    ``attach_gaps``.
    """
    ranked = sorted(best_laps, key=lambda best: best.seconds)
    standings: list[Standing] = []
    for position, best in enumerate(ranked, start=1):
        driver = drivers.get(best.driver_number) or Driver(driver_number=best.driver_number)
        standings.append(
            Standing(
                position=position,
                driver_number=best.driver_number,
                best_lap=best.seconds,
                lap_time=format_lap_time(best.seconds),
                name=driver.display_name,
                acronym=driver.name_acronym,
                team_name=driver.team_name or UNKNOWN_TEAM,
                team_colour=driver.team_colour or DEFAULT_TEAM_COLOUR,
            )
        )
    return standings


def attach_gaps(standings: list[Standing]) -> list[Standing]:
    """Fill interval (to the car ahead) and gap (to the leader) on ranked rows."""
    if not standings:
        return []
    leader = standings[0].best_lap
    result = [standings[0].model_copy(update={"interval": NO_PREDECESSOR, "gap": NO_PREDECESSOR})]
    for previous, row in zip(standings, standings[1:]):
        result.append(
            row.model_copy(update={
                "interval": format_interval(row.best_lap - previous.best_lap),
                "gap": format_interval(row.best_lap - leader),
            })
        )
    return result


def derive_standings(laps: Iterable[Lap], drivers: Iterable[Driver]) -> list[Standing]:
    """Laps to a ranked leaderboard with intervals and gaps."""
    lookup = {d.driver_number: d for d in drivers if d.driver_number is not None}
    return attach_gaps(rank_standings(best_lap_per_driver(laps), lookup))
