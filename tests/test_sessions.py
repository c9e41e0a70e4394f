"""Tests for session resolution, liveness and classification."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from f1relay.models import Session, SessionMode
from f1relay.sessions import SessionResolver, classify_session_type, is_live, latest_session
from tests.conftest import SAMPLE_SESSION, make_session

UTC = timezone.utc


class FakeTelemetry:
    def __init__(self, sessions: list[dict]) -> None:
        self.sessions = [Session.model_validate(s) for s in sessions]
        self.calls: list[dict] = []

    async def fetch_sessions(self, **kwargs: object) -> list[Session]:
        self.calls.append(kwargs)
        key = kwargs.get("session_key")
        if key is not None:
            return [s for s in self.sessions if s.session_key == key]
        return list(self.sessions)


def _at(*args: int) -> datetime:
    return datetime(*args, tzinfo=UTC)


class TestIsLive:
    session = Session.model_validate(SAMPLE_SESSION)

    def test_inside_window(self) -> None:
        assert is_live(self.session, _at(2023, 3, 5, 16, 0))

    def test_bounds_inclusive(self) -> None:
        assert is_live(self.session, _at(2023, 3, 5, 15, 0))
        assert is_live(self.session, _at(2023, 3, 5, 17, 2, 48))

    def test_outside_window(self) -> None:
        assert not is_live(self.session, _at(2023, 3, 5, 14, 59))
        assert not is_live(self.session, _at(2023, 3, 6, 0, 0))

    def test_missing_timestamps(self) -> None:
        assert not is_live(Session(date_start="2023-03-05T15:00:00"), _at(2023, 3, 5, 16))
        assert not is_live(Session(date_end="2023-03-05T17:00:00"), _at(2023, 3, 5, 16))
        assert not is_live(None, _at(2023, 3, 5, 16))

    def test_naive_values_compare_as_utc(self) -> None:
        session = Session(date_start="2023-03-05T15:00:00", date_end="2023-03-05T17:00:00")
        assert is_live(session, datetime(2023, 3, 5, 16, 0))


class TestClassifySessionType:
    @pytest.mark.parametrize(
        ("name", "mode"),
        [
            ("Practice 1", SessionMode.PRACTICE),
            ("PRACTICE 3", SessionMode.PRACTICE),
            ("Qualifying", SessionMode.QUALIFYING),
            ("Sprint Qualifying", SessionMode.QUALIFYING),
            ("Race", SessionMode.RACE),
            ("Sprint", SessionMode.RACE),
            ("Day 1", SessionMode.RACE),
            (None, SessionMode.RACE),
        ],
    )
    def test_name_heuristic(self, name: str | None, mode: SessionMode) -> None:
        assert classify_session_type(Session(session_name=name)) is mode


class TestLatestSession:
    def test_max_start(self) -> None:
        sessions = [
            Session(session_key=1, date_start="2025-03-14T01:30:00+00:00"),
            Session(session_key=3, date_start="2025-03-16T04:00:00+00:00"),
            Session(session_key=2, date_start="2025-03-15T05:00:00+00:00"),
        ]
        assert latest_session(sessions).session_key == 3

    def test_tie_goes_to_last(self) -> None:
        sessions = [
            Session(session_key=1, date_start="2025-03-16T04:00:00+00:00"),
            Session(session_key=2, date_start="2025-03-16T04:00:00+00:00"),
        ]
        assert latest_session(sessions).session_key == 2

    def test_missing_start_sorts_first(self) -> None:
        sessions = [Session(session_key=1, date_start="2025-03-16T04:00:00"), Session(session_key=2)]
        assert latest_session(sessions).session_key == 1

    def test_empty(self) -> None:
        assert latest_session([]) is None


class TestSessionResolver:
    @pytest.mark.asyncio
    async def test_latest_of_current_year(self) -> None:
        telemetry = FakeTelemetry([
            make_session(session_key=1, session_name="Practice 1",
                         date_start="2023-03-03T11:30:00+00:00", date_end="2023-03-03T12:30:00+00:00"),
            SAMPLE_SESSION,
        ])
        resolver = SessionResolver(telemetry, clock=lambda: _at(2023, 3, 5, 16, 0))  # type: ignore[arg-type]
        resolved = await resolver.resolve_current_session()
        assert resolved is not None
        assert resolved.session_key == 9161
        assert resolved.is_live
        assert resolved.mode is SessionMode.RACE
        assert telemetry.calls == [{"year": 2023}]

    @pytest.mark.asyncio
    async def test_not_live_after_end(self) -> None:
        telemetry = FakeTelemetry([SAMPLE_SESSION])
        resolver = SessionResolver(telemetry, clock=lambda: _at(2023, 3, 9))  # type: ignore[arg-type]
        resolved = await resolver.resolve_current_session()
        assert resolved is not None
        assert not resolved.is_live

    @pytest.mark.asyncio
    async def test_no_sessions(self) -> None:
        resolver = SessionResolver(FakeTelemetry([]))  # type: ignore[arg-type]
        assert await resolver.resolve_current_session() is None

    @pytest.mark.asyncio
    async def test_override_never_live(self) -> None:
        telemetry = FakeTelemetry([
            SAMPLE_SESSION,
            make_session(session_key=9999, session_name="Qualifying",
                         date_start="2023-03-10T15:00:00+00:00"),
        ])
        resolver = SessionResolver(
            telemetry, override_key=9161, clock=lambda: _at(2023, 3, 5, 16, 0),  # type: ignore[arg-type]
        )
        resolved = await resolver.resolve_current_session()
        assert resolved is not None
        assert resolved.session_key == 9161
        assert resolved.is_live is False
        assert telemetry.calls == [{"session_key": 9161}]

    @pytest.mark.asyncio
    async def test_override_not_found(self) -> None:
        resolver = SessionResolver(FakeTelemetry([]), override_key=1)  # type: ignore[arg-type]
        assert await resolver.resolve_current_session() is None

    @pytest.mark.asyncio
    async def test_recent_sessions_newest_first(self) -> None:
        telemetry = FakeTelemetry([
            make_session(session_key=k, date_start=f"2023-03-0{k}T10:00:00+00:00")
            for k in (1, 3, 2, 4)
        ])
        resolver = SessionResolver(telemetry, clock=lambda: _at(2023, 3, 9))  # type: ignore[arg-type]
        recent = await resolver.recent_sessions(limit=3)
        assert [s.session_key for s in recent] == [4, 3, 2]
