"""Current-session resolution, liveness and session-mode classification."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from f1relay.clients.telemetry import TelemetryClient
from f1relay.models.session import Session
from f1relay.models.standing import SessionMode

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_live(session: Session | None, now: datetime) -> bool:
    """True iff the session has both timestamps and ``start <= now <= end``."""
    if session is None:
        return False
    start, end = session.starts_at, session.ends_at
    if start is None or end is None:
        return False
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return start <= now <= end


def classify_session_type(session: Session) -> SessionMode:
    """Classify by session name; anything not practice or qualifying is race mode.

    Sprint sessions therefore fetch the race feed, while "Sprint Qualifying"
    falls under qualifying.
    """
    name = (session.session_name or "").lower()
    if "practice" in name:
        return SessionMode.PRACTICE
    if "qualifying" in name:
        return SessionMode.QUALIFYING
    return SessionMode.RACE


def _start_key(session: Session) -> datetime:
    return session.starts_at or _EPOCH


def latest_session(sessions: list[Session]) -> Session | None:
    """Session with the greatest start time; ties go to the last one listed."""
    if not sessions:
        return None
    return sorted(sessions, key=_start_key)[-1]


@dataclass(frozen=True)
class ResolvedSession:
    """The session a tick works on and whether it is running now."""

    session: Session
    is_live: bool
    mode: SessionMode

    @property
    def session_key(self) -> int | None:
        return self.session.session_key


class SessionResolver:
    """Decides which session is current.

    With ``override_key`` set, that session is always used and treated as a
    replay (never live).
    """

    def __init__(
        self,
        telemetry: TelemetryClient,
        override_key: int | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._telemetry = telemetry
        self._override_key = override_key
        self._clock = clock

    async def resolve_current_session(self) -> ResolvedSession | None:
        if self._override_key is not None:
            sessions = await self._telemetry.fetch_sessions(session_key=self._override_key)
            if not sessions:
                logger.info("Pinned session %s not found", self._override_key)
                return None
            session = sessions[0]
            return ResolvedSession(session, False, classify_session_type(session))

        now = self._clock()
        session = latest_session(await self._telemetry.fetch_sessions(year=now.year))
        if session is None:
            logger.info("No sessions found for %s", now.year)
            return None
        return ResolvedSession(session, is_live(session, now), classify_session_type(session))

    async def recent_sessions(self, limit: int = 10) -> list[Session]:
        """Sessions of the current season, newest first."""
        sessions = await self._telemetry.fetch_sessions(year=self._clock().year)
        return sorted(sessions, key=_start_key, reverse=True)[:limit]
