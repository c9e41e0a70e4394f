"""Live relay: polls the telemetry API and pushes changed payloads to clients.

Each tick resolves the current session, fetches the data shape its mode
needs, drops the result if it matches what was last broadcast for that
session, and otherwise emits it to the live-timing room. Ticks never
overlap: the next one is scheduled only after the previous one finishes.
"""

from __future__ import annotations

import asyncio
import json
import logging
from enum import Enum
from typing import Any, Protocol

from f1relay import events
from f1relay.cache import MISS, TTLCache
from f1relay.clients.telemetry import TelemetryClient
from f1relay.config import Settings
from f1relay.models.standing import LiveBroadcastPayload, SessionMode
from f1relay.models.timing import Driver
from f1relay.sessions import ResolvedSession, SessionResolver, utc_now
from f1relay.standings import derive_standings

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Failed to fetch live data"


class Broadcaster(Protocol):
    async def broadcast(self, event: str, data: Any) -> None: ...


class TickOutcome(str, Enum):
    BROADCAST = "broadcast"
    SUPPRESSED = "suppressed"
    SKIPPED = "skipped"
    FAILED = "failed"


def serialize_feed(payload: LiveBroadcastPayload) -> str:
    """Deterministic serialization of the drivers/intervals/carData triple."""
    return json.dumps(payload.feed_snapshot(), sort_keys=True, separators=(",", ":"))


def empty_payload() -> LiveBroadcastPayload:
    return LiveBroadcastPayload(mode=SessionMode.RACE)


class LiveRelay:
    """Owns the polling loop and the caches it reads and writes."""

    def __init__(
        self,
        telemetry: TelemetryClient,
        resolver: SessionResolver,
        broadcaster: Broadcaster,
        settings: Settings,
        driver_cache: TTLCache | None = None,
        broadcast_cache: TTLCache | None = None,
    ) -> None:
        self._telemetry = telemetry
        self._resolver = resolver
        self._broadcaster = broadcaster
        self._settings = settings
        self.driver_cache = driver_cache or TTLCache(settings.driver_cache_ttl)
        self.broadcast_cache = broadcast_cache or TTLCache(settings.broadcast_cache_ttl)
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()

    # ── Data assembly ──────────────────────────────────────────

    async def drivers_for(self, session_key: int) -> list[Driver]:
        """Driver metadata for a session, memoized for the driver cache TTL."""
        key = f"drivers:{session_key}"
        cached = self.driver_cache.get(key)
        if cached is not MISS:
            return cached
        drivers = await self._telemetry.fetch_drivers_for_session(session_key)
        # An empty list means the fetch failed; retry next tick instead of caching it
        if drivers:
            self.driver_cache.set(key, drivers)
        return drivers

    async def _lap_payload(self, resolved: ResolvedSession) -> LiveBroadcastPayload:
        session_key = resolved.session_key
        laps = await self._telemetry.fetch_laps_for_session(session_key)
        drivers = await self.drivers_for(session_key)
        return LiveBroadcastPayload(
            mode=resolved.mode,
            drivers=derive_standings(laps, drivers),
            current_session=resolved.session,
            is_live=resolved.is_live,
        )

    async def _race_payload(self, resolved: ResolvedSession) -> LiveBroadcastPayload:
        session_key = resolved.session_key
        drivers, feed = await asyncio.gather(
            self.drivers_for(session_key),
            self._telemetry.fetch_intervals_and_car_data(
                session_key, self._settings.race_feed_limit,
            ),
            return_exceptions=True,
        )
        if isinstance(drivers, Exception):
            logger.warning("Driver fetch for session %s failed: %s", session_key, drivers)
            drivers = []
        if isinstance(feed, Exception):
            logger.warning("Race feed fetch for session %s failed: %s", session_key, feed)
            feed = ([], [])
        intervals, car_data = feed
        return LiveBroadcastPayload(
            mode=SessionMode.RACE,
            drivers=drivers,
            intervals=intervals,
            car_data=car_data,
            current_session=resolved.session,
            is_live=resolved.is_live,
        )

    async def build_payload(self, resolved: ResolvedSession) -> LiveBroadcastPayload:
        if resolved.mode.uses_lap_standings:
            return await self._lap_payload(resolved)
        return await self._race_payload(resolved)

    async def build_snapshot(self) -> tuple[ResolvedSession | None, LiveBroadcastPayload]:
        """Fresh session and payload, ignoring change detection."""
        resolved = await self._resolver.resolve_current_session()
        if resolved is None:
            return None, empty_payload()
        return resolved, await self.build_payload(resolved)

    # ── Tick ───────────────────────────────────────────────────

    async def tick(self) -> TickOutcome:
        """Run one poll cycle; never raises."""
        started = utc_now()
        session_key = None
        try:
            resolved = await self._resolver.resolve_current_session()
            if resolved is None:
                logger.debug("No current session, skipping tick")
                return TickOutcome.SKIPPED
            session_key = resolved.session_key

            payload = await self.build_payload(resolved)
            serialized = serialize_feed(payload)
            dedup_key = f"broadcast:{session_key}"
            if self.broadcast_cache.get(dedup_key) == serialized:
                logger.debug("Session %s unchanged, broadcast suppressed", session_key)
                return TickOutcome.SUPPRESSED

            await self._broadcaster.broadcast(events.LIVE_DATA_UPDATE, payload.to_wire())
            self.broadcast_cache.set(dedup_key, serialized)
            logger.info(
                "Broadcast %s (%s) mode=%s live=%s drivers=%d",
                resolved.session.session_name, session_key, resolved.mode.value,
                resolved.is_live, len(payload.drivers),
            )
            return TickOutcome.BROADCAST
        except Exception:
            logger.exception(
                "Relay tick failed (session=%s, tick=%s)", session_key, started.isoformat(),
            )
            await self._report_failure()
            return TickOutcome.FAILED

    async def _report_failure(self) -> None:
        if not self._settings.broadcast_errors:
            return
        try:
            await self._broadcaster.broadcast(events.ERROR, {"message": GENERIC_ERROR_MESSAGE})
        except Exception:
            logger.exception("Failed to broadcast tick error")

    # ── Loop ───────────────────────────────────────────────────

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run(self) -> None:
        """Tick, wait ``poll_interval``, repeat until ``stop`` is called."""
        while not self._stopping.is_set():
            await self.tick()
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self._settings.poll_interval)
            except TimeoutError:
                pass

    def start(self) -> None:
        if self.running:
            return
        self._stopping.clear()
        self._task = asyncio.create_task(self.run(), name="f1relay-live-relay")
        logger.info("Live relay started (interval %.1fs)", self._settings.poll_interval)

    async def stop(self) -> None:
        self._stopping.set()
        if self._task is not None:
            await self._task
            self._task = None
        logger.info("Live relay stopped")
