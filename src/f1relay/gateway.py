"""Socket.IO gateway: room membership, join replay and heartbeats."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Callable

import socketio

from f1relay import events
from f1relay.sessions import utc_now

if TYPE_CHECKING:
    from f1relay.relay import LiveRelay
    from f1relay.sessions import SessionResolver

logger = logging.getLogger(__name__)

INITIAL_DATA_ERROR = "Failed to fetch initial data"
HISTORY_ERROR = "Failed to fetch session history"
JOIN_RATE_LIMIT_ERROR = "Too many join requests, please wait"
DEFAULT_HISTORY_LIMIT = 10
MAX_HISTORY_LIMIT = 50


class RoomBroadcaster:
    """Emits events to every subscriber of the live-timing room."""

    def __init__(self, sio: socketio.AsyncServer, room: str = events.LIVE_TIMING_ROOM) -> None:
        self._sio = sio
        self.room = room

    async def broadcast(self, event: str, data: Any) -> None:
        await self._sio.emit(event, data, room=self.room)


def _history_limit(data: Any) -> int:
    raw = data.get("limit") if isinstance(data, dict) else None
    if isinstance(raw, bool) or not isinstance(raw, int) or raw <= 0:
        return DEFAULT_HISTORY_LIMIT
    return min(raw, MAX_HISTORY_LIMIT)


class RealtimeGateway:
    """Registers client event handlers on a Socket.IO server."""

    def __init__(
        self,
        sio: socketio.AsyncServer,
        relay: LiveRelay,
        resolver: SessionResolver,
        join_rate_limit: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.sio = sio
        self._relay = relay
        self._resolver = resolver
        self._join_rate_limit = join_rate_limit
        self._clock = clock
        self._last_join: dict[str, float] = {}

    def register(self) -> None:
        handlers = {
            "connect": self.on_connect,
            "disconnect": self.on_disconnect,
            events.JOIN_LIVE_TIMING: self.on_join_live_timing,
            events.LEAVE_LIVE_TIMING: self.on_leave_live_timing,
            events.PING: self.on_ping,
            events.REQUEST_SESSION_HISTORY: self.on_request_session_history,
        }
        for event, handler in handlers.items():
            self.sio.on(event, handler=handler)

    # ── Lifecycle ──────────────────────────────────────────────

    async def on_connect(self, sid: str, environ: dict, auth: Any = None) -> None:
        logger.info("Client connected: %s", sid)
        await self.sio.emit(events.CONNECTION_STATUS, {"connected": True, "sid": sid}, to=sid)

    async def on_disconnect(self, sid: str, *args: Any) -> None:
        self._last_join.pop(sid, None)
        logger.info("Client disconnected: %s", sid)

    # ── Live timing room ───────────────────────────────────────

    def _join_allowed(self, sid: str) -> bool:
        now = self._clock()
        last = self._last_join.get(sid)
        if last is not None and now - last < self._join_rate_limit:
            return False
        self._last_join[sid] = now
        return True

    async def on_join_live_timing(self, sid: str, data: Any = None) -> None:
        if not self._join_allowed(sid):
            logger.info("Join rate limit hit by %s", sid)
            await self.sio.emit(events.ERROR, {"message": JOIN_RATE_LIMIT_ERROR}, to=sid)
            return
        await self.sio.enter_room(sid, events.LIVE_TIMING_ROOM)
        logger.info("Client %s joined %s", sid, events.LIVE_TIMING_ROOM)
        await self.send_initial_data(sid)

    async def on_leave_live_timing(self, sid: str, data: Any = None) -> None:
        await self.sio.leave_room(sid, events.LIVE_TIMING_ROOM)
        logger.info("Client %s left %s", sid, events.LIVE_TIMING_ROOM)

    async def send_initial_data(self, sid: str) -> None:
        """Unicast current session info and a freshly built payload."""
        try:
            resolved, payload = await self._relay.build_snapshot()
        except Exception:
            logger.exception("Initial data for %s failed", sid)
            await self.sio.emit(events.ERROR, {"message": INITIAL_DATA_ERROR}, to=sid)
            return

        session = resolved.session.model_dump(mode="json") if resolved else None
        await self.sio.emit(
            events.SESSION_INFO,
            {"currentSession": session, "isLive": resolved.is_live if resolved else False},
            to=sid,
        )
        await self.sio.emit(events.LIVE_DATA_UPDATE, payload.to_wire(), to=sid)

    # ── Misc requests ──────────────────────────────────────────

    async def on_ping(self, sid: str, data: Any = None) -> None:
        server_time = utc_now().isoformat()
        if isinstance(data, dict):
            reply = {**data, "serverTimestamp": server_time}
        else:
            reply = {"data": data, "timestamp": server_time}
        await self.sio.emit(events.PONG, reply, to=sid)

    async def on_request_session_history(self, sid: str, data: Any = None) -> None:
        try:
            sessions = await self._resolver.recent_sessions(_history_limit(data))
        except Exception:
            logger.exception("Session history for %s failed", sid)
            await self.sio.emit(events.ERROR, {"message": HISTORY_ERROR}, to=sid)
            return
        await self.sio.emit(
            events.SESSION_HISTORY, [s.model_dump(mode="json") for s in sessions], to=sid,
        )
