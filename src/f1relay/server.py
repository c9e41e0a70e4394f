"""Application wiring: builds the relay, the gateway and the ASGI app."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import socketio

from f1relay._http import AsyncTransport
from f1relay.cache import TTLCache
from f1relay.clients.results import HourlyRateLimit, ResultsClient
from f1relay.clients.telemetry import TelemetryClient
from f1relay.config import Settings, get_settings
from f1relay.gateway import RealtimeGateway, RoomBroadcaster
from f1relay.relay import LiveRelay
from f1relay.sessions import SessionResolver

logger = logging.getLogger(__name__)


@dataclass
class RelayApp:
    """Everything a running relay process owns."""

    settings: Settings
    sio: socketio.AsyncServer
    telemetry: TelemetryClient
    results: ResultsClient
    relay: LiveRelay
    gateway: RealtimeGateway
    asgi: socketio.ASGIApp | None = None

    async def startup(self) -> None:
        self.relay.start()

    async def shutdown(self) -> None:
        await self.relay.stop()
        await self.telemetry.close()
        await self.results.close()


def create_app(settings: Settings | None = None) -> RelayApp:
    settings = settings or get_settings()

    sio = socketio.AsyncServer(async_mode="asgi", cors_allowed_origins=settings.cors_origins)
    telemetry = TelemetryClient(
        AsyncTransport(base_url=settings.openf1_base_url, timeout=settings.request_timeout)
    )
    resolver = SessionResolver(telemetry, override_key=settings.session_key_override)
    results = ResultsClient(
        AsyncTransport(base_url=settings.results_base_url, timeout=settings.request_timeout),
        HourlyRateLimit(max_requests=settings.results_hourly_limit),
    )
    relay = LiveRelay(
        telemetry,
        resolver,
        RoomBroadcaster(sio),
        settings,
        driver_cache=TTLCache(settings.driver_cache_ttl),
        broadcast_cache=TTLCache(settings.broadcast_cache_ttl),
    )
    gateway = RealtimeGateway(sio, relay, resolver, join_rate_limit=settings.join_rate_limit)
    gateway.register()

    app = RelayApp(settings, sio, telemetry, results, relay, gateway)
    app.asgi = socketio.ASGIApp(sio, on_startup=app.startup, on_shutdown=app.shutdown)
    if settings.session_key_override is not None:
        logger.info("Relay pinned to session %s", settings.session_key_override)
    return app
