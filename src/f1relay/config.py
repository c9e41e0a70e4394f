"""Relay settings via pydantic-settings."""

from __future__ import annotations

import functools
import json

from pydantic_settings import BaseSettings, SettingsConfigDict

from f1relay._http import OPENF1_BASE_URL, RESULTS_BASE_URL


def _parse_cors_origins(raw: str) -> list[str]:
    """Parse a CORS origins string given as a JSON array or comma-separated."""
    try:
        parsed = json.loads(raw)
        if isinstance(parsed, list):
            return [str(x) for x in parsed]
    except ValueError:
        pass
    stripped = raw.strip("[] ")
    return [s.strip().strip('"').strip("'") for s in stripped.split(",") if s.strip()]


class Settings(BaseSettings):
    """Live relay configuration.

    Values are read from ``F1RELAY_*`` environment variables, falling back to
    a ``.env`` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="F1RELAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Upstream APIs
    openf1_base_url: str = OPENF1_BASE_URL
    results_base_url: str = RESULTS_BASE_URL
    request_timeout: float = 10.0
    results_hourly_limit: int = 200

    # Relay cadence and caches (seconds)
    poll_interval: float = 10.0
    race_feed_limit: int = 100
    driver_cache_ttl: float = 30.0
    broadcast_cache_ttl: float = 300.0

    # Pins the relay to one session; pinned sessions are never live
    session_key_override: int | None = None

    # Gateway
    join_rate_limit: float = 5.0
    broadcast_errors: bool = True
    cors_origins_raw: str = '["http://localhost:5173"]'

    # Server
    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"
    api_log_file: str | None = None

    @property
    def cors_origins(self) -> list[str]:
        return _parse_cors_origins(self.cors_origins_raw)


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
