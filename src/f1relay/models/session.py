"""Session records and their UTC-normalized time window."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class Session(BaseModel):
    """F1 session as reported by the telemetry API."""

    model_config = ConfigDict(frozen=True)

    circuit_key: int | None = None
    circuit_short_name: str | None = None
    country_code: str | None = None
    country_name: str | None = None
    date_end: datetime | None = None
    date_start: datetime | None = None
    gmt_offset: str | None = None
    location: str | None = None
    meeting_key: int | None = None
    session_key: int | None = None
    session_name: str | None = None
    session_type: str | None = None
    year: int | None = None

    @property
    def starts_at(self) -> datetime | None:
        """Start timestamp, naive values read as UTC."""
        return _as_utc(self.date_start)

    @property
    def ends_at(self) -> datetime | None:
        """End timestamp, naive values read as UTC."""
        return _as_utc(self.date_end)
