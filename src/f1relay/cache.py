"""Time-boxed key/value cache with lazy eviction."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Final


class _Miss:
    """Sentinel type for a cache miss."""

    _instance: _Miss | None = None

    def __new__(cls) -> _Miss:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISS"

    def __bool__(self) -> bool:
        return False


MISS: Final = _Miss()


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    stored_at: float


class TTLCache:
    """Key/value store whose entries expire ``ttl`` seconds after being set.

    Expired entries are only evicted when that key is read with ``get`` or
    ``has``; there is no background sweep. ``get`` returns ``MISS`` rather
    than ``None`` so a cached falsy value can be told apart from no value.
    """

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def _fresh(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at > self.ttl:
            del self._entries[key]
            return None
        return entry

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = CacheEntry(value, self._clock())

    def get(self, key: str, default: Any = MISS) -> Any:
        entry = self._fresh(key)
        return default if entry is None else entry.value

    def has(self, key: str) -> bool:
        return self._fresh(key) is not None

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()
