"""In-process TTL cache with lazy expiration."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 600.0  # 10 minutes


@dataclass(frozen=True)
class CacheEntry:
    data: Any
    inserted_at: float


class TTLCache:
    """Keyed store whose entries expire ttl_seconds after insertion.

    Expired entries are only removed when read. There is no size bound; the
    key space is the closed set of city codes.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        # Exactly ttl_seconds old is still fresh (>ttl is stale)
        if self._clock() - entry.inserted_at > self.ttl_seconds:
            logger.debug("Cache entry %s expired, evicting", key)
            del self._entries[key]
            return None
        return entry.data

    def set(self, key: str, data: Any) -> None:
        self._entries[key] = CacheEntry(data=data, inserted_at=self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def weather_cache_key(city_code: str) -> str:
    return f"weather_{city_code}"
