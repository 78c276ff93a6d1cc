"""In-memory result cache for ServiceNow Knowledge Search."""

import logging
import time
from typing import Any, Callable, Dict, Optional

# Cache configuration
CACHE_TTL_SECONDS = 1800  # 30 minutes

logger = logging.getLogger(__name__)


def get_cache_key(query: str, authenticated: bool) -> str:
    """Build cache key from normalized query and auth flag."""
    return f"{query.strip().lower()}|{authenticated}"


class ResultCache:
    """
    Time-boxed mapping of cache key to result list.

    Expiry is checked lazily on read. Every clear() bumps ``generation``
    so callers can detect a purge that happened while they were fetching.
    """

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Dict[str, Any]] = {}
        self.generation = 0

    def get(self, key: str) -> Optional[list]:
        """Retrieve cached results if not expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry["timestamp"] < self.ttl_seconds:
            return entry["results"]
        del self._entries[key]
        return None

    def put(self, key: str, results: list) -> None:
        """Store results with the current timestamp."""
        self._entries[key] = {"results": results, "timestamp": self._clock()}

    def clear(self) -> int:
        """Drop every entry. Returns how many were removed."""
        removed = len(self._entries)
        self._entries = {}
        self.generation += 1
        logger.info(f"Cache cleared ({removed} entries)")
        return removed

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
