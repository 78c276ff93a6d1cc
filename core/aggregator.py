"""
Multi-source result aggregation.

Fans a query out to every source adapter concurrently, prepends curated
matches, removes duplicate titles and caches the combined list per
(query, auth flag).
"""

import asyncio
import logging
import time
from typing import Callable, Optional, Sequence

from core.auth import AuthState
from core.curated import search_curated
from core.dedup import deduplicate_results
from core.metrics import get_search_stats, get_source_metrics
from models.search import AuthContext, SearchResult
from utils.cache import ResultCache, get_cache_key
from utils.helpers import normalize_query

__all__ = ["AggregationError", "SearchAggregator", "DEFAULT_ADAPTER_TIMEOUT"]

DEFAULT_ADAPTER_TIMEOUT = 10.0
TIMEOUT_GRACE_SECONDS = 1.0

logger = logging.getLogger(__name__)


class AggregationError(Exception):
    """Fetched results could not be combined into a response."""


class SearchAggregator:
    """
    Orchestrates one search across all sources.

    Example:
        >>> aggregator = SearchAggregator(adapters, ResultCache(), AuthState())
        >>> results = await aggregator.search("ITSM best practices")
    """

    def __init__(
        self,
        adapters: Sequence,
        cache: ResultCache,
        auth: AuthState,
        *,
        curated: Callable[[str], list[SearchResult]] = search_curated,
        adapter_timeout: Optional[float] = DEFAULT_ADAPTER_TIMEOUT,
    ):
        self.adapters = list(adapters)
        self.cache = cache
        self.auth = auth
        self.curated = curated
        self.adapter_timeout = adapter_timeout

    async def search(self, query: str) -> list[SearchResult]:
        """
        Search every source, using the cache when possible.

        Args:
            query: Free-text query

        Returns:
            Curated matches first, then adapter results in adapter order,
            without duplicate titles. Empty for a blank query.

        Raises:
            AggregationError: If the fetched results cannot be merged
        """
        if not query or not query.strip():
            return []

        stats = get_search_stats()
        auth = self.auth.snapshot()
        cache_key = get_cache_key(query, auth.is_authenticated)

        cached = self.cache.get(cache_key)
        if cached is not None:
            stats.record_cache_hit()
            logger.info(f"Returning cached results for: {query}")
            return list(cached)

        stats.record_cache_miss()
        logger.info(f"Fetching fresh results for: {query}")

        start = time.time()
        generation = self.cache.generation
        normalized = normalize_query(query)

        batches = await asyncio.gather(
            *(self._run_adapter(adapter, normalized, auth) for adapter in self.adapters)
        )

        try:
            merged: list[SearchResult] = list(self.curated(query))
            for batch in batches:
                merged.extend(batch)
            results = deduplicate_results(merged)
        except Exception as e:
            logger.error(f"Error combining results for '{query}': {e}")
            raise AggregationError(
                "Failed to search ServiceNow knowledge sources"
            ) from e

        # A logout during the fan-out purged the cache; don't resurrect this response
        if self.cache.generation == generation:
            self.cache.put(cache_key, results)
        else:
            logger.info("Cache was cleared during search, skipping cache write")

        stats.record_search(time.time() - start, len(results))
        return list(results)

    async def _run_adapter(
        self, adapter, query: str, auth: AuthContext
    ) -> list[SearchResult]:
        source = adapter.source.value
        if self.adapter_timeout is None:
            backstop = None
        else:
            backstop = self.adapter_timeout + TIMEOUT_GRACE_SECONDS
        try:
            # The adapter enforces adapter_timeout itself so its breaker sees it
            results = await asyncio.wait_for(
                adapter.fetch(query, auth, self.adapter_timeout), timeout=backstop
            )
        except asyncio.TimeoutError:
            logger.warning(f"{source} ignored its {self.adapter_timeout}s timeout")
            get_source_metrics().record_failure(source, "TimeoutError")
            return []
        except Exception as e:
            # fetch() is fail-open; this only guards third-party adapters
            logger.error(f"{source} raised {type(e).__name__}: {e}")
            return []

        return list(results or [])
