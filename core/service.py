"""
Knowledge search service.

Bundles the aggregator, result cache and authentication state into one
explicitly constructed object. Build it once per process with
``build_service()`` and hand it to whatever needs it.
"""

import logging
from typing import Any, Optional, Sequence

from pydantic import ValidationError

from api import build_adapters
from core.aggregator import DEFAULT_ADAPTER_TIMEOUT, SearchAggregator
from core.auth import AuthState, LoginError, request_session_token
from core.reliability import (
    DEFAULT_COOLDOWN_SECONDS,
    DEFAULT_FAILURE_THRESHOLD,
    configure_breakers,
)
from models.search import LoginInput, SearchResult
from utils.cache import CACHE_TTL_SECONDS, ResultCache

__all__ = ["KnowledgeSearchService", "build_service"]

logger = logging.getLogger(__name__)


class KnowledgeSearchService:
    """Entry points for search, login and logout, plus UI-facing flags."""

    def __init__(
        self,
        adapters: Sequence,
        *,
        cache: Optional[ResultCache] = None,
        auth: Optional[AuthState] = None,
        adapter_timeout: Optional[float] = DEFAULT_ADAPTER_TIMEOUT,
        servicenow_config: Optional[dict[str, Any]] = None,
    ):
        self.cache = cache if cache is not None else ResultCache()
        self.auth = auth if auth is not None else AuthState()
        self.adapters = list(adapters)
        self.aggregator = SearchAggregator(
            self.adapters,
            self.cache,
            self.auth,
            adapter_timeout=adapter_timeout,
        )
        self.servicenow_config = servicenow_config or {}
        self.needs_login = False
        self._last_results: dict[str, SearchResult] = {}

    @property
    def is_authenticated(self) -> bool:
        return self.auth.is_authenticated

    async def search(self, query: str) -> list[SearchResult]:
        """Search all sources. See ``SearchAggregator.search``."""
        results = await self.aggregator.search(query)
        self._last_results = {result.id: result for result in results}
        return results

    async def login(self, username: str, password: str) -> bool:
        """
        Start an authenticated session.

        Returns:
            True on success. False for empty credentials (nothing is
            attempted) or when the identity provider rejects them.
        """
        try:
            credentials = LoginInput(username=username, password=password)
        except ValidationError:
            logger.warning("Login rejected: username and password are required")
            return False

        try:
            token = await request_session_token(
                credentials.username, credentials.password, self.servicenow_config
            )
        except LoginError as e:
            logger.warning(f"Login failed for {credentials.username}: {e}")
            return False

        self.auth.set_session(token)
        self.needs_login = False
        logger.info(f"Logged in as {credentials.username}")
        return True

    def logout(self) -> None:
        """End the session and drop every cached response."""
        self.auth.clear()
        self.cache.clear()
        self.needs_login = False

    def open_result(self, result_id: str) -> Optional[str]:
        """
        Resolve a result from the latest response to its link.

        Opening a teaser while logged out raises ``needs_login`` and
        returns None.

        Raises:
            KeyError: If the id is not part of the latest response
        """
        result = self._last_results[result_id]
        if result.is_teaser and not self.auth.is_authenticated:
            self.needs_login = True
            return None
        return result.url

    def clear_cache(self) -> int:
        return self.cache.clear()

    def sources(self) -> list[dict[str, Any]]:
        return [adapter.describe() for adapter in self.adapters]


def build_service(config: Optional[dict[str, Any]] = None) -> KnowledgeSearchService:
    """Create the service with real adapters from configuration."""
    config = config or {}
    reliability = config.get("reliability", {})
    configure_breakers(
        failure_threshold=reliability.get("failure_threshold", DEFAULT_FAILURE_THRESHOLD),
        cooldown=reliability.get("cooldown_seconds", DEFAULT_COOLDOWN_SECONDS),
    )
    return KnowledgeSearchService(
        build_adapters(config),
        cache=ResultCache(
            ttl_seconds=config.get("cache", {}).get("ttl_seconds", CACHE_TTL_SECONDS)
        ),
        adapter_timeout=config.get("search", {}).get(
            "adapter_timeout_seconds", DEFAULT_ADAPTER_TIMEOUT
        ),
        servicenow_config=config.get("servicenow", {}),
    )
