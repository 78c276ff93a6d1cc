"""
Shared source adapter machinery.

Every knowledge source follows the same contract:

    await adapter.fetch(query, auth, timeout) -> list[SearchResult]

Subclasses only implement ``_search`` and return raw dicts with at least
title, url and snippet. The base class handles fixture mode, retries,
the per-source circuit breaker, metrics, categorization and conversion
into ``SearchResult`` records. ``fetch`` never raises.
"""

import asyncio
import logging
import time
import urllib.parse
from typing import Any, Optional

import httpx
from bs4 import BeautifulSoup

from api.fixtures import get_fixture_items
from core.categorizer import categorize
from core.metrics import get_source_metrics
from core.reliability import CircuitBreaker, breaker_for, retry_transient
from models.config import Source
from models.search import AuthContext, SearchResult
from utils.helpers import truncate

__all__ = [
    "SourceAdapter",
    "HtmlSearchAdapter",
    "parse_html_results",
    "API_TIMEOUT",
    "USER_AGENT",
]

# ══════════════════════════════════════════════════════════════════════════════
# Configuration
# ══════════════════════════════════════════════════════════════════════════════

API_TIMEOUT = 15.0
SNIPPET_LIMIT = 500
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)

# Connection-level problems are worth a second attempt; HTTP status errors are not
RETRYABLE_ERRORS: tuple[type[Exception], ...] = (httpx.TransportError,)

logger = logging.getLogger(__name__)

# ══════════════════════════════════════════════════════════════════════════════
# Base Adapter
# ══════════════════════════════════════════════════════════════════════════════


class SourceAdapter:
    """Base class for one knowledge source."""

    source: Source
    id_prefix: str = "result"
    name: str = ""
    description: str = ""
    home_url: str = ""
    requires_login: bool = False
    developer_hint: bool = False

    def __init__(
        self,
        *,
        max_results: int = 5,
        use_fixtures: bool = False,
        timeout: float = API_TIMEOUT,
        max_retries: int = 1,
        circuit_breaker: Optional[CircuitBreaker] = None,
    ):
        self.max_results = max_results
        self.use_fixtures = use_fixtures
        self.timeout = timeout
        self.max_retries = max_retries
        self.circuit_breaker = circuit_breaker or breaker_for(
            self.source.value
        )

    async def fetch(
        self, query: str, auth: AuthContext, timeout: Optional[float] = None
    ) -> list[SearchResult]:
        """
        Search this source. Failures degrade to an empty list.

        ``timeout`` bounds each attempt inside the circuit breaker, so a
        source that keeps hanging trips its breaker like any other failure.
        """
        try:
            raw = await self.circuit_breaker.guard(
                retry_transient,
                self._timed_search,
                query,
                auth,
                timeout,
                retries=0 if self.use_fixtures else self.max_retries,
                retry_on=RETRYABLE_ERRORS,
            )
            return self._build_results(raw or [])
        except Exception as e:
            logger.warning(f"{self.source.value} search failed: {e}")
            return []

    async def _timed_search(
        self, query: str, auth: AuthContext, timeout: Optional[float] = None
    ) -> list[dict[str, Any]]:
        metrics = get_source_metrics()
        start = time.time()
        try:
            if self.use_fixtures:
                raw = get_fixture_items(self.source, query)
            elif timeout is None:
                raw = await self._search(query, auth)
            else:
                raw = await asyncio.wait_for(self._search(query, auth), timeout)
        except Exception as e:
            metrics.record_failure(self.source.value, type(e).__name__)
            raise
        metrics.record_success(self.source.value, (time.time() - start) * 1000)
        return raw

    async def _search(self, query: str, auth: AuthContext) -> list[dict[str, Any]]:
        raise NotImplementedError

    def _build_results(self, raw: list[dict[str, Any]]) -> list[SearchResult]:
        results: list[SearchResult] = []
        for item in raw:
            title = (item.get("title") or "").strip()
            url = (item.get("url") or "").strip()
            if not title or not url:
                continue
            results.append(
                self.make_result(
                    index=len(results),
                    title=title,
                    snippet=item.get("snippet") or "",
                    url=url,
                )
            )
            if len(results) >= self.max_results:
                break
        return results

    def make_result(
        self,
        *,
        index: int,
        title: str,
        snippet: str,
        url: str,
        is_teaser: bool = False,
    ) -> SearchResult:
        snippet = truncate(snippet, SNIPPET_LIMIT)
        return SearchResult(
            id=f"{self.id_prefix}-{index}",
            title=title,
            snippet=snippet,
            url=url,
            source=self.source,
            categories=tuple(categorize(title, snippet, self.developer_hint)),
            is_teaser=is_teaser,
        )

    def describe(self) -> dict[str, Any]:
        """Directory entry for this source."""
        return {
            "source": self.source.value,
            "name": self.name,
            "description": self.description,
            "url": self.home_url,
            "requires_login": self.requires_login,
        }


# ══════════════════════════════════════════════════════════════════════════════
# HTML Search Pages
# ══════════════════════════════════════════════════════════════════════════════


def parse_html_results(
    html: str,
    *,
    item_selector: str,
    link_selector: str,
    snippet_selector: Optional[str],
    base_url: str,
) -> list[dict[str, Any]]:
    """
    Extract result dicts from a search results page.

    Args:
        html: Raw page HTML
        item_selector: CSS selector for each result container
        link_selector: CSS selector (inside the container) for the title link
        snippet_selector: CSS selector (inside the container) for the summary
        base_url: Used to absolutize relative links

    Returns:
        List of dicts with title, url, snippet
    """
    soup = BeautifulSoup(html, "html.parser")
    items = []
    for node in soup.select(item_selector):
        link = node.select_one(link_selector)
        if link is None:
            continue
        title = link.get_text(" ", strip=True)
        href = link.get("href") or ""
        if not title or not href:
            continue
        snippet_node = node.select_one(snippet_selector) if snippet_selector else None
        items.append(
            {
                "title": title,
                "url": urllib.parse.urljoin(base_url, href),
                "snippet": snippet_node.get_text(" ", strip=True)
                if snippet_node
                else "",
            }
        )
    return items


class HtmlSearchAdapter(SourceAdapter):
    """Adapter for sources that only expose an HTML search page."""

    search_url: str = ""
    query_param: str = "q"
    item_selector: str = ""
    link_selector: str = "a"
    snippet_selector: Optional[str] = None

    def _headers(self, auth: AuthContext) -> dict[str, str]:
        return {
            "User-Agent": USER_AGENT,
            "Accept": "text/html,application/xhtml+xml",
        }

    async def _search(self, query: str, auth: AuthContext) -> list[dict[str, Any]]:
        async with httpx.AsyncClient(
            timeout=self.timeout, follow_redirects=True
        ) as client:
            response = await client.get(
                self.search_url,
                params={self.query_param: query},
                headers=self._headers(auth),
            )
            response.raise_for_status()
            html = response.text

        return parse_html_results(
            html,
            item_selector=self.item_selector,
            link_selector=self.link_selector,
            snippet_selector=self.snippet_selector,
            base_url=self.home_url or self.search_url,
        )
