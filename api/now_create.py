"""
Now Create search (login required).

Now Create hosts implementation methodology, templates and playbooks
that are only visible to signed-in customers and partners. Without a
session the adapter returns a single teaser result pointing the user at
the login flow; with one it performs the full search using the session
token as a bearer credential.
"""

import logging
from typing import Any, Optional

import httpx

from api.base import HtmlSearchAdapter
from models.config import Source
from models.search import AuthContext, SearchResult
from utils.helpers import truncate

__all__ = ["NowCreateAdapter", "TEASER_SNIPPET_LIMIT"]

TEASER_SNIPPET_LIMIT = 140

logger = logging.getLogger(__name__)


class NowCreateAdapter(HtmlSearchAdapter):
    source = Source.NOW_CREATE
    id_prefix = "nowcreate"
    name = "Now Create"
    description = (
        "Implementation methodology, templates and expert playbooks. "
        "Requires a ServiceNow login."
    )
    home_url = "https://nowcreate.service-now.com"
    requires_login = True

    search_url = "https://nowcreate.service-now.com/search"
    item_selector = ".search-result, .resource-card"
    link_selector = "a.resource-title, h3 a, a"
    snippet_selector = ".resource-summary, p"

    async def fetch(
        self, query: str, auth: AuthContext, timeout: Optional[float] = None
    ) -> list[SearchResult]:
        if not auth.is_authenticated:
            logger.debug("Not logged in, returning Now Create teaser")
            return [self.teaser(query)]
        return await super().fetch(query, auth, timeout)

    def teaser(self, query: str) -> SearchResult:
        """Single truncated result advertising the gated content."""
        snippet = truncate(
            f"Now Create has implementation guides, templates and playbooks "
            f"related to '{query.strip()}'. Log in with your ServiceNow account "
            f"to view the full resources.",
            TEASER_SNIPPET_LIMIT,
        )
        return self.make_result(
            index=0,
            title=f"Now Create resources for '{query.strip()}'",
            snippet=snippet,
            url=self.home_url,
            is_teaser=True,
        )

    def _headers(self, auth: AuthContext) -> dict[str, str]:
        headers = super()._headers(auth)
        if auth.token:
            headers["Authorization"] = f"Bearer {auth.token}"
        return headers

    async def _search(self, query: str, auth: AuthContext) -> list[dict[str, Any]]:
        try:
            return await super()._search(query, auth)
        except httpx.HTTPStatusError as e:
            if e.response.status_code in (401, 403):
                logger.warning(
                    f"Now Create rejected the session ({e.response.status_code}); "
                    "log in again to refresh it"
                )
                return []
            raise
