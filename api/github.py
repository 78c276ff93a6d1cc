"""
GitHub repository search.

Finds open-source ServiceNow integrations, SDKs and sample apps through
the GitHub search API. Set GITHUB_TOKEN for higher rate limits.
"""

import logging
import os
from typing import Any

import httpx

from api.base import SourceAdapter
from models.config import Source
from models.search import AuthContext

__all__ = ["GitHubAdapter"]

API_URL = "https://api.github.com/search/repositories"

logger = logging.getLogger(__name__)

STOPWORDS = {
    "the",
    "a",
    "an",
    "and",
    "or",
    "in",
    "on",
    "to",
    "for",
    "of",
    "with",
    "how",
    "what",
    "best",
    "practices",
    "servicenow",
}


def _build_github_query(query: str, max_length: int = 256) -> str:
    """
    Reduce a free-text query to keywords plus the ServiceNow qualifier.

    GitHub rejects long queries with 422, and filler words only dilute
    repository matches.
    """
    suffix = "servicenow"
    remaining = max_length - len(suffix) - 1

    keywords = []
    for word in query.split():
        clean = word.strip().lower()
        if clean and clean not in STOPWORDS and (len(clean) > 2 or clean.isdigit()):
            keywords.append(word.strip())

    simplified = ""
    for word in keywords[:8]:
        candidate = f"{simplified} {word}".strip()
        if len(candidate) > remaining:
            break
        simplified = candidate

    return f"{simplified} {suffix}".strip()


class GitHubAdapter(SourceAdapter):
    source = Source.GITHUB
    id_prefix = "github"
    name = "GitHub"
    description = "Open-source ServiceNow SDKs, integrations and sample applications."
    home_url = "https://github.com/topics/servicenow"
    developer_hint = True

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github.v3+json"}
        token = os.getenv("GITHUB_TOKEN")
        if token:
            headers["Authorization"] = f"token {token}"
        return headers

    async def _search(self, query: str, auth: AuthContext) -> list[dict[str, Any]]:
        params = {
            "q": _build_github_query(query),
            "sort": "stars",
            "order": "desc",
            "per_page": self.max_results,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    API_URL, params=params, headers=self._headers()
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status in (403, 429):
                logger.warning("GitHub: Rate limit exceeded")
                return []
            if status == 422:
                logger.error(f"GitHub query rejected (422): {query[:100]}")
                return []
            raise

        return [
            {
                "title": item.get("name") or item.get("full_name") or "",
                "url": item.get("html_url", ""),
                "snippet": item.get("description") or "No description available",
            }
            for item in data.get("items", [])
        ]
