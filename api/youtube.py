"""
YouTube video search.

Uses the YouTube Data API v3. The adapter is inert (returns no results)
unless YOUTUBE_API_KEY is set.

API: https://developers.google.com/youtube/v3/docs/search/list
"""

import html
import logging
import os
from typing import Any, Optional

import httpx

from api.base import SourceAdapter
from models.config import Source
from models.search import AuthContext

__all__ = ["YouTubeAdapter"]

API_URL = "https://www.googleapis.com/youtube/v3/search"

logger = logging.getLogger(__name__)


def _get_api_key() -> Optional[str]:
    """Get YouTube API key from environment."""
    return os.getenv("YOUTUBE_API_KEY")


class YouTubeAdapter(SourceAdapter):
    source = Source.YOUTUBE
    id_prefix = "youtube"
    name = "YouTube"
    description = "ServiceNow demos, webinars, Knowledge sessions and tutorials."
    home_url = "https://www.youtube.com/@servicenow"

    async def _search(self, query: str, auth: AuthContext) -> list[dict[str, Any]]:
        api_key = _get_api_key()
        if not api_key:
            logger.debug("YouTube skipped: YOUTUBE_API_KEY not set")
            return []

        params = {
            "part": "snippet",
            "type": "video",
            "maxResults": self.max_results,
            "q": f"ServiceNow {query}",
            "key": api_key,
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(API_URL, params=params)
            response.raise_for_status()
            data = response.json()

        results = []
        for item in data.get("items", []):
            video_id = (item.get("id") or {}).get("videoId")
            snippet = item.get("snippet") or {}
            if not video_id:
                continue
            results.append(
                {
                    # The API returns HTML-escaped titles
                    "title": html.unescape(snippet.get("title", "")),
                    "url": f"https://www.youtube.com/watch?v={video_id}",
                    "snippet": html.unescape(snippet.get("description", "")),
                }
            )
        return results
