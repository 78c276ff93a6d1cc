"""
ServiceNow knowledge source adapters.

Every adapter follows the same contract:

    await adapter.fetch(query: str, auth: AuthContext, timeout=None) -> list[SearchResult]

``fetch`` never raises: empty searches, network errors and parse errors
all come back as an empty list.

Available Sources (in aggregation order):
─────────────────────────────────────────────────────────────────────────────
    documentation    docs.servicenow.com (HTML)
    community        ServiceNow Community forums (HTML)
    devsite          developer.servicenow.com (HTML)
    blog             ServiceNow blog (HTML)
    github           GitHub repository search (JSON API)
    youtube          YouTube Data API v3 (JSON, needs key)
    nowcreate        Now Create (HTML, login required; teaser otherwise)

Configuration:
─────────────────────────────────────────────────────────────────────────────
Set API keys in environment variables or .env file:

    GITHUB_TOKEN          https://github.com/settings/tokens (optional)
    YOUTUBE_API_KEY       https://console.cloud.google.com (enables YouTube)
    KS_USE_FIXTURES=1     Serve deterministic fixture data, no network
"""

from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()

from api.base import HtmlSearchAdapter, SourceAdapter, parse_html_results
from api.blog import BlogAdapter
from api.community import CommunityAdapter
from api.devsite import DevSiteAdapter
from api.documentation import DocumentationAdapter
from api.github import GitHubAdapter
from api.now_create import NowCreateAdapter
from api.youtube import YouTubeAdapter

# ══════════════════════════════════════════════════════════════════════════════
# Registry
# ══════════════════════════════════════════════════════════════════════════════

# Declaration order is the merge order of the aggregator
ADAPTER_CLASSES: list[type[SourceAdapter]] = [
    DocumentationAdapter,
    CommunityAdapter,
    DevSiteAdapter,
    BlogAdapter,
    GitHubAdapter,
    YouTubeAdapter,
    NowCreateAdapter,
]


def build_adapters(config: Optional[dict[str, Any]] = None) -> list[SourceAdapter]:
    """Instantiate every enabled adapter from configuration."""
    config = config or {}
    source_config = config.get("sources", {})
    search_config = config.get("search", {})

    adapters = []
    for adapter_cls in ADAPTER_CLASSES:
        if not source_config.get(adapter_cls.source.value, {}).get("enabled", True):
            continue
        adapters.append(
            adapter_cls(
                max_results=search_config.get("max_results_per_source", 5),
                use_fixtures=search_config.get("use_fixtures", False),
            )
        )
    return adapters


# ══════════════════════════════════════════════════════════════════════════════
# Public API
# ══════════════════════════════════════════════════════════════════════════════

__all__ = [
    # Base
    "SourceAdapter",
    "HtmlSearchAdapter",
    "parse_html_results",
    # Adapters
    "DocumentationAdapter",
    "CommunityAdapter",
    "DevSiteAdapter",
    "BlogAdapter",
    "GitHubAdapter",
    "YouTubeAdapter",
    "NowCreateAdapter",
    # Registry
    "ADAPTER_CLASSES",
    "build_adapters",
]
