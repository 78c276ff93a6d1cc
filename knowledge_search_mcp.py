#!/usr/bin/env python3
"""
ServiceNow Knowledge Search MCP Server

An MCP server that answers ServiceNow questions by searching the product
documentation, community forums, developer portal, blog, GitHub, YouTube
and the login-gated Now Create site in parallel.

Features:
- Parallel multi-source search with per-source timeouts and circuit breakers
- Curated (verified) results that always lead the list
- Keyword categorization by product, persona and use case
- 30 minute in-memory cache keyed by query and login state
- Simulated login that unlocks the gated Now Create source
"""

import json
import logging
import sys

from mcp.server.fastmcp import FastMCP

from core import AggregationError, breaker_states, format_metrics_report
from core.service import build_service
from models import LoginInput, SearchInput
from utils import check_rate_limit, load_config, render_results

# Set up logging
logging.getLogger().setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

CONFIG = load_config()

# Initialize MCP server
mcp = FastMCP("servicenow_knowledge_search")

# One service per process
service = build_service(CONFIG)

RATE_LIMIT = CONFIG.get("rate_limit", {})


def _rate_limited(tool_name: str) -> bool:
    return not check_rate_limit(
        tool_name,
        window=RATE_LIMIT.get("window_seconds", 60),
        max_calls=RATE_LIMIT.get("max_calls", 30),
    )


# ============================================================================
# Search
# ============================================================================


@mcp.tool(
    name="servicenow_search",
    annotations={
        "title": "Search ServiceNow Knowledge Sources",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def servicenow_search(params: SearchInput) -> str:
    """
    Search ServiceNow documentation, community, developer site, blog,
    GitHub, YouTube and Now Create in one call.

    Verified results come first. Each result carries category tags
    (product, persona, use case). Now Create content needs a login:
    without one a single teaser is returned instead.

    Args:
        params: SearchInput with query and response_format

    Returns:
        Markdown (default) or JSON string with the merged result list.
    """
    if _rate_limited("servicenow_search"):
        return json.dumps(
            {"error": "Rate limit exceeded. Please wait and try again."}, indent=2
        )

    try:
        results = await service.search(params.query)
    except AggregationError as e:
        logger.error(f"Search failed: {e}")
        return json.dumps({"error": "Search failed. Please try again."}, indent=2)

    return render_results(
        params.query, results, params.response_format, service.needs_login
    )


@mcp.tool(
    name="open_result",
    annotations={
        "title": "Open Search Result",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def open_result(result_id: str) -> str:
    """
    Resolve a result id from the latest search to its link.

    Opening a login-gated teaser while logged out returns needs_login
    instead of a link.
    """
    try:
        url = service.open_result(result_id)
    except KeyError:
        return json.dumps(
            {"error": f"Unknown result id '{result_id}'. Run a search first."},
            indent=2,
        )

    if url is None:
        return json.dumps(
            {
                "needs_login": True,
                "message": "This content requires a ServiceNow login. "
                "Use servicenow_login, then search again.",
            },
            indent=2,
        )
    return json.dumps({"needs_login": False, "url": url}, indent=2)


# ============================================================================
# Authentication
# ============================================================================


@mcp.tool(
    name="servicenow_login",
    annotations={
        "title": "Log In to ServiceNow",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def servicenow_login(params: LoginInput) -> str:
    """Log in to unlock the gated Now Create source."""
    if await service.login(params.username, params.password):
        return json.dumps(
            {"success": True, "message": "Logged in successfully"}, indent=2
        )
    return json.dumps(
        {"success": False, "message": "Login failed. Please check your credentials."},
        indent=2,
    )


@mcp.tool(
    name="servicenow_logout",
    annotations={
        "title": "Log Out of ServiceNow",
        "readOnlyHint": False,
        "destructiveHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def servicenow_logout() -> str:
    """Log out and clear every cached search response."""
    service.logout()
    return json.dumps({"success": True, "message": "Logged out"}, indent=2)


@mcp.tool(
    name="get_auth_status",
    annotations={
        "title": "Get Login Status",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def get_auth_status() -> str:
    """Report whether a session is active and whether a login prompt is due."""
    return json.dumps(
        {
            "is_authenticated": service.is_authenticated,
            "needs_login": service.needs_login,
        },
        indent=2,
    )


# ============================================================================
# Directory & Maintenance
# ============================================================================


@mcp.tool(
    name="list_sources",
    annotations={
        "title": "List Knowledge Sources",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def list_sources() -> str:
    """Directory of every source searched, flagging those that need a login."""
    return json.dumps({"sources": service.sources()}, indent=2)


@mcp.tool(
    name="get_performance_metrics",
    annotations={
        "title": "Get Performance Metrics",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def get_performance_metrics() -> str:
    """Cache hit rate, search latency and per-source reliability."""
    return format_metrics_report(breaker_states())


@mcp.tool(
    name="clear_cache",
    annotations={
        "title": "Clear Search Cache",
        "readOnlyHint": False,
        "destructiveHint": True,
        "idempotentHint": False,
        "openWorldHint": False,
    },
)
async def clear_cache() -> str:
    """Clear cached search results so the next search fetches fresh data."""
    removed = service.clear_cache()
    if removed:
        return f"✓ Cache cleared ({removed} entries). Next searches will fetch fresh results."
    return "ℹ️ Cache was already empty."


def validate_environment():
    """Report optional configuration on startup."""
    print("\nValidating environment...", file=sys.stderr)

    if CONFIG["search"].get("use_fixtures"):
        print("Fixture mode: serving deterministic data, no live sources", file=sys.stderr)

    enabled = [s["name"] for s in service.sources()]
    print(f"Sources: {', '.join(enabled)}", file=sys.stderr)

    if CONFIG["servicenow"].get("instance_url"):
        print(f"OAuth login against {CONFIG['servicenow']['instance_url']}", file=sys.stderr)
    else:
        print("Simulated login (no SERVICENOW_INSTANCE_URL configured)", file=sys.stderr)

    print("Ready\n", file=sys.stderr)


# ============================================================================
# Main Entry Point
# ============================================================================


def main():
    validate_environment()
    mcp.run()


if __name__ == "__main__":
    main()
