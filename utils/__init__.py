"""
Utility functions for caching, configuration, rate limiting, and formatting.

All utilities are lightweight; none of them touch the network.
"""

from utils.cache import CACHE_TTL_SECONDS, ResultCache, get_cache_key
from utils.config import DEFAULT_CONFIG, load_config
from utils.formatting import SOURCE_LABELS, render_markdown, render_results
from utils.helpers import normalize_query, query_tokens, truncate
from utils.rate_limit import (
    RATE_LIMIT_MAX_CALLS,
    RATE_LIMIT_WINDOW,
    check_rate_limit,
    reset_rate_limits,
)

__all__ = [
    # Cache
    "ResultCache",
    "get_cache_key",
    "CACHE_TTL_SECONDS",
    # Config
    "DEFAULT_CONFIG",
    "load_config",
    # Rate limiting
    "check_rate_limit",
    "reset_rate_limits",
    "RATE_LIMIT_WINDOW",
    "RATE_LIMIT_MAX_CALLS",
    # Helpers
    "normalize_query",
    "query_tokens",
    "truncate",
    # Formatting
    "SOURCE_LABELS",
    "render_markdown",
    "render_results",
]
