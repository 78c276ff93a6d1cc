"""
Core of ServiceNow Knowledge Search.

    Categorizer        Keyword tagging by product, persona and use case
    Curated Results    Hand-authored entries that always lead the list
    Deduplication      First-seen wins on case-insensitive titles
    Aggregator         Concurrent fan-out, merge and cache
    Auth State         Session flag and token for gated sources
    Reliability        Per-source circuit breakers and transient retries
    Metrics            Cache hit rate, search latency, per-source stats

The service bundle lives in ``core.service``.
"""

from core.aggregator import AggregationError, SearchAggregator
from core.auth import AuthState, LoginError
from core.categorizer import categorize
from core.curated import CURATED_RESULTS, search_curated
from core.dedup import deduplicate_results
from core.metrics import (
    SearchStats,
    SourceMetrics,
    format_metrics_report,
    get_search_stats,
    get_source_metrics,
)
from core.reliability import (
    BreakerState,
    CircuitBreaker,
    breaker_for,
    breaker_states,
    configure_breakers,
    retry_transient,
)

__all__ = [
    # Aggregation
    "AggregationError",
    "SearchAggregator",
    "CURATED_RESULTS",
    "search_curated",
    "deduplicate_results",
    "categorize",
    # Auth
    "AuthState",
    "LoginError",
    # Reliability
    "BreakerState",
    "CircuitBreaker",
    "breaker_for",
    "breaker_states",
    "configure_breakers",
    "retry_transient",
    # Metrics
    "SearchStats",
    "SourceMetrics",
    "get_search_stats",
    "get_source_metrics",
    "format_metrics_report",
]
