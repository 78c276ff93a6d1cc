"""
Search and source metrics.

``SourceMetrics`` keeps call counts, latency and error types per knowledge
source. ``SearchStats`` tracks cache efficiency and end-to-end search
latency. Both are process-wide and reported by the metrics tool.
"""

import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Optional

__all__ = [
    "SourceStats",
    "SourceMetrics",
    "SearchStats",
    "get_source_metrics",
    "get_search_stats",
    "format_metrics_report",
    "reset_metrics",
]

# ══════════════════════════════════════════════════════════════════════════════
# Per-Source Metrics
# ══════════════════════════════════════════════════════════════════════════════


@dataclass
class SourceStats:
    calls: int = 0
    failures: int = 0
    total_latency_ms: float = 0.0
    errors: Counter = field(default_factory=Counter)

    @property
    def successes(self) -> int:
        return self.calls - self.failures

    @property
    def success_rate(self) -> float:
        return (self.successes / self.calls) * 100 if self.calls else 0.0

    @property
    def avg_latency_ms(self) -> float:
        return self.total_latency_ms / self.successes if self.successes else 0.0


@dataclass
class SourceMetrics:
    """Adapter call outcomes, keyed by source name."""

    by_source: Dict[str, SourceStats] = field(default_factory=dict)

    def for_source(self, source: str) -> SourceStats:
        return self.by_source.setdefault(source, SourceStats())

    def record_success(self, source: str, latency_ms: float) -> None:
        stats = self.for_source(source)
        stats.calls += 1
        stats.total_latency_ms += latency_ms

    def record_failure(self, source: str, error_type: str) -> None:
        stats = self.for_source(source)
        stats.calls += 1
        stats.failures += 1
        stats.errors[error_type] += 1

    @property
    def total_calls(self) -> int:
        return sum(s.calls for s in self.by_source.values())

    @property
    def failed_calls(self) -> int:
        return sum(s.failures for s in self.by_source.values())

    @property
    def error_types(self) -> Dict[str, int]:
        merged: Counter = Counter()
        for stats in self.by_source.values():
            merged.update(stats.errors)
        return dict(merged)


# ══════════════════════════════════════════════════════════════════════════════
# Search Metrics
# ══════════════════════════════════════════════════════════════════════════════


@dataclass
class SearchStats:
    started_at: float = field(default_factory=time.time)
    cache_hits: int = 0
    cache_misses: int = 0
    searches: int = 0
    total_search_seconds: float = 0.0
    total_results: int = 0

    def record_cache_hit(self) -> None:
        self.cache_hits += 1

    def record_cache_miss(self) -> None:
        self.cache_misses += 1

    def record_search(self, duration_seconds: float, result_count: int) -> None:
        self.searches += 1
        self.total_search_seconds += duration_seconds
        self.total_results += result_count

    @property
    def cache_hit_rate(self) -> float:
        lookups = self.cache_hits + self.cache_misses
        return (self.cache_hits / lookups) * 100 if lookups else 0.0

    @property
    def avg_search_ms(self) -> float:
        if not self.searches:
            return 0.0
        return (self.total_search_seconds / self.searches) * 1000


_source_metrics = SourceMetrics()
_search_stats = SearchStats()


def get_source_metrics() -> SourceMetrics:
    return _source_metrics


def get_search_stats() -> SearchStats:
    return _search_stats


def reset_metrics() -> None:
    global _source_metrics, _search_stats
    _source_metrics = SourceMetrics()
    _search_stats = SearchStats()


def format_metrics_report(breakers: Optional[Dict[str, str]] = None) -> str:
    """
    Markdown report of search and per-source metrics.

    Args:
        breakers: Optional circuit state per source name, shown per row
    """
    search = _search_stats
    sources = _source_metrics
    breakers = breakers or {}

    lines = [
        "# Performance Metrics",
        "",
        "## Searches",
        f"- Uptime: {time.time() - search.started_at:.0f}s",
        f"- Total Searches: {search.searches}",
        f"- Avg Search Time: {search.avg_search_ms:.0f}ms",
        f"- Cache Hit Rate: {search.cache_hit_rate:.1f}%",
        f"- Results Served: {search.total_results}",
    ]

    names = sorted(set(sources.by_source) | set(breakers))
    if names:
        lines += [
            "",
            "## Sources",
            "",
            "| Source | Calls | Success | Avg Latency | Circuit |",
            "|---|---|---|---|---|",
        ]
        for name in names:
            stats = sources.by_source.get(name, SourceStats())
            lines.append(
                f"| {name} | {stats.calls} | {stats.success_rate:.0f}% "
                f"| {stats.avg_latency_ms:.0f}ms | {breakers.get(name, 'closed')} |"
            )

    errors = sources.error_types
    if errors:
        lines += ["", "## Errors"]
        for error, count in sorted(errors.items(), key=lambda x: -x[1]):
            lines.append(f"- {error}: {count}")

    return "\n".join(lines)
