"""
Result deduplication.

Collapses results that share a title (case-insensitive, exact match).
The input order is the priority order: the first occurrence of a title is
kept, so curated entries placed ahead of adapter results always win.
"""

import logging
from typing import Sequence

from models.search import SearchResult

__all__ = ["deduplicate_results", "title_key"]

logger = logging.getLogger(__name__)


def title_key(title: str) -> str:
    """Normalize title for comparison."""
    return title.lower()


def deduplicate_results(results: Sequence[SearchResult]) -> list[SearchResult]:
    """
    Remove later results whose title matches an earlier one.

    Args:
        results: Results in priority order

    Returns:
        New list, first-seen order preserved
    """
    seen: set[str] = set()
    deduped: list[SearchResult] = []

    for result in results:
        key = title_key(result.title)
        if key in seen:
            continue
        seen.add(key)
        deduped.append(result)

    removed = len(results) - len(deduped)
    if removed > 0:
        logger.info(f"Deduplication: removed {removed} of {len(results)}")

    return deduped
