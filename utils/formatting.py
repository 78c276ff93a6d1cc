"""Render search results for tool responses."""

import json
from typing import Sequence

from models.config import CategoryKind, ResponseFormat, Source
from models.search import SearchResult

SOURCE_LABELS: dict[Source, str] = {
    Source.DOCUMENTATION: "Documentation",
    Source.COMMUNITY: "Community",
    Source.DEVSITE: "Developer",
    Source.BLOG: "Blog",
    Source.GITHUB: "GitHub",
    Source.YOUTUBE: "YouTube",
    Source.NOW_CREATE: "Now Create",
}

CATEGORY_ICONS: dict[CategoryKind, str] = {
    CategoryKind.PRODUCT: "🧩",
    CategoryKind.PERSONA: "👤",
    CategoryKind.USE_CASE: "🔄",
    CategoryKind.INDUSTRY: "🏢",
}


def results_to_dicts(results: Sequence[SearchResult]) -> list[dict]:
    return [result.model_dump(mode="json") for result in results]


def render_markdown(query: str, results: Sequence[SearchResult]) -> str:
    """Render results as a markdown list, curated entries marked as verified."""
    if not results:
        return f"# Results for '{query}'\n\nNo results found."

    lines = [f"# Results for '{query}'", "", f"{len(results)} results", ""]
    for idx, result in enumerate(results, 1):
        badge = " ✅ Verified" if result.is_curated else ""
        label = SOURCE_LABELS.get(result.source, result.source.value)
        lines.append(f"## {idx}. {result.title}{badge}")
        lines.append(f"*{label}* · id `{result.id}`")
        if result.snippet:
            lines.append("")
            lines.append(result.snippet)
        tags = " ".join(
            f"{CATEGORY_ICONS.get(tag.kind, '•')} {tag.name}"
            for tag in result.categories
        )
        if tags:
            lines.append("")
            lines.append(tags)
        if result.is_teaser:
            lines.append("")
            lines.append("🔒 Login required to view this content.")
        else:
            lines.append("")
            lines.append(f"[Open]({result.url})")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def render_results(
    query: str,
    results: Sequence[SearchResult],
    response_format: ResponseFormat,
    needs_login: bool = False,
) -> str:
    if response_format == ResponseFormat.JSON:
        return json.dumps(
            {
                "query": query,
                "total": len(results),
                "needs_login": needs_login,
                "results": results_to_dicts(results),
            },
            indent=2,
        )
    return render_markdown(query, results)
