"""
Keyword categorization for search results.

Tags each result along three axes using plain substring matching:

    Product     cumulative, every matching rule contributes a tag
    Persona     first matching rule wins, always exactly one tag
    UseCase     first matching rule wins, optional
"""

from models.config import CategoryKind
from models.search import CategoryTag

__all__ = [
    "categorize",
    "PRODUCT_RULES",
    "PERSONA_RULES",
    "USE_CASE_RULES",
    "FALLBACK_PRODUCT",
    "FALLBACK_PERSONA",
    "DEVELOPER_PERSONA",
]

# ══════════════════════════════════════════════════════════════════════════════
# Rule Tables
# ══════════════════════════════════════════════════════════════════════════════

PRODUCT_RULES: list[tuple[tuple[str, ...], str]] = [
    (("itsm", "incident", "problem", "change"), "ITSM"),
    (("hrsd", "hr service", "human resources"), "HRSD"),
    (("csm", "customer service"), "CSM"),
    (("itom", "operations management"), "ITOM"),
    (("cmdb", "configuration management"), "CMDB"),
    (("flow", "integration hub"), "IntegrationHub"),
    (("security", "iam", "governance"), "Security"),
]

PERSONA_RULES: list[tuple[tuple[str, ...], str]] = [
    (("script", "code", "api", "developer"), "Developer"),
    (("admin", "configure"), "Administrator"),
    (("process", "workflow"), "Process Owner"),
]

USE_CASE_RULES: list[tuple[tuple[str, ...], str]] = [
    (("integration", "connect"), "Integration"),
    (("report", "dashboard"), "Reporting"),
    (("workflow", "automation"), "Workflow Automation"),
]

FALLBACK_PRODUCT = "Platform"
FALLBACK_PERSONA = "All"
DEVELOPER_PERSONA = "Developer"

# ══════════════════════════════════════════════════════════════════════════════
# Categorization
# ══════════════════════════════════════════════════════════════════════════════


def _matches(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def _first_match(text: str, rules: list[tuple[tuple[str, ...], str]]) -> str | None:
    for keywords, name in rules:
        if _matches(text, keywords):
            return name
    return None


def categorize(
    title: str, snippet: str, is_developer: bool = False
) -> list[CategoryTag]:
    """
    Classify a result by keyword matching over its title and snippet.

    Args:
        title: Result title
        snippet: Result snippet
        is_developer: Source is developer-oriented, forces the Developer persona

    Returns:
        Ordered tags: one or more Product, exactly one Persona,
        and at most one UseCase. Never empty.

    Example:
        >>> [t.name for t in categorize("Incident dashboard", "Configure reports")]
        ['ITSM', 'Administrator', 'Reporting']
    """
    text = f"{title or ''} {snippet or ''}".lower()
    tags: list[CategoryTag] = []

    for keywords, name in PRODUCT_RULES:
        if _matches(text, keywords):
            tags.append(CategoryTag(kind=CategoryKind.PRODUCT, name=name))

    if not tags:
        tags.append(CategoryTag(kind=CategoryKind.PRODUCT, name=FALLBACK_PRODUCT))

    if is_developer:
        persona = DEVELOPER_PERSONA
    else:
        persona = _first_match(text, PERSONA_RULES) or FALLBACK_PERSONA
    tags.append(CategoryTag(kind=CategoryKind.PERSONA, name=persona))

    use_case = _first_match(text, USE_CASE_RULES)
    if use_case:
        tags.append(CategoryTag(kind=CategoryKind.USE_CASE, name=use_case))

    return tags
