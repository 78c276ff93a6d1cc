"""
Curated (verified) results.

Hand-authored, high-confidence entries that bypass live fetching. They are
matched locally by substring and always lead the final result list.
"""

from models.config import CategoryKind, Source
from models.search import CategoryTag, SearchResult

__all__ = ["CURATED_RESULTS", "search_curated"]


def _tags(product: str, persona: str, use_case: str) -> tuple[CategoryTag, ...]:
    return (
        CategoryTag(kind=CategoryKind.PRODUCT, name=product),
        CategoryTag(kind=CategoryKind.PERSONA, name=persona),
        CategoryTag(kind=CategoryKind.USE_CASE, name=use_case),
    )


CURATED_RESULTS: tuple[SearchResult, ...] = (
    SearchResult(
        id="curated-1",
        title="Integrating ServiceNow with Azure AD",
        snippet="Step-by-step guide to set up Single Sign-On between ServiceNow and "
        "Azure Active Directory. Learn about SAML configuration and user mapping.",
        url="https://docs.servicenow.com/bundle/platform-security/page/integrate/single-sign-on/azure-ad-sso.html",
        source=Source.DOCUMENTATION,
        categories=_tags("Platform", "Administrator", "Identity Integration"),
        is_curated=True,
    ),
    SearchResult(
        id="curated-2",
        title="ServiceNow ITSM Best Practices",
        snippet="Optimize your ITSM implementation with proven best practices for "
        "incident management, problem management, and change management. "
        "Includes KPI recommendations.",
        url="https://www.servicenow.com/products/itsm/itsm-best-practices.html",
        source=Source.BLOG,
        categories=_tags("ITSM", "Process Owner", "Process Optimization"),
        is_curated=True,
    ),
    SearchResult(
        id="curated-3",
        title="ServiceNow Performance Analytics Dashboard Configuration",
        snippet="Configure powerful dashboards using Performance Analytics. Learn "
        "about widgets, data sources, and visualization best practices.",
        url="https://docs.servicenow.com/bundle/now-intelligence/page/use/performance-analytics/dashboards.html",
        source=Source.DOCUMENTATION,
        categories=_tags("Performance Analytics", "Business Analyst", "Reporting"),
        is_curated=True,
    ),
    SearchResult(
        id="curated-4",
        title="CMDB Health and Data Quality",
        snippet="Best practices for CMDB data modeling, discovery setup, and "
        "keeping configuration item data complete and correct.",
        url="https://docs.servicenow.com/bundle/servicenow-platform/page/product/configuration-management/concept/cmdb-health.html",
        source=Source.DOCUMENTATION,
        categories=_tags("CMDB", "Technical Architect", "Asset Management"),
        is_curated=True,
    ),
    SearchResult(
        id="curated-5",
        title="ServiceNow Tokyo Release Highlights",
        snippet="Overview of key features and improvements in the Tokyo release. "
        "Learn about platform changes, new modules, and deprecated functionality.",
        url="https://www.servicenow.com/blogs/2022/tokyo-release-highlights.html",
        source=Source.BLOG,
        categories=_tags("Platform", "All", "Upgrade Planning"),
        is_curated=True,
    ),
)


def search_curated(query: str) -> list[SearchResult]:
    """
    Curated entries whose title or snippet contains the query.

    Matching is a case-insensitive substring test on the trimmed query.
    Results keep their static order.
    """
    needle = query.strip().lower()
    if not needle:
        return []
    return [
        result
        for result in CURATED_RESULTS
        if needle in result.title.lower() or needle in result.snippet.lower()
    ]
