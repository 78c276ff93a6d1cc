"""
ServiceNow Product Documentation search.

Scrapes the public docs.servicenow.com search page. Results are
product-level reference material, release notes and how-to guides.
"""

from api.base import HtmlSearchAdapter
from models.config import Source

__all__ = ["DocumentationAdapter"]


class DocumentationAdapter(HtmlSearchAdapter):
    source = Source.DOCUMENTATION
    id_prefix = "docs"
    name = "ServiceNow Documentation"
    description = (
        "Official product documentation for every ServiceNow release, "
        "including configuration guides and API references."
    )
    home_url = "https://docs.servicenow.com"

    search_url = "https://docs.servicenow.com/search"
    item_selector = ".search-result, li.result"
    link_selector = "a.title, h3 a, a"
    snippet_selector = ".summary, .abstract, p"
