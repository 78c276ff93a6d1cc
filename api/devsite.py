"""
ServiceNow Developer Portal search.

Developer-oriented content: API references, scripting guides and
learning plans. Every result is tagged with the Developer persona.
"""

from api.base import HtmlSearchAdapter
from models.config import Source

__all__ = ["DevSiteAdapter"]


class DevSiteAdapter(HtmlSearchAdapter):
    source = Source.DEVSITE
    id_prefix = "dev"
    name = "ServiceNow Developer Site"
    description = (
        "API documentation, developer guides, learning plans and "
        "Personal Developer Instance resources."
    )
    home_url = "https://developer.servicenow.com"
    developer_hint = True

    search_url = "https://developer.servicenow.com/search"
    item_selector = ".search-result, .result-item"
    link_selector = "a.result-title, h3 a, a"
    snippet_selector = ".result-description, p"
