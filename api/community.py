"""
ServiceNow Community forum search.

Questions, answers and articles posted by customers, partners and
ServiceNow staff on the community forums.
"""

from api.base import HtmlSearchAdapter
from models.config import Source

__all__ = ["CommunityAdapter"]


class CommunityAdapter(HtmlSearchAdapter):
    source = Source.COMMUNITY
    id_prefix = "community"
    name = "ServiceNow Community"
    description = (
        "Discussion forums where practitioners share solutions, "
        "workarounds and implementation experience."
    )
    home_url = "https://www.servicenow.com/community"

    search_url = "https://www.servicenow.com/community/forums/searchpage/tab/message"
    item_selector = ".lia-message-view-wrapper, .search-result"
    link_selector = "a.page-link, h2 a, a"
    snippet_selector = ".lia-truncated-body-container, .snippet, p"
