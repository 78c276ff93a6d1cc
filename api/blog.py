"""ServiceNow blog search (WordPress search page)."""

from api.base import HtmlSearchAdapter
from models.config import Source

__all__ = ["BlogAdapter"]


class BlogAdapter(HtmlSearchAdapter):
    source = Source.BLOG
    id_prefix = "blog"
    name = "ServiceNow Blog"
    description = "Product announcements, release highlights and customer stories."
    home_url = "https://blogs.servicenow.com"

    search_url = "https://blogs.servicenow.com/"
    query_param = "s"
    item_selector = "article"
    link_selector = "h2 a, .entry-title a"
    snippet_selector = ".entry-summary, .excerpt, p"
