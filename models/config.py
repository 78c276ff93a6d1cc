"""Configuration enums for ServiceNow Knowledge Search."""

from enum import Enum


class ResponseFormat(str, Enum):
    """Output format for tool responses."""

    MARKDOWN = "markdown"
    JSON = "json"


class Source(str, Enum):
    """Knowledge sources queried by the aggregator."""

    DOCUMENTATION = "documentation"
    COMMUNITY = "community"
    DEVSITE = "devsite"
    BLOG = "blog"
    GITHUB = "github"
    YOUTUBE = "youtube"
    NOW_CREATE = "nowcreate"  # Login-gated


class CategoryKind(str, Enum):
    """Axes a result can be classified along."""

    PRODUCT = "product"
    PERSONA = "persona"
    USE_CASE = "usecase"
    INDUSTRY = "industry"
