"""
Data models for ServiceNow Knowledge Search.

Provides frozen Pydantic models for search results, the authentication
snapshot passed to source adapters, and request validation for tools.
"""

from models.config import CategoryKind, ResponseFormat, Source
from models.search import (
    AuthContext,
    CategoryTag,
    LoginInput,
    SearchInput,
    SearchResult,
)

__all__ = [
    # Enums
    "CategoryKind",
    "ResponseFormat",
    "Source",
    # Records
    "AuthContext",
    "CategoryTag",
    "SearchResult",
    # Tool inputs
    "LoginInput",
    "SearchInput",
]
