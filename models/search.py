"""Search result and tool input models for ServiceNow Knowledge Search."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from models.config import CategoryKind, ResponseFormat, Source


class CategoryTag(BaseModel):
    """A (kind, name) classification attached to a result."""

    model_config = ConfigDict(frozen=True)

    kind: CategoryKind
    name: str


class SearchResult(BaseModel):
    """One retrieved or curated item. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    snippet: str = ""
    url: str
    source: Source
    categories: tuple[CategoryTag, ...] = ()
    is_curated: bool = False
    is_teaser: bool = False

    def has_category(self, kind: CategoryKind, name: Optional[str] = None) -> bool:
        return any(
            tag.kind == kind and (name is None or tag.name == name)
            for tag in self.categories
        )


class AuthContext(BaseModel):
    """Read-only view of the authentication state handed to adapters."""

    model_config = ConfigDict(frozen=True)

    is_authenticated: bool = False
    token: Optional[str] = None


class SearchInput(BaseModel):
    """Input model for knowledge search."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
    )

    query: str = Field(
        ...,
        description=(
            "Free-text question about ServiceNow. "
            "Example: 'ITSM best practices' or 'REST API authentication'"
        ),
        max_length=500,
    )

    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' (default) or 'json'",
    )


class LoginInput(BaseModel):
    """Credentials for the login-gated sources."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        extra="forbid",
    )

    username: str = Field(
        ...,
        description="ServiceNow username or email",
        min_length=1,
        max_length=200,
    )

    password: str = Field(
        ...,
        description="ServiceNow password",
        min_length=1,
        max_length=500,
    )
