"""Shared fixtures: fake source adapters and a wired-up service."""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import pytest

from api.base import SourceAdapter
from api.now_create import NowCreateAdapter
from core.metrics import reset_metrics
from core.reliability import CircuitBreaker, reset_circuit_breakers
from core.service import KnowledgeSearchService
from models.config import Source
from models.search import AuthContext
from utils.rate_limit import reset_rate_limits


class FakeAdapter(SourceAdapter):
    """Adapter returning canned raw items, optionally slow or failing."""

    def __init__(
        self,
        source: Source,
        items: Optional[list[dict[str, Any]]] = None,
        *,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.source = source
        self.id_prefix = source.value
        super().__init__(
            max_retries=0, circuit_breaker=CircuitBreaker(name=source.value)
        )
        self.items = items or []
        self.error = error
        self.delay = delay
        self.calls: list[tuple[str, AuthContext]] = []

    async def _search(self, query: str, auth: AuthContext) -> list[dict[str, Any]]:
        self.calls.append((query, auth))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return [dict(item) for item in self.items]


class FakeNowCreate(NowCreateAdapter):
    """Gated adapter whose authenticated search returns canned items."""

    def __init__(self, items: Optional[list[dict[str, Any]]] = None):
        super().__init__(max_retries=0, circuit_breaker=CircuitBreaker("nowcreate"))
        self.items = items or []
        self.calls: list[tuple[str, AuthContext]] = []

    async def _search(self, query: str, auth: AuthContext) -> list[dict[str, Any]]:
        self.calls.append((query, auth))
        return [dict(item) for item in self.items]


def item(title: str, snippet: str = "", url: Optional[str] = None) -> dict[str, Any]:
    slug = title.lower().replace(" ", "-")
    return {"title": title, "snippet": snippet, "url": url or f"https://example.com/{slug}"}


@pytest.fixture(autouse=True)
def _reset_globals():
    reset_circuit_breakers()
    reset_metrics()
    reset_rate_limits()
    yield


@pytest.fixture
def adapters() -> list[SourceAdapter]:
    return [
        FakeAdapter(
            Source.DOCUMENTATION,
            [
                item("Incident Management Overview", "Incident states and SLAs"),
                item("servicenow itsm best practices", "Docs copy of the guide"),
            ],
        ),
        FakeAdapter(Source.COMMUNITY, [item("Change approvals stuck", "CAB workflow")]),
        FakeAdapter(Source.DEVSITE, [item("Scripted REST APIs", "Build endpoints")]),
        FakeAdapter(Source.BLOG, [item("Incident Management Overview", "Blog repost")]),
        FakeAdapter(Source.GITHUB, [item("pysnow", "Python REST client")]),
        FakeAdapter(Source.YOUTUBE, []),
        FakeNowCreate([item("ITSM Implementation Playbook", "Workshops and templates")]),
    ]


@pytest.fixture
def service(adapters) -> KnowledgeSearchService:
    return KnowledgeSearchService(adapters, adapter_timeout=1.0)
