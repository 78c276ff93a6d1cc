"""Tests for the login-gated Now Create adapter."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from api.now_create import TEASER_SNIPPET_LIMIT, NowCreateAdapter
from core.reliability import CircuitBreaker
from models.config import Source
from models.search import AuthContext

PLAYBOOK_HTML = """
<div class="resource-card">
  <a class="resource-title" href="/resources/itsm-playbook">ITSM Implementation Playbook</a>
  <div class="resource-summary">Workshops and process design templates.</div>
</div>
"""

LOGGED_IN = AuthContext(is_authenticated=True, token="session-token")


@pytest.fixture
def adapter():
    return NowCreateAdapter(max_retries=0, circuit_breaker=CircuitBreaker("nowcreate"))


def html_response(text):
    mock_response = MagicMock()
    mock_response.text = text
    mock_response.raise_for_status = MagicMock()
    return mock_response


class TestTeaser:
    @pytest.mark.asyncio
    async def test_unauthenticated_returns_single_teaser(self, adapter):
        with patch("httpx.AsyncClient") as mock_client:
            results = await adapter.fetch("ITSM best practices", AuthContext())
            mock_client.assert_not_called()

        assert len(results) == 1
        teaser = results[0]
        assert teaser.is_teaser
        assert teaser.source == Source.NOW_CREATE
        assert teaser.id == "nowcreate-0"
        assert teaser.url == adapter.home_url
        assert "ITSM best practices" in teaser.title

    def test_teaser_snippet_is_short(self, adapter):
        teaser = adapter.teaser("x" * 300)
        assert len(teaser.snippet) <= TEASER_SNIPPET_LIMIT

    @pytest.mark.asyncio
    async def test_teaser_even_in_fixture_mode(self):
        adapter = NowCreateAdapter(use_fixtures=True, circuit_breaker=CircuitBreaker("nc"))
        results = await adapter.fetch("ITSM", AuthContext())
        assert [r.is_teaser for r in results] == [True]


class TestAuthenticatedSearch:
    @pytest.mark.asyncio
    async def test_sends_bearer_token(self, adapter):
        with patch("httpx.AsyncClient") as mock_client:
            mock_get = AsyncMock(return_value=html_response(PLAYBOOK_HTML))
            mock_client.return_value.__aenter__.return_value.get = mock_get
            results = await adapter.fetch("ITSM", LOGGED_IN)

        headers = mock_get.call_args[1]["headers"]
        assert headers["Authorization"] == "Bearer session-token"
        assert [r.title for r in results] == ["ITSM Implementation Playbook"]
        assert results[0].url == "https://nowcreate.service-now.com/resources/itsm-playbook"
        assert not results[0].is_teaser

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 403])
    async def test_rejected_session_returns_empty(self, adapter, status, caplog):
        request = httpx.Request("GET", "https://nowcreate.service-now.com/search")
        mock_response = MagicMock()
        mock_response.raise_for_status = MagicMock(
            side_effect=httpx.HTTPStatusError(
                "rejected",
                request=request,
                response=httpx.Response(status, request=request),
            )
        )

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=mock_response
            )
            assert await adapter.fetch("ITSM", LOGGED_IN) == []

        assert "log in again" in caplog.text

    @pytest.mark.asyncio
    async def test_fixture_mode_when_logged_in(self):
        adapter = NowCreateAdapter(use_fixtures=True, circuit_breaker=CircuitBreaker("nc"))
        results = await adapter.fetch("CMDB", LOGGED_IN)
        assert [r.title for r in results] == ["Implementing CMDB in ServiceNow"]
