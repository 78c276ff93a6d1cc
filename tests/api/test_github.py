"""Unit tests for api/github.py."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from api.github import API_URL, GitHubAdapter, _build_github_query
from core.metrics import get_source_metrics
from core.reliability import CircuitBreaker
from models.config import CategoryKind, Source
from models.search import AuthContext


def make_adapter(**kwargs):
    return GitHubAdapter(
        max_retries=0, circuit_breaker=CircuitBreaker("github"), **kwargs
    )


def status_error(status):
    request = httpx.Request("GET", API_URL)
    return httpx.HTTPStatusError(
        str(status), request=request, response=httpx.Response(status, request=request)
    )


class TestBuildGithubQuery:
    """Test suite for _build_github_query."""

    def test_stopwords_removed_and_qualifier_added(self):
        assert _build_github_query("ITSM best practices") == "ITSM servicenow"

    def test_short_words_dropped_but_digits_kept(self):
        assert _build_github_query("go to v2 api 7") == "api 7 servicenow"

    def test_only_stopwords(self):
        assert _build_github_query("the best of servicenow") == "servicenow"

    def test_respects_max_length(self):
        query = " ".join(["integration"] * 30)
        result = _build_github_query(query, max_length=40)
        assert len(result) <= 40
        assert result.endswith("servicenow")


class TestGitHubAdapter:
    """Test suite for GitHubAdapter.fetch."""

    @pytest.mark.asyncio
    async def test_fetch_success(self, monkeypatch):
        """Repositories become developer-tagged results."""
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        mock_response = MagicMock()
        mock_response.json.return_value = {
            "items": [
                {
                    "name": "pysnow",
                    "html_url": "https://github.com/rbw/pysnow",
                    "description": "Python library for the ServiceNow REST API",
                },
                {"name": "no-description", "html_url": "https://github.com/x/y"},
            ]
        }
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client:
            mock_get = AsyncMock(return_value=mock_response)
            mock_client.return_value.__aenter__.return_value.get = mock_get
            results = await make_adapter().fetch("REST client", AuthContext())

        assert [r.id for r in results] == ["github-0", "github-1"]
        assert results[0].source == Source.GITHUB
        assert results[0].has_category(CategoryKind.PERSONA, "Developer")
        assert results[1].snippet == "No description available"

        params = mock_get.call_args[1]["params"]
        assert params["q"] == "REST client servicenow"
        assert "Authorization" not in mock_get.call_args[1]["headers"]

    @pytest.mark.asyncio
    async def test_token_sent_when_configured(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
        mock_response = MagicMock()
        mock_response.json.return_value = {"items": []}
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client:
            mock_get = AsyncMock(return_value=mock_response)
            mock_client.return_value.__aenter__.return_value.get = mock_get
            await make_adapter().fetch("flows", AuthContext())

        assert mock_get.call_args[1]["headers"]["Authorization"] == "token ghp_test"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [403, 422, 429])
    async def test_expected_http_errors_return_empty(self, status):
        mock_response = MagicMock()
        mock_response.raise_for_status = MagicMock(side_effect=status_error(status))

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=mock_response
            )
            assert await make_adapter().fetch("flows", AuthContext()) == []

    @pytest.mark.asyncio
    async def test_server_error_degrades_and_is_counted(self):
        mock_response = MagicMock()
        mock_response.raise_for_status = MagicMock(side_effect=status_error(500))

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=mock_response
            )
            assert await make_adapter().fetch("flows", AuthContext()) == []

        metrics = get_source_metrics()
        assert metrics.failed_calls == 1
        assert metrics.error_types == {"HTTPStatusError": 1}

    @pytest.mark.asyncio
    async def test_connection_error_returns_empty(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=httpx.ConnectError("Network unreachable")
            )
            assert await make_adapter().fetch("flows", AuthContext()) == []

    @pytest.mark.asyncio
    async def test_connection_error_is_retried(self):
        adapter = GitHubAdapter(max_retries=1, circuit_breaker=CircuitBreaker("gh"))
        mock_response = MagicMock()
        mock_response.json.return_value = {
            "items": [{"name": "repo", "html_url": "https://github.com/a/repo"}]
        }
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client, patch(
            "core.reliability._backoff_delay", return_value=0.0
        ):
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=[httpx.ConnectError("blip"), mock_response]
            )
            results = await adapter.fetch("flows", AuthContext())

        assert [r.title for r in results] == ["repo"]

    @pytest.mark.asyncio
    async def test_max_results_enforced(self):
        mock_response = MagicMock()
        mock_response.json.return_value = {
            "items": [
                {"name": f"repo{i}", "html_url": f"https://github.com/a/repo{i}"}
                for i in range(10)
            ]
        }
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=mock_response
            )
            results = await make_adapter(max_results=3).fetch("flows", AuthContext())

        assert len(results) == 3
