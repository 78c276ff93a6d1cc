"""Tests for core/service.py: login, logout, needs_login and the scenarios."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from core.service import KnowledgeSearchService, build_service
from models.config import CategoryKind, Source
from utils.config import DEFAULT_CONFIG


def gated(results):
    return [r for r in results if r.source == Source.NOW_CREATE]


class TestLogin:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "username,password",
        [("alice", ""), ("", "secret"), ("   ", "secret"), ("alice", "   ")],
    )
    async def test_empty_credentials_rejected(self, service, username, password):
        assert await service.login(username, password) is False
        assert service.is_authenticated is False
        assert service.auth.token is None

    @pytest.mark.asyncio
    async def test_simulated_login_succeeds(self, service):
        assert await service.login("alice", "secret") is True
        assert service.is_authenticated is True
        assert service.auth.token

    @pytest.mark.asyncio
    async def test_tokens_are_opaque_and_fresh(self, service):
        await service.login("alice", "secret")
        first = service.auth.token
        service.logout()
        await service.login("alice", "secret")
        assert service.auth.token != first

    @pytest.mark.asyncio
    async def test_oauth_login_uses_access_token(self, adapters):
        service = KnowledgeSearchService(
            adapters,
            servicenow_config={
                "instance_url": "https://dev1.service-now.com/",
                "client_id": "cid",
                "client_secret": "csecret",
            },
        )
        mock_response = MagicMock()
        mock_response.json.return_value = {"access_token": "oauth-token"}
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client:
            mock_post = AsyncMock(return_value=mock_response)
            mock_client.return_value.__aenter__.return_value.post = mock_post
            assert await service.login("alice", "secret") is True

        assert service.auth.token == "oauth-token"
        url = mock_post.call_args[0][0]
        assert url == "https://dev1.service-now.com/oauth_token.do"
        assert mock_post.call_args[1]["data"]["grant_type"] == "password"

    @pytest.mark.asyncio
    async def test_oauth_rejection_leaves_state_untouched(self, adapters):
        service = KnowledgeSearchService(
            adapters,
            servicenow_config={
                "instance_url": "https://dev1.service-now.com",
                "client_id": "cid",
                "client_secret": "csecret",
            },
        )
        request = httpx.Request("POST", "https://dev1.service-now.com/oauth_token.do")
        error = httpx.HTTPStatusError(
            "401", request=request, response=httpx.Response(401, request=request)
        )
        mock_response = MagicMock()
        mock_response.raise_for_status = MagicMock(side_effect=error)

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=mock_response
            )
            assert await service.login("alice", "wrong") is False

        assert service.is_authenticated is False
        assert service.auth.token is None


class TestLogout:
    @pytest.mark.asyncio
    async def test_logout_clears_state_and_cache(self, service):
        await service.login("alice", "secret")
        await service.search("incident")
        assert len(service.cache) == 1

        service.logout()
        assert service.is_authenticated is False
        assert service.auth.token is None
        assert len(service.cache) == 0

    @pytest.mark.asyncio
    async def test_logout_purges_unauthenticated_entries_too(self, service):
        await service.search("incident")
        service.logout()
        assert len(service.cache) == 0

    @pytest.mark.asyncio
    async def test_search_after_logout_switches_to_teaser(self, service):
        await service.login("alice", "secret")
        before = gated(await service.search("ITSM best practices"))
        assert [r.title for r in before] == ["ITSM Implementation Playbook"]
        assert not before[0].is_teaser

        service.logout()
        after = gated(await service.search("ITSM best practices"))
        assert len(after) == 1
        assert after[0].is_teaser


class TestNeedsLogin:
    @pytest.mark.asyncio
    async def test_itsm_scenario_unauthenticated(self, service):
        results = await service.search("ITSM best practices")

        curated = [r for r in results if r.is_curated]
        assert any(r.has_category(CategoryKind.PRODUCT, "ITSM") for r in curated)
        teasers = gated(results)
        assert len(teasers) == 1 and teasers[0].is_teaser

        # Seeing the teaser is not enough, only opening it
        assert service.needs_login is False
        assert service.open_result(teasers[0].id) is None
        assert service.needs_login is True

    @pytest.mark.asyncio
    async def test_opening_regular_result_returns_link(self, service):
        results = await service.search("ITSM best practices")
        assert service.open_result(results[0].id) == results[0].url
        assert service.needs_login is False

    @pytest.mark.asyncio
    async def test_login_resets_needs_login(self, service):
        results = await service.search("ITSM best practices")
        service.open_result(gated(results)[0].id)
        assert service.needs_login

        await service.login("alice", "secret")
        assert service.needs_login is False

    @pytest.mark.asyncio
    async def test_unknown_id_raises_key_error(self, service):
        await service.search("ITSM best practices")
        with pytest.raises(KeyError):
            service.open_result("missing-0")

    @pytest.mark.asyncio
    async def test_authenticated_search_uses_full_gated_path(self, service, adapters):
        await service.login("alice", "secret")
        results = await service.search("incident")
        assert len(adapters[-1].calls) == 1
        assert not any(r.is_teaser for r in results)


class TestFixtureMode:
    @pytest.mark.asyncio
    async def test_end_to_end_without_network(self):
        config = {**DEFAULT_CONFIG, "search": {**DEFAULT_CONFIG["search"], "use_fixtures": True}}
        service = build_service(config)

        results = await service.search("ITSM best practices")
        assert results[0].is_curated
        assert results[0].title == "ServiceNow ITSM Best Practices"
        titles = [r.title.lower() for r in results]
        assert titles.count("servicenow itsm best practices") == 1
        assert len(gated(results)) == 1 and gated(results)[0].is_teaser

        assert await service.login("alice", "secret") is True
        results = await service.search("ITSM best practices")
        assert "ITSM Implementation Playbook" in [r.title for r in gated(results)]

    def test_sources_directory(self):
        service = build_service(DEFAULT_CONFIG)
        directory = service.sources()
        assert [s["source"] for s in directory] == [
            "documentation",
            "community",
            "devsite",
            "blog",
            "github",
            "youtube",
            "nowcreate",
        ]
        assert [s["source"] for s in directory if s["requires_login"]] == ["nowcreate"]

    def test_disabled_source_is_skipped(self):
        config = {
            **DEFAULT_CONFIG,
            "sources": {**DEFAULT_CONFIG["sources"], "youtube": {"enabled": False}},
        }
        service = build_service(config)
        assert "youtube" not in [s["source"] for s in service.sources()]
