"""
Tests for the Gemini search client wrapper. The SDK client is mocked; no
network calls are made.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from google.genai import types

from weekend_vibes.config import Settings
from weekend_vibes.upstream.gemini_search import GeminiSearchClient
from weekend_vibes.utils.errors import MissingConfigurationError, UpstreamCallError


@pytest.fixture
def sdk_client():
    with patch("weekend_vibes.upstream.gemini_search.genai.Client") as client_cls:
        instance = MagicMock()
        instance.aio.models.generate_content = AsyncMock(return_value=MagicMock(text="[1, 2]"))
        client_cls.return_value = instance
        yield client_cls


class TestGeminiSearchClient:

    def test_requires_api_key(self, sdk_client):
        with pytest.raises(MissingConfigurationError):
            GeminiSearchClient(api_key="")
        sdk_client.assert_not_called()

    def test_from_settings(self, sdk_client):
        settings = Settings(
            upstream_api_key="k",
            gemini_model="gemini-2.5-pro",
            enable_search_grounding=False,
            upstream_timeout_ms=15000,
        )

        client = GeminiSearchClient.from_settings(settings)

        assert client.model_name == "gemini-2.5-pro"
        assert client.enable_search_grounding is False
        kwargs = sdk_client.call_args.kwargs
        assert kwargs["api_key"] == "k"
        assert kwargs["http_options"].timeout == 15000

    def test_no_timeout_leaves_sdk_default(self, sdk_client):
        GeminiSearchClient(api_key="k")

        assert sdk_client.call_args.kwargs["http_options"] is None

    @pytest.mark.asyncio
    async def test_generate_with_search_grounding(self, sdk_client):
        client = GeminiSearchClient(api_key="k")

        text = await client.generate("find events")

        assert text == "[1, 2]"
        call = sdk_client.return_value.aio.models.generate_content
        call.assert_awaited_once()
        kwargs = call.await_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        assert kwargs["contents"] == "find events"
        config = kwargs["config"]
        assert isinstance(config, types.GenerateContentConfig)
        assert len(config.tools) == 1
        assert config.tools[0].google_search is not None

    @pytest.mark.asyncio
    async def test_generate_without_grounding(self, sdk_client):
        client = GeminiSearchClient(api_key="k", enable_search_grounding=False)

        await client.generate("find events")

        config = sdk_client.return_value.aio.models.generate_content.await_args.kwargs["config"]
        assert not config.tools

    @pytest.mark.asyncio
    async def test_generate_returns_none_text(self, sdk_client):
        sdk_client.return_value.aio.models.generate_content.return_value = MagicMock(text=None)
        client = GeminiSearchClient(api_key="k")

        assert await client.generate("find events") is None

    @pytest.mark.asyncio
    async def test_sdk_errors_are_wrapped(self, sdk_client):
        boom = ConnectionError("quota exceeded")
        sdk_client.return_value.aio.models.generate_content.side_effect = boom
        client = GeminiSearchClient(api_key="k")

        with pytest.raises(UpstreamCallError) as exc_info:
            await client.generate("find events")

        assert exc_info.value.error is boom
        assert exc_info.value.details["error_type"] == "ConnectionError"
        assert exc_info.value.__cause__ is boom
