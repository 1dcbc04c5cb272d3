"""Tests for the httpx completion client."""
import json

import httpx
import pytest

from workshop.core.config import CompletionSettings
from workshop.infrastructure.completion import (
    CompletionClient,
    CompletionTimeoutError,
    PermanentExecutionError,
    TransientExecutionError,
)


def _client(settings: CompletionSettings, handler) -> CompletionClient:
    return CompletionClient(settings, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def _reply(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class TestCompletionSettings:
    """Test provider configuration checks."""

    def test_openai_needs_api_key(self):
        """Test that OpenAI without a key is not configured."""
        assert CompletionSettings().is_configured is False
        assert CompletionSettings(api_key="sk-test").is_configured is True

    def test_azure_needs_endpoint(self):
        """Test that Azure needs both a key and an endpoint."""
        assert CompletionSettings(provider="azure", api_key="k").is_configured is False
        assert CompletionSettings(provider="azure", api_key="k", base_url="https://x").is_configured is True

    def test_ollama_is_always_configured(self):
        """Test that a local Ollama needs no key."""
        settings = CompletionSettings(provider="ollama")
        assert settings.is_configured is True
        assert settings.resolved_base_url == "http://localhost:11434/v1"


class TestCompletionClient:
    """Test request building and error mapping."""

    @pytest.mark.asyncio
    async def test_openai_request(self):
        """Test the OpenAI request shape and reply parsing."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_reply("hello"))

        client = _client(CompletionSettings(api_key="sk-test", model="gpt-4o-mini"), handler)
        try:
            assert await client.complete("Say hi") == "hello"
        finally:
            await client.aclose()

        assert seen["url"] == "https://api.openai.com/v1/chat/completions"
        assert seen["auth"] == "Bearer sk-test"
        assert seen["body"]["model"] == "gpt-4o-mini"
        assert seen["body"]["messages"] == [{"role": "user", "content": "Say hi"}]

    @pytest.mark.asyncio
    async def test_azure_request(self):
        """Test the Azure deployment URL and api-key header."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(200, json=_reply("ok"))

        settings = CompletionSettings(
            provider="azure", api_key="az-key", base_url="https://res.openai.azure.com/", model="gpt35"
        )
        client = _client(settings, handler)
        try:
            await client.complete("x")
        finally:
            await client.aclose()

        request = seen["request"]
        assert request.url.path == "/openai/deployments/gpt35/chat/completions"
        assert request.url.params["api-version"] == settings.api_version
        assert request.headers["api-key"] == "az-key"
        assert "model" not in json.loads(request.content)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status,error",
        [
            (429, TransientExecutionError),
            (503, TransientExecutionError),
            (401, PermanentExecutionError),
            (400, PermanentExecutionError),
        ],
    )
    async def test_http_errors_are_classified(self, status, error):
        """Test that throttling and server errors are transient, the rest permanent."""
        client = _client(CompletionSettings(api_key="k"), lambda request: httpx.Response(status, text="nope"))
        try:
            with pytest.raises(error) as excinfo:
                await client.complete("x")
        finally:
            await client.aclose()
        assert excinfo.value.status_code == status

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Test that transport timeouts raise the timeout error."""

        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        client = _client(CompletionSettings(api_key="k"), handler)
        try:
            with pytest.raises(CompletionTimeoutError):
                await client.complete("x")
        finally:
            await client.aclose()

    @pytest.mark.asyncio
    async def test_unexpected_payload(self):
        """Test that a reply without choices is a permanent error."""
        client = _client(CompletionSettings(api_key="k"), lambda request: httpx.Response(200, json={"error": "?"}))
        try:
            with pytest.raises(PermanentExecutionError):
                await client.complete("x")
        finally:
            await client.aclose()
