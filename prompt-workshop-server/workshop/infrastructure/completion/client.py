"""httpx client for OpenAI-compatible chat completion endpoints."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from workshop.core.config import CompletionSettings

from .errors import (
    CompletionTimeoutError,
    PermanentExecutionError,
    TransientExecutionError,
)

logger = logging.getLogger(__name__)


class CompletionClient:
    """
    Sends a single user message to a chat completion endpoint.

    Works against OpenAI, Azure OpenAI deployments and Ollama's ``/v1``
    compatibility layer. HTTP failures are mapped onto the completion error
    taxonomy so the invoker can decide whether to retry.
    """

    def __init__(
        self,
        settings: CompletionSettings,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.settings = settings
        self.http_client = http_client or httpx.AsyncClient(timeout=settings.timeout_seconds)

    async def __aenter__(self) -> "CompletionClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http_client.aclose()

    @property
    def endpoint(self) -> str:
        base = self.settings.resolved_base_url
        if self.settings.provider == "azure":
            return f"{base}/openai/deployments/{self.settings.model}/chat/completions"
        return f"{base}/chat/completions"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.settings.provider == "azure":
            headers["api-key"] = self.settings.api_key or ""
        elif self.settings.api_key:
            headers["Authorization"] = f"Bearer {self.settings.api_key}"
        return headers

    def _payload(self, text: str) -> dict[str, Any]:
        payload: dict[str, Any] = {"messages": [{"role": "user", "content": text}]}
        if self.settings.provider != "azure":
            payload["model"] = self.settings.model
        if self.settings.temperature is not None:
            payload["temperature"] = self.settings.temperature
        return payload

    async def complete(self, text: str, timeout: Optional[float] = None) -> str:
        params = {"api-version": self.settings.api_version} if self.settings.provider == "azure" else None
        try:
            response = await self.http_client.post(
                self.endpoint,
                json=self._payload(text),
                headers=self._headers(),
                params=params,
                timeout=timeout or self.settings.timeout_seconds,
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise CompletionTimeoutError(f"Completion request timed out: {exc}") from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            message = f"Completion endpoint returned HTTP {status}: {exc.response.text[:200]}"
            if status == 429 or status >= 500:
                raise TransientExecutionError(message, status_code=status) from exc
            raise PermanentExecutionError(message, status_code=status) from exc
        except httpx.TransportError as exc:
            raise TransientExecutionError(f"Completion endpoint unreachable: {exc}") from exc

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise PermanentExecutionError("Completion endpoint returned an unexpected payload") from exc
        if not isinstance(content, str):
            raise PermanentExecutionError("Completion endpoint returned no text")
        logger.debug("Completion returned %d characters", len(content))
        return content
