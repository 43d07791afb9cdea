from __future__ import annotations

from typing import Protocol

import httpx
import structlog

from sql_chatbot.config import Settings
from sql_chatbot.errors import CompletionError
from sql_chatbot.llm.retry import create_post_with_retry

logger = structlog.get_logger()


class CompletionClient(Protocol):
    """Anything that turns a text prompt into a text completion."""

    async def complete(self, prompt: str) -> str: ...

    async def aclose(self) -> None: ...


class OllamaClient:
    """Completion client for Ollama's non-streaming ``/api/generate`` endpoint."""

    def __init__(
        self,
        base_url: str,
        model: str,
        *,
        temperature: float = 0.1,
        max_tokens: int = 100,
        timeout_seconds: float = 60.0,
        retry_attempts: int = 1,
        retry_min_wait: int = 1,
        retry_max_wait: int = 5,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout_seconds, transport=transport
        )
        self._post = create_post_with_retry(
            max_attempts=retry_attempts, min_wait=retry_min_wait, max_wait=retry_max_wait
        )

    @property
    def model(self) -> str:
        return self._model

    async def complete(self, prompt: str) -> str:
        payload = {
            "model": self._model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": self._temperature,
                "max_tokens": self._max_tokens,
            },
        }
        try:
            response = await self._post(self._client, "/api/generate", payload)
        except httpx.HTTPError as e:
            logger.error("llm_request_failed", model=self._model, error=str(e))
            raise CompletionError("Completion service unreachable", details=str(e)) from e

        if response.is_error:
            logger.error(
                "llm_request_failed", model=self._model, status_code=response.status_code
            )
            raise CompletionError(
                f"Completion service returned HTTP {response.status_code}",
                details=response.text[:500] or None,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise CompletionError("Malformed completion response", details=str(e)) from e

        text = body.get("response") if isinstance(body, dict) else None
        if not isinstance(text, str):
            raise CompletionError("Completion response has no text")
        return text

    async def aclose(self) -> None:
        await self._client.aclose()


def create_completion_client(settings: Settings) -> CompletionClient:
    client = OllamaClient(
        base_url=settings.ollama_base_url,
        model=settings.ollama_model,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
        timeout_seconds=settings.llm_timeout_seconds,
        retry_attempts=settings.llm_retry_attempts,
        retry_min_wait=settings.llm_retry_min_wait_seconds,
        retry_max_wait=settings.llm_retry_max_wait_seconds,
    )
    logger.info("llm_provider_added", provider="ollama", model=settings.ollama_model)
    return client
