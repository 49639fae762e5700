"""Text generation client for the DeepSeek chat-completions API."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx
import structlog

from fitplan.config import Settings
from fitplan.errors import GenerationError, GenerationRateLimited, GenerationUnavailable

logger = structlog.get_logger()

PLAN_MAX_TOKENS = 2000
ADVICE_MAX_TOKENS = 1000


class GenerationClient(ABC):
    """Abstract LLM completion boundary."""

    @abstractmethod
    async def complete(self, system_prompt: str, user_prompt: str, max_tokens: int = PLAN_MAX_TOKENS) -> str:
        """Return the generated text.

        Raises:
            GenerationUnavailable: Service unreachable, misconfigured or erroring.
            GenerationRateLimited: Service returned 429.
        """
        ...

    async def close(self) -> None:
        return None


class DeepSeekClient(GenerationClient):
    """OpenAI-compatible chat completions over a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.deepseek.com",
        model: str = "deepseek-chat",
        temperature: float = 0.7,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def complete(self, system_prompt: str, user_prompt: str, max_tokens: int = PLAN_MAX_TOKENS) -> str:
        if not self.api_key:
            msg = "Generation service is not configured"
            raise GenerationUnavailable(msg)

        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self.temperature,
            "max_tokens": max_tokens,
        }
        try:
            response = await self._http.post("/v1/chat/completions", json=payload)
        except httpx.HTTPError as exc:
            logger.warning("generation_request_failed", model=self.model, error=str(exc))
            msg = "Generation service is unreachable. Please try again later."
            raise GenerationUnavailable(msg) from exc

        if response.status_code == 429:
            logger.warning("generation_rate_limited", model=self.model)
            msg = "Generation service is busy. Please try again later."
            raise GenerationRateLimited(msg)
        if response.is_error:
            logger.warning("generation_failed", model=self.model, status=response.status_code)
            msg = f"Generation service returned {response.status_code}. Please try again later."
            raise GenerationUnavailable(msg)

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            msg = "Generation service returned an unexpected response"
            raise GenerationError(msg) from exc

        logger.info("generation_completed", model=self.model, max_tokens=max_tokens, chars=len(content))
        return content

    async def close(self) -> None:
        await self._http.aclose()


# Module-level singleton
_client: GenerationClient | None = None


def init_generation_client(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> GenerationClient:
    global _client  # noqa: PLW0603
    _client = DeepSeekClient(
        api_key=settings.deepseek_api_key,
        base_url=settings.deepseek_base_url,
        model=settings.deepseek_model,
        temperature=settings.deepseek_temperature,
        timeout=settings.deepseek_timeout_seconds,
        transport=transport,
    )
    return _client


async def close_generation_client() -> None:
    global _client  # noqa: PLW0603
    if _client is not None:
        await _client.close()
        _client = None


def get_generation_client() -> GenerationClient:
    """Get the generation client (FastAPI dependency)."""
    if _client is None:
        msg = "Generation client not initialized. Call init_generation_client() first."
        raise RuntimeError(msg)
    return _client
