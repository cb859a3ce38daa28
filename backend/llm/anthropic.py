"""Anthropic Claude LLM implementation."""

import logging

import httpx
from anthropic import APIError, AsyncAnthropic, RateLimitError

from config import Settings

from .base import BaseLLMService, LLMError

logger = logging.getLogger(__name__)


class AnthropicService(BaseLLMService):
    """Claude LLM service via Anthropic API."""

    provider = "anthropic"

    def __init__(self, settings: Settings, model: str | None = None) -> None:
        super().__init__(settings, model)

        self._client = AsyncAnthropic(
            api_key=settings.anthropic_api_key,
            timeout=httpx.Timeout(timeout=settings.llm_timeout, connect=10.0),
        )

    async def generate(
        self,
        prompt: str,
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a response using Claude."""
        try:
            response = await self._client.messages.create(
                model=model or self.model,
                max_tokens=max_tokens or self.settings.llm_max_tokens,
                temperature=self._temperature(temperature),
                messages=[{"role": "user", "content": prompt}],
            )
        except RateLimitError as e:
            logger.warning("Rate limit: %s", e)
            raise LLMError("Rate limit exceeded. Please try again.") from e
        except APIError as e:
            logger.error("API error: %s", e)
            raise LLMError(f"LLM error: {e}") from e

        text = "".join(
            block.text for block in response.content if block.type == "text"
        )
        if not text:
            raise LLMError("Claude returned an empty response")
        return text

    async def aclose(self) -> None:
        await self._client.close()
