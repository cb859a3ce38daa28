"""Google Gemini LLM implementation over the Generative Language REST API."""

import logging
from typing import Any

import httpx

from config import Settings

from .base import BaseLLMService, LLMError

logger = logging.getLogger(__name__)

GENERATE_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"


class GeminiService(BaseLLMService):
    """Gemini LLM service using plain httpx calls."""

    provider = "gemini"

    def __init__(
        self,
        settings: Settings,
        model: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(settings, model)
        self.api_key = settings.google_api_key
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout=settings.llm_timeout, connect=10.0)
        )

    async def generate(
        self,
        prompt: str,
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a response using Gemini generateContent."""
        use_model = model or self.model
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self._temperature(temperature),
                "maxOutputTokens": max_tokens or self.settings.llm_max_tokens,
            },
        }

        try:
            response = await self._client.post(
                GENERATE_URL.format(model=use_model),
                headers=headers,
                json=payload,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 429:
                logger.warning("Rate limit: %s", e)
                raise LLMError("Rate limit exceeded. Please try again.") from e
            logger.error("API error: %s", e)
            raise LLMError(f"LLM error: {e}") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Request to Gemini failed: %s", e)
            raise LLMError(f"LLM request failed: {e}") from e

        return self._extract_text(data)

    def _extract_text(self, data: dict[str, Any]) -> str:
        """Extract concatenated text parts from the first candidate."""
        candidates = data.get("candidates") or []
        if not candidates:
            feedback = data.get("promptFeedback", {})
            raise LLMError(f"Gemini returned no candidates: {feedback}")

        parts = candidates[0].get("content", {}).get("parts", [])
        text = "".join(p.get("text", "") for p in parts if isinstance(p, dict))
        if not text:
            raise LLMError("Gemini returned an empty response")
        return text

    async def aclose(self) -> None:
        await self._client.aclose()
