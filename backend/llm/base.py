"""Base LLM service interface.

Defines the contract that all LLM providers must implement.
"""

from abc import ABC, abstractmethod

from config import Settings


class LLMError(Exception):
    """Raised when LLM generation fails."""


class BaseLLMService(ABC):
    """Abstract base class for LLM services.

    Providers receive their Settings at construction time; no client is
    created at import time.
    """

    provider: str = ""

    def __init__(self, settings: Settings, model: str | None = None) -> None:
        self.settings = settings
        self.model = model or settings.llm_model

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a single completion for a fully formed prompt.

        Args:
            prompt: Complete prompt text.
            model: Override model identifier.
            temperature: Sampling temperature (0-1).
            max_tokens: Maximum tokens to generate.

        Returns:
            Generated text.

        Raises:
            LLMError: If the provider call fails or returns no text.
        """

    async def aclose(self) -> None:
        """Release provider resources."""

    def _temperature(self, temperature: float | None) -> float:
        return temperature if temperature is not None else self.settings.llm_temperature
