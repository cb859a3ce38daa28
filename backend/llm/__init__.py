"""LLM module - unified interface for language model interactions.

Usage:
    from llm import create_llm_service

    llm = create_llm_service(settings)
    response = await llm.generate(prompt)

Structure:
    - base.py: Abstract interface (BaseLLMService)
    - anthropic.py: Claude implementation (AnthropicService)
    - gemini.py: Gemini implementation (GeminiService)
"""

from config import Settings
from llm.anthropic import AnthropicService
from llm.base import BaseLLMService, LLMError
from llm.gemini import GeminiService
from llm.prompts import NOT_FOUND_ANSWER, build_document_qa_prompt

PROVIDERS: dict[str, type[BaseLLMService]] = {
    "anthropic": AnthropicService,
    "gemini": GeminiService,
}


def create_llm_service(settings: Settings) -> BaseLLMService:
    """Build the LLM service for the configured provider."""
    return PROVIDERS[settings.llm_provider](settings)


__all__ = [
    "BaseLLMService",
    "LLMError",
    "AnthropicService",
    "GeminiService",
    "PROVIDERS",
    "create_llm_service",
    "NOT_FOUND_ANSWER",
    "build_document_qa_prompt",
]
