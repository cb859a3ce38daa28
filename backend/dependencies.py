"""FastAPI dependency injection for services.

Services are cached with @lru_cache() so the process holds exactly one
conversation and one LLM client, configured once from Settings.
"""

from functools import lru_cache

from fastapi import Depends

from config import Settings, get_settings
from llm import BaseLLMService, create_llm_service
from services import (
    AllowAllSafetyGate,
    AnswerGenerator,
    BlocklistSafetyGate,
    ConversationController,
    FileExtractor,
    MockTranscriptProvider,
    SafetyGate,
    SourceAggregator,
    UrlExtractor,
)

# --- Cached Singletons ---
# These are created once and reused across all requests


@lru_cache
def get_llm_service() -> BaseLLMService:
    """Get cached LLM service (expensive - has API client)."""
    return create_llm_service(get_settings())


def build_safety_gate(settings: Settings) -> SafetyGate:
    """Blocklist gate when hosts are configured, otherwise allow everything."""
    if settings.blocked_host_list:
        return BlocklistSafetyGate(settings.blocked_host_list)
    return AllowAllSafetyGate()


def build_aggregator(settings: Settings) -> SourceAggregator:
    """Build the source aggregator with extractors configured from settings."""
    return SourceAggregator(
        file_extractor=FileExtractor(parse_docx=settings.parse_docx),
        url_extractor=UrlExtractor(
            safety_gate=build_safety_gate(settings),
            transcripts=MockTranscriptProvider(delay=settings.transcript_delay),
            transcript_timeout=settings.transcript_timeout,
        ),
    )


@lru_cache
def get_conversation_controller() -> ConversationController:
    """Get the process-wide conversation."""
    return ConversationController(
        aggregator=build_aggregator(get_settings()),
        answer_generator=AnswerGenerator(get_llm_service()),
    )


# --- Composed Services ---


def get_conversation(
    controller: ConversationController = Depends(get_conversation_controller),
) -> ConversationController:
    """Conversation dependency for route handlers.

    Overridable in tests via app.dependency_overrides.
    """
    return controller
