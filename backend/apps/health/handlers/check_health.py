"""GET /health - Report service status."""

from datetime import UTC, datetime

from fastapi import Depends
from pydantic import BaseModel, Field

from config import APP_VERSION, Settings, get_settings
from dependencies import get_conversation
from services import ConversationController

# --- Response Schemas ---


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Environment name")
    llm_provider: str = Field(..., description="Configured LLM backend")
    llm_model: str = Field(..., description="Configured model identifier")
    ingestion_status: str = Field(..., description="Current conversation status")
    timestamp: datetime


# --- Handler ---


async def check_health(
    settings: Settings = Depends(get_settings),
    conversation: ConversationController = Depends(get_conversation),
) -> HealthResponse:
    """Report configuration and conversation status."""
    return HealthResponse(
        status="healthy",
        version=APP_VERSION,
        environment=settings.environment,
        llm_provider=settings.llm_provider,
        llm_model=settings.llm_model,
        ingestion_status=conversation.status.value,
        timestamp=datetime.now(UTC),
    )
