"""GET /chat/messages - Get the current transcript."""

from fastapi import Depends

from apps.chat.models import ConversationState
from dependencies import get_conversation
from services import ConversationController


async def get_messages(
    conversation: ConversationController = Depends(get_conversation),
) -> ConversationState:
    """Get ingestion status and the messages to display."""
    return ConversationState.from_controller(conversation)
