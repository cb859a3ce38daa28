"""Chat API schemas."""

from apps.chat.models.message import ConversationState, MessageSchema

__all__ = ["ConversationState", "MessageSchema"]
