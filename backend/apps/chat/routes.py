"""Chat routes - registers all chat endpoints."""

from fastapi import APIRouter

from apps.chat.handlers import get_messages, send_message
from apps.chat.models import ConversationState

router = APIRouter(prefix="/chat", tags=["Chat"])

# POST /chat - Ask a question
router.post("")(send_message)

# GET /chat/messages - Get transcript
router.get("/messages", response_model=ConversationState)(get_messages)
