"""POST /chat - Ask a question about the processed sources."""

import logging
import uuid

from fastapi import Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from apps.chat.models import ConversationState, MessageSchema
from dependencies import get_conversation
from responses import ResponseCode, error_response, success_response
from services import ConversationController

logger = logging.getLogger(__name__)


# --- Request Schema ---


class ChatRequest(BaseModel):
    """Request body for chat endpoint."""

    question: str = Field(
        ...,
        min_length=1,
        max_length=2000,
        description="Natural language question about the documents",
    )


# --- Handler ---


async def send_message(
    request: ChatRequest,
    conversation: ConversationController = Depends(get_conversation),
) -> JSONResponse:
    """Send a question and wait for the grounded answer.

    A question sent while another reply is in flight is ignored and reported
    as BOT_BUSY; it is never queued.
    """
    request_id = str(uuid.uuid4())[:8]
    logger.info("[%s] Chat request: %s", request_id, request.question[:100])

    if not request.question.strip():
        return error_response(
            ResponseCode.VALIDATION_ERROR, "Question cannot be blank", request_id
        )
    if not conversation.is_ready:
        return error_response(ResponseCode.CHAT_NOT_READY, request_id=request_id)

    reply = await conversation.submit_question(request.question)
    if reply is None:
        logger.info("[%s] Ignored: reply already in flight", request_id)
        return error_response(ResponseCode.BOT_BUSY, request_id=request_id)

    return success_response(
        ResponseCode.ANSWER_GENERATED,
        {
            "reply": MessageSchema.from_message(reply).model_dump(),
            "conversation": ConversationState.from_controller(conversation).model_dump(),
        },
        request_id,
    )
