"""POST /sources - Submit files and URLs for processing."""

import logging
import uuid

from fastapi import Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse

from apps.chat.models import ConversationState
from config import Settings, get_settings
from dependencies import get_conversation
from responses import ResponseCode, error_response, success_response
from services import ConversationController, IngestionStatus

logger = logging.getLogger(__name__)


async def submit_sources(
    files: list[UploadFile] | None = File(default=None),
    urls: list[str] | None = Form(default=None),
    conversation: ConversationController = Depends(get_conversation),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Process a new batch of sources, replacing the current document context.

    Flow:
    1. Validate the batch (non-empty, file sizes)
    2. Extract text from every source concurrently
    3. Seed the transcript with a summary or an apology
    """
    request_id = str(uuid.uuid4())[:8]
    files = files or []
    urls = [u.strip() for u in urls or [] if u.strip()]

    logger.info("[%s] Sources: %d file(s), %d URL(s)", request_id, len(files), len(urls))

    if not files and not urls:
        return error_response(ResponseCode.NO_SOURCES, request_id=request_id)

    for file in files:
        if file.size is not None and file.size > settings.max_file_size_bytes:
            return error_response(
                ResponseCode.FILE_TOO_LARGE,
                f"File {file.filename} exceeds limit of {settings.max_file_size_mb}MB",
                request_id,
            )

    if conversation.status is IngestionStatus.PROCESSING:
        return error_response(ResponseCode.PROCESSING_IN_PROGRESS, request_id=request_id)
    if conversation.is_bot_replying:
        return error_response(ResponseCode.BOT_BUSY, request_id=request_id)

    await conversation.submit_sources(files, urls)
    state = ConversationState.from_controller(conversation).model_dump()

    if conversation.status is IngestionStatus.ERROR:
        logger.error("[%s] Source processing failed", request_id)
        return error_response(
            ResponseCode.PROCESSING_FAILED,
            request_id=request_id,
            error_details={"conversation": state},
        )

    logger.info(
        "[%s] Processed (%d chars of context)",
        request_id,
        len(conversation.document_context),
    )
    return success_response(ResponseCode.SOURCES_PROCESSED, state, request_id)
