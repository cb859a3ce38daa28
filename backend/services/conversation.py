"""Conversation controller - ingestion status and chat transcript.

State machine:
    IDLE -> PROCESSING -> READY | ERROR
    READY | ERROR -> PROCESSING (on a new batch of sources)

The document context is non-empty only while READY. Questions reach the
answer generator only while READY and never more than one at a time.
"""

import asyncio
import logging
from collections.abc import Sequence

from services.aggregator import SourceAggregator
from services.answer import AnswerGenerator
from services.types import (
    FileHandle,
    FileSource,
    IngestionStatus,
    Message,
    Sender,
    Source,
    UrlSource,
)

logger = logging.getLogger(__name__)

GREETING_MESSAGE = Message(
    id="initial-message",
    text=(
        "Hello! I am DocuMind. Please upload your documents or add URLs, and I "
        "will answer any questions you have about their content."
    ),
    sender=Sender.BOT,
)
PROCESSING_FAILED_TEXT = (
    "I apologize, but there was an error processing your sources. Please try again."
)
REPLY_FAILED_TEXT = "Sorry, I encountered an error. Please try asking again."


def ready_message_text(file_count: int, url_count: int) -> str:
    """Summary shown once a batch has been processed."""
    if file_count > 0 and url_count > 0:
        done = f"{file_count} document(s) and {url_count} URL(s)"
    elif file_count > 0:
        done = f"{file_count} document(s)"
    elif url_count > 0:
        done = f"{url_count} URL(s)"
    else:
        done = "your sources"
    return f"I have finished processing {done}. What would you like to know?"


class ReplySlot:
    """Single-slot guard allowing at most one outstanding bot reply.

    acquire() never waits: it either takes the free slot or reports that a
    reply is already in flight.
    """

    def __init__(self) -> None:
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    def try_acquire(self) -> bool:
        if self._busy:
            return False
        self._busy = True
        return True

    def release(self) -> None:
        self._busy = False


class ConversationController:
    """Coordinates source processing and question answering for one session."""

    def __init__(
        self,
        aggregator: SourceAggregator,
        answer_generator: AnswerGenerator,
    ) -> None:
        self.aggregator = aggregator
        self.answer_generator = answer_generator

        self.status = IngestionStatus.IDLE
        self.document_context = ""
        self._messages: list[Message] = []
        self._reply_slot = ReplySlot()

    @property
    def messages(self) -> list[Message]:
        """Stored transcript (copy)."""
        return list(self._messages)

    @property
    def is_bot_replying(self) -> bool:
        return self._reply_slot.busy

    @property
    def is_ready(self) -> bool:
        return self.status is IngestionStatus.READY

    def display_messages(self) -> list[Message]:
        """Transcript to present, or the greeting when it is empty."""
        return self.messages if self._messages else [GREETING_MESSAGE]

    async def submit_sources(
        self,
        files: Sequence[FileHandle | FileSource],
        urls: Sequence[str],
    ) -> bool:
        """Process a new batch of sources, replacing the current context.

        Returns False when the call was ignored: empty batch, a batch already
        processing, or a reply still in flight.
        """
        if not files and not urls:
            return False
        if self.status is IngestionStatus.PROCESSING or self.is_bot_replying:
            logger.warning("Ignoring source submission while busy (%s)", self.status)
            return False

        self._messages = []
        self.document_context = ""
        self.status = IngestionStatus.PROCESSING

        try:
            sources = await self._build_sources(files, urls)
            context = await self.aggregator.aggregate(sources)
        except asyncio.CancelledError:
            logger.warning("Source processing cancelled")
            self._mark_failed()
            raise
        except Exception:
            logger.exception("Error processing sources")
            self._mark_failed()
            return True

        self.document_context = context
        self.status = IngestionStatus.READY
        self._messages = [
            Message(
                id="ready-message",
                text=ready_message_text(len(files), len(urls)),
                sender=Sender.BOT,
            )
        ]
        logger.info(
            "Processed %d file(s) and %d URL(s) into %d chars of context",
            len(files),
            len(urls),
            len(context),
        )
        return True

    async def submit_question(self, text: str) -> Message | None:
        """Ask a question about the processed sources.

        The user message is appended before the backend is called. Returns the
        bot reply, or None when the question was ignored (blank text, not
        ready, or a reply already in flight).
        """
        if not text.strip() or not self.is_ready:
            return None
        if not self._reply_slot.try_acquire():
            logger.debug("Reply in flight, ignoring question")
            return None

        try:
            self._messages.append(Message(text=text, sender=Sender.USER))
            try:
                answer = await self.answer_generator.answer(self.document_context, text)
                reply = Message(text=answer, sender=Sender.BOT)
            except Exception:
                logger.exception("Error sending message")
                reply = Message(text=REPLY_FAILED_TEXT, sender=Sender.BOT)
            self._messages.append(reply)
            return reply
        finally:
            self._reply_slot.release()

    def _mark_failed(self) -> None:
        self.document_context = ""
        self.status = IngestionStatus.ERROR
        self._messages = [
            Message(id="error-message", text=PROCESSING_FAILED_TEXT, sender=Sender.BOT)
        ]

    async def _build_sources(
        self,
        files: Sequence[FileHandle | FileSource],
        urls: Sequence[str],
    ) -> list[Source]:
        """Read uploaded handles and build sources in submission order."""
        file_sources = await asyncio.gather(*(_as_file_source(f) for f in files))
        return [*file_sources, *(UrlSource(address=u) for u in urls)]


async def _as_file_source(file: FileHandle | FileSource) -> FileSource:
    if isinstance(file, FileSource):
        return file
    return await FileSource.from_handle(file)
