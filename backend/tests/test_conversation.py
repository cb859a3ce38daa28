"""Tests for the conversation controller state machine."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import FakeUpload, make_pdf
from services.aggregator import DOCUMENT_SEPARATOR
from services.answer import AnswerGenerator
from services.conversation import (
    GREETING_MESSAGE,
    PROCESSING_FAILED_TEXT,
    REPLY_FAILED_TEXT,
    ConversationController,
    ReplySlot,
    ready_message_text,
)
from services.types import FileSource, IngestionStatus, Sender


class TestReadyMessageText:
    """Tests for the batch summary wording."""

    def test_documents_only(self):
        assert ready_message_text(2, 0) == (
            "I have finished processing 2 document(s). What would you like to know?"
        )

    def test_urls_only(self):
        assert ready_message_text(0, 3) == (
            "I have finished processing 3 URL(s). What would you like to know?"
        )

    def test_documents_and_urls(self):
        assert ready_message_text(1, 1) == (
            "I have finished processing 1 document(s) and 1 URL(s). "
            "What would you like to know?"
        )

    def test_neither(self):
        assert ready_message_text(0, 0) == (
            "I have finished processing your sources. What would you like to know?"
        )


class TestReplySlot:
    """Tests for the single-slot in-flight guard."""

    def test_only_one_holder(self):
        slot = ReplySlot()
        assert slot.try_acquire() is True
        assert slot.busy is True
        assert slot.try_acquire() is False
        slot.release()
        assert slot.busy is False
        assert slot.try_acquire() is True


class TestSubmitSources:
    """Tests for ConversationController.submit_sources."""

    @pytest.mark.asyncio
    async def test_initial_state(self, controller):
        assert controller.status is IngestionStatus.IDLE
        assert controller.document_context == ""
        assert controller.messages == []
        assert controller.display_messages() == [GREETING_MESSAGE]

    @pytest.mark.asyncio
    async def test_empty_batch_is_noop(self, mock_llm):
        aggregator = MagicMock()
        aggregator.aggregate = AsyncMock()
        controller = ConversationController(aggregator, AnswerGenerator(mock_llm))

        assert await controller.submit_sources([], []) is False

        assert controller.status is IngestionStatus.IDLE
        assert controller.messages == []
        aggregator.aggregate.assert_not_called()

    @pytest.mark.asyncio
    async def test_success_sets_ready_and_context(self, controller, text_file, pdf_file):
        url = "https://example.com/post"

        assert await controller.submit_sources([text_file, pdf_file], [url]) is True

        assert controller.status is IngestionStatus.READY
        parts = controller.document_context.split(DOCUMENT_SEPARATOR)
        assert parts[0] == "Plain notes."
        assert parts[1].startswith("[Content from PDF: report.pdf]")
        assert parts[2].startswith(f"[Mocked content from URL: {url}]")

        messages = controller.messages
        assert len(messages) == 1
        assert messages[0].sender is Sender.BOT
        assert messages[0].text == ready_message_text(2, 1)
        assert controller.is_bot_replying is False

    @pytest.mark.asyncio
    async def test_reads_upload_handles(self, controller):
        upload = FakeUpload("slides.pdf", "application/pdf", make_pdf(["Hello deck"]))

        await controller.submit_sources([upload], [])

        assert controller.status is IngestionStatus.READY
        assert controller.document_context == (
            "[Content from PDF: slides.pdf]\n\nHello deck"
        )

    @pytest.mark.asyncio
    async def test_read_failure_sets_error(self, controller):
        upload = FakeUpload("a.txt", "text/plain", error=OSError("disk gone"))

        assert await controller.submit_sources([upload], []) is True

        assert controller.status is IngestionStatus.ERROR
        assert controller.document_context == ""
        assert [m.text for m in controller.messages] == [PROCESSING_FAILED_TEXT]
        assert controller.is_bot_replying is False

    @pytest.mark.asyncio
    async def test_aggregate_failure_discards_previous_context(
        self, controller, text_file
    ):
        await controller.submit_sources([text_file], [])
        assert controller.status is IngestionStatus.READY

        controller.aggregator.aggregate = AsyncMock(side_effect=MemoryError())
        await controller.submit_sources([text_file], [])

        assert controller.status is IngestionStatus.ERROR
        assert controller.document_context == ""
        assert len(controller.messages) == 1
        assert controller.messages[0].text == PROCESSING_FAILED_TEXT

    @pytest.mark.asyncio
    async def test_new_batch_replaces_transcript(self, controller, text_file):
        await controller.submit_sources([text_file], [])
        await controller.submit_question("What is in the notes?")
        assert len(controller.messages) == 3

        await controller.submit_sources([], ["https://example.com"])

        assert len(controller.messages) == 1
        assert controller.messages[0].text == ready_message_text(0, 1)
        assert "Plain notes." not in controller.document_context

    @pytest.mark.asyncio
    async def test_status_is_processing_during_aggregation(self, controller, text_file):
        seen = []

        async def slow_aggregate(sources):
            seen.append((controller.status, controller.messages))
            return "ctx"

        controller.aggregator.aggregate = slow_aggregate
        await controller.submit_sources([text_file], [])

        assert seen == [(IngestionStatus.PROCESSING, [])]

    @pytest.mark.asyncio
    async def test_ignored_while_processing(self, controller, text_file):
        release = asyncio.Event()

        async def blocked_aggregate(sources):
            await release.wait()
            return "ctx"

        controller.aggregator.aggregate = blocked_aggregate
        first = asyncio.create_task(controller.submit_sources([text_file], []))
        await asyncio.sleep(0)

        assert await controller.submit_sources([text_file], []) is False

        release.set()
        assert await first is True
        assert controller.status is IngestionStatus.READY

    @pytest.mark.asyncio
    async def test_cancelled_batch_can_be_resubmitted(self, controller, text_file):
        """Test a cancelled batch ends in ERROR and a new batch is accepted."""
        original_aggregate = controller.aggregator.aggregate
        started = asyncio.Event()

        async def hanging_aggregate(sources):
            started.set()
            await asyncio.Event().wait()

        controller.aggregator.aggregate = hanging_aggregate
        task = asyncio.create_task(controller.submit_sources([text_file], []))
        await started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert controller.status is IngestionStatus.ERROR
        assert controller.document_context == ""
        assert [m.id for m in controller.messages] == ["error-message"]

        controller.aggregator.aggregate = original_aggregate
        assert await controller.submit_sources([text_file], []) is True
        assert controller.status is IngestionStatus.READY
        assert controller.document_context == "Plain notes."


class TestSubmitQuestion:
    """Tests for ConversationController.submit_question."""

    @pytest.mark.asyncio
    async def test_ignored_before_ready(self, controller, mock_llm):
        assert await controller.submit_question("Hello?") is None
        assert controller.messages == []
        mock_llm.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_blank_question_ignored(self, controller, text_file, mock_llm):
        await controller.submit_sources([text_file], [])

        assert await controller.submit_question("   ") is None

        assert len(controller.messages) == 1
        mock_llm.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_question_and_answer_appended(self, controller, text_file, mock_llm):
        await controller.submit_sources([text_file], [])

        reply = await controller.submit_question("What do the notes say?")

        assert reply.text == "The answer is 42."
        assert reply.sender is Sender.BOT
        messages = controller.messages
        assert [m.sender for m in messages] == [Sender.BOT, Sender.USER, Sender.BOT]
        assert messages[1].text == "What do the notes say?"
        assert len({m.id for m in messages}) == 3
        assert controller.is_bot_replying is False
        prompt = mock_llm.generate.await_args.args[0]
        assert "Plain notes." in prompt

    @pytest.mark.asyncio
    async def test_duplicate_submission_while_pending(
        self, controller, text_file, mock_llm
    ):
        """Test a second question while one is pending is ignored, not queued."""
        await controller.submit_sources([text_file], [])
        release = asyncio.Event()

        async def slow_generate(prompt, **kwargs):
            await release.wait()
            return "done"

        mock_llm.generate.side_effect = slow_generate

        first = asyncio.create_task(controller.submit_question("First?"))
        await asyncio.sleep(0)

        # User message appended before the backend resolves
        assert controller.messages[-1].text == "First?"
        assert controller.is_bot_replying is True

        assert await controller.submit_question("Second?") is None

        release.set()
        reply = await first

        assert reply.text == "done"
        assert mock_llm.generate.await_count == 1
        assert [m.text for m in controller.messages[1:]] == ["First?", "done"]
        assert controller.is_bot_replying is False

    @pytest.mark.asyncio
    async def test_backend_failure_keeps_ready(self, controller, text_file, mock_llm):
        await controller.submit_sources([text_file], [])
        mock_llm.generate.side_effect = RuntimeError("boom")

        reply = await controller.submit_question("Q?")

        assert reply.text.startswith("I'm sorry, but I encountered an unexpected error")
        assert controller.status is IngestionStatus.READY
        assert controller.is_bot_replying is False

    @pytest.mark.asyncio
    async def test_generator_raising_still_releases_slot(self, controller, text_file):
        await controller.submit_sources([text_file], [])
        controller.answer_generator = MagicMock()
        controller.answer_generator.answer = AsyncMock(side_effect=RuntimeError("x"))

        reply = await controller.submit_question("Q?")

        assert reply.text == REPLY_FAILED_TEXT
        assert controller.is_bot_replying is False

    @pytest.mark.asyncio
    async def test_sources_ignored_while_replying(
        self, controller, text_file, mock_llm
    ):
        await controller.submit_sources([text_file], [])
        release = asyncio.Event()

        async def slow_generate(prompt, **kwargs):
            await release.wait()
            return "done"

        mock_llm.generate.side_effect = slow_generate
        pending = asyncio.create_task(controller.submit_question("Q?"))
        await asyncio.sleep(0)

        assert await controller.submit_sources([text_file], []) is False

        release.set()
        await pending
        assert controller.is_bot_replying is False

    @pytest.mark.asyncio
    async def test_display_does_not_mutate(self, controller):
        controller.display_messages()
        assert controller.messages == []


def test_file_source_is_immutable():
    source = FileSource("a.txt", "text/plain", b"x")
    with pytest.raises(AttributeError):
        source.name = "b.txt"
