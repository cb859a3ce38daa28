"""Pytest configuration and fixtures for DocuMind tests."""

import io
import os
import sys

# Set required env vars BEFORE any imports that might trigger Settings
os.environ.setdefault("DOCUMIND_ANTHROPIC_API_KEY", "test-anthropic-key")
os.environ.setdefault("DOCUMIND_TRANSCRIPT_DELAY", "0")

from unittest.mock import AsyncMock, MagicMock

import pytest

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from config import Settings  # noqa: E402
from services import (  # noqa: E402
    AnswerGenerator,
    ConversationController,
    FileSource,
    MockTranscriptProvider,
    SourceAggregator,
    UrlExtractor,
)

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class FakeUpload:
    """Minimal file handle matching the FileHandle protocol."""

    def __init__(self, filename, content_type, data=b"", error=None):
        self.filename = filename
        self.content_type = content_type
        self._data = data
        self._error = error

    async def read(self):
        if self._error is not None:
            raise self._error
        return self._data


@pytest.fixture
def settings():
    """Explicit settings instance, independent of the environment."""
    return Settings(
        anthropic_api_key="test-anthropic-key",
        transcript_delay=0,
        _env_file=None,
    )


@pytest.fixture
def mock_llm():
    """Mock LLM backend."""
    llm = MagicMock()
    llm.model = "claude-sonnet-4-20250514"
    llm.generate = AsyncMock(return_value="  The answer is 42.  ")
    llm.aclose = AsyncMock()
    return llm


@pytest.fixture
def aggregator():
    """Aggregator with an instant transcript provider."""
    return SourceAggregator(
        url_extractor=UrlExtractor(transcripts=MockTranscriptProvider(delay=0))
    )


@pytest.fixture
def controller(aggregator, mock_llm):
    """Conversation controller backed by the mock LLM."""
    return ConversationController(
        aggregator=aggregator,
        answer_generator=AnswerGenerator(mock_llm),
    )


def make_pdf(pages, password=None):
    """Build an in-memory PDF with one line of text per page."""
    import fitz

    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text)
    if password:
        data = doc.tobytes(
            encryption=fitz.PDF_ENCRYPT_AES_256,
            user_pw=password,
            owner_pw=password + "-owner",
        )
    else:
        data = doc.tobytes()
    doc.close()
    return data


def make_docx(paragraphs, table_rows=None):
    """Build an in-memory DOCX document."""
    from docx import Document

    doc = Document()
    for p in paragraphs:
        doc.add_paragraph(p)
    if table_rows:
        table = doc.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for r, row in enumerate(table_rows):
            for c, value in enumerate(row):
                table.cell(r, c).text = value
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


@pytest.fixture
def text_file():
    return FileSource(name="notes.txt", mime_type="text/plain", data=b"Plain notes.")


@pytest.fixture
def pdf_file():
    return FileSource(
        name="report.pdf",
        mime_type=PDF_MIME,
        data=make_pdf(["Quarterly revenue grew", "Outlook is positive"]),
    )
