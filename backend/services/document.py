"""File text extraction for PDF, Word, and text files.

Handles:
- Dispatch on the declared content type of an uploaded file
- Text extraction from PDF (PyMuPDF) and optionally DOCX (python-docx)
- Placeholder text for anything that cannot be parsed

Extraction never raises: failures are logged and returned as descriptive
placeholder text so one bad file cannot fail a batch. Blocking parser calls
are wrapped with asyncio.to_thread.
"""

import asyncio
import io
import logging
from collections.abc import Awaitable, Callable

import fitz  # PyMuPDF
from docx import Document as DocxDocument

from services.types import FileSource

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"
TEXT_MIME = "text/plain"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

MOCK_DOCX_TEXT = (
    "A report on quarterly earnings shows a 15% increase in revenue, primarily "
    "driven by the new AI products division. The report also projects strong "
    "growth for the upcoming fiscal year."
)


class DocumentParseError(Exception):
    """Raised when document parsing fails."""

    pass


def decode_text(data: bytes) -> str:
    """Decode bytes as UTF-8, falling back to Latin-1."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1")


class FileExtractor:
    """Extracts plain text from a file source based on its content type."""

    def __init__(self, parse_docx: bool = False) -> None:
        """Initialize file extractor.

        Args:
            parse_docx: Parse Word documents with python-docx. When False a
                fixed placeholder stands in for the document text.
        """
        self.parse_docx = parse_docx
        self._handlers: dict[str, Callable[[FileSource], Awaitable[str]]] = {
            TEXT_MIME: self._extract_text,
            PDF_MIME: self._extract_pdf,
            DOCX_MIME: self._extract_docx,
        }

    async def extract(self, source: FileSource) -> str:
        """Extract text from a file source."""
        mime_type = source.mime_type.split(";")[0].strip().lower()
        handler = self._handlers.get(mime_type, self._extract_unsupported)
        logger.debug("Extracting %s as %s", source.name, mime_type or "unknown")
        return await handler(source)

    async def _extract_text(self, source: FileSource) -> str:
        return decode_text(source.data)

    async def _extract_pdf(self, source: FileSource) -> str:
        try:
            pages = await asyncio.to_thread(self._parse_pdf_sync, source.data)
        except DocumentParseError as e:
            logger.error("Error parsing PDF %s: %s", source.name, e)
            return (
                f"[Error processing PDF: {source.name}. The file might be corrupted, "
                "protected, or an issue with the parsing library.]"
            )

        text = "\n\n".join(pages).strip()
        return f"[Content from PDF: {source.name}]\n\n{text}"

    async def _extract_docx(self, source: FileSource) -> str:
        if not self.parse_docx:
            return f"[Mocked text from DOCX: {source.name}]\n\n{MOCK_DOCX_TEXT}"

        try:
            text = await asyncio.to_thread(self._parse_docx_sync, source.data)
        except DocumentParseError as e:
            logger.error("Error parsing DOCX %s: %s", source.name, e)
            return (
                f"[Error processing DOCX: {source.name}. The file might be corrupted "
                "or not a valid Word document.]"
            )

        return f"[Content from DOCX: {source.name}]\n\n{text}"

    async def _extract_unsupported(self, source: FileSource) -> str:
        logger.info(
            "Unsupported content type '%s' for %s, reading as text",
            source.mime_type,
            source.name,
        )
        return (
            f"[Content from unsupported file: {source.name}]\n\n"
            f"Attempting to read as text: {decode_text(source.data)}"
        )

    def _parse_pdf_sync(self, data: bytes) -> list[str]:
        """Parse PDF bytes using PyMuPDF (synchronous).

        Returns one string per page: the page's text runs joined by a space.
        """
        doc = None
        try:
            doc = fitz.open(stream=data, filetype="pdf")
            if doc.needs_pass:
                raise DocumentParseError("PDF is password protected")

            pages = []
            for page in doc:
                runs = [
                    span["text"]
                    for block in page.get_text("dict")["blocks"]
                    for line in block.get("lines", [])
                    for span in line.get("spans", [])
                ]
                pages.append(" ".join(runs))
            return pages

        except DocumentParseError:
            raise
        except Exception as e:
            raise DocumentParseError(f"Failed to parse PDF: {e}") from e
        finally:
            if doc is not None:
                doc.close()

    def _parse_docx_sync(self, data: bytes) -> str:
        """Parse Word document bytes using python-docx (synchronous)."""
        try:
            doc = DocxDocument(io.BytesIO(data))
            text_parts = []

            # Extract paragraphs
            for p in doc.paragraphs:
                if p.text.strip():
                    text_parts.append(p.text)

            # Extract tables
            for table in doc.tables:
                for row in table.rows:
                    row_text = " | ".join(cell.text.strip() for cell in row.cells)
                    if row_text.strip():
                        text_parts.append(row_text)

            return "\n\n".join(text_parts)

        except Exception as e:
            raise DocumentParseError(f"Failed to parse DOCX: {e}") from e
