"""Services module for source ingestion and question answering.

Contains the core services behind the API:
- File and URL text extraction
- URL safety gate and transcript providers
- Source aggregation into a document context
- Grounded answer generation
- Conversation state machine

Note: Service instances are managed via dependencies.py using FastAPI DI.
"""

from services.aggregator import DOCUMENT_SEPARATOR, SourceAggregator, SourceExtractor
from services.answer import AnswerGenerator
from services.conversation import ConversationController, ReplySlot
from services.document import DocumentParseError, FileExtractor
from services.safety import AllowAllSafetyGate, BlocklistSafetyGate, SafetyGate
from services.transcripts import MockTranscriptProvider, TranscriptProvider
from services.types import (
    FileHandle,
    FileSource,
    IngestionStatus,
    Message,
    Sender,
    Source,
    UrlSource,
)
from services.urls import UrlExtractor

__all__ = [
    # Core services
    "AnswerGenerator",
    "ConversationController",
    "ReplySlot",
    "SourceAggregator",
    "SourceExtractor",
    "DOCUMENT_SEPARATOR",
    # Extraction
    "FileExtractor",
    "DocumentParseError",
    "UrlExtractor",
    "SafetyGate",
    "AllowAllSafetyGate",
    "BlocklistSafetyGate",
    "TranscriptProvider",
    "MockTranscriptProvider",
    # Types
    "FileHandle",
    "FileSource",
    "UrlSource",
    "Source",
    "IngestionStatus",
    "Message",
    "Sender",
]
