"""Shared types and dataclasses for services.

Sources are immutable once submitted; messages are never mutated after
creation.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, runtime_checkable


class IngestionStatus(str, Enum):
    """Ingestion status of the current conversation."""

    IDLE = "IDLE"
    PROCESSING = "PROCESSING"
    READY = "READY"
    ERROR = "ERROR"


class Sender(str, Enum):
    """Author of a transcript message."""

    USER = "user"
    BOT = "bot"


@runtime_checkable
class FileHandle(Protocol):
    """Opaque uploaded file: a name, a declared content type and its bytes.

    FastAPI's UploadFile satisfies this protocol.
    """

    filename: str | None
    content_type: str | None

    async def read(self) -> bytes: ...


@dataclass(frozen=True)
class FileSource:
    """A user-supplied file."""

    name: str
    mime_type: str
    data: bytes = field(repr=False)

    @classmethod
    async def from_handle(cls, handle: FileHandle) -> "FileSource":
        """Read an uploaded file handle into a source.

        Raises whatever the handle raises on read; this is an I/O failure of
        the batch, not an extraction failure.
        """
        data = await handle.read()
        return cls(
            name=handle.filename or "document",
            mime_type=handle.content_type or "",
            data=data,
        )


@dataclass(frozen=True)
class UrlSource:
    """A user-supplied web or video link."""

    address: str


Source = FileSource | UrlSource


@dataclass(frozen=True)
class Message:
    """A single transcript message."""

    text: str
    sender: Sender
    id: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            object.__setattr__(self, "id", f"{self.sender.value}-{uuid.uuid4()}")
