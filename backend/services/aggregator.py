"""Source aggregation into a single document context.

Extracts every source of a batch concurrently and joins the results in input
order. Extractors are registered per source type, so new kinds of source do
not require changes here.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any, Protocol

from services.document import FileExtractor
from services.types import FileSource, Source, UrlSource
from services.urls import UrlExtractor

logger = logging.getLogger(__name__)

DOCUMENT_SEPARATOR = "\n\n--- DOCUMENT SEPARATOR ---\n\n"


class SourceExtractor(Protocol):
    """Turns one source into text without raising on extraction failure."""

    async def extract(self, source: Any) -> str: ...


class SourceAggregator:
    """Runs extraction across a batch of heterogeneous sources."""

    def __init__(
        self,
        file_extractor: SourceExtractor | None = None,
        url_extractor: SourceExtractor | None = None,
    ) -> None:
        self._extractors: dict[type, SourceExtractor] = {
            FileSource: file_extractor or FileExtractor(),
            UrlSource: url_extractor or UrlExtractor(),
        }

    @property
    def source_types(self) -> list[type]:
        return list(self._extractors)

    def register(self, source_type: type, extractor: SourceExtractor) -> None:
        """Register or replace the extractor for a source type."""
        self._extractors[source_type] = extractor

    def extractor_for(self, source: Source) -> SourceExtractor:
        try:
            return self._extractors[type(source)]
        except KeyError:
            raise TypeError(
                f"No extractor registered for {type(source).__name__}"
            ) from None

    async def aggregate(self, sources: Sequence[Source]) -> str:
        """Extract all sources and join them into one document context.

        Returns an empty string for an empty batch without calling any
        extractor. gather() keeps results in input order regardless of which
        extraction finishes first.
        """
        if not sources:
            return ""

        logger.info("Processing %d source(s)", len(sources))
        texts = await asyncio.gather(
            *(self.extractor_for(s).extract(s) for s in sources)
        )
        return DOCUMENT_SEPARATOR.join(texts)
