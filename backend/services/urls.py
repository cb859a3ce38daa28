"""URL text extraction.

Every URL passes the safety gate first. Video links are resolved through a
transcript provider; other pages return mocked content, since fetching them
needs a server-side scraper.
"""

import asyncio
import logging
import re

from services.safety import AllowAllSafetyGate, SafetyGate
from services.transcripts import MockTranscriptProvider, TranscriptProvider
from services.types import UrlSource

logger = logging.getLogger(__name__)

YOUTUBE_URL_RE = re.compile(
    r"^(?:https?://)?(?:www\.)?(?:youtube\.com/watch\?v=|youtu\.be/)([\w-]{11})(?:&.*)?$"
)

MOCK_PAGE_TEXT = (
    "This web page contains an article about the latest trends in renewable "
    "energy. It highlights recent advancements in solar panel efficiency and wind "
    "turbine technology. The article concludes that sustainable energy sources are "
    "becoming increasingly cost-competitive."
)


def match_video_id(url: str) -> str | None:
    """Return the video id of a YouTube watch or short link."""
    match = YOUTUBE_URL_RE.match(url)
    return match.group(1) if match else None


class UrlExtractor:
    """Extracts text for a URL source."""

    def __init__(
        self,
        safety_gate: SafetyGate | None = None,
        transcripts: TranscriptProvider | None = None,
        transcript_timeout: float | None = None,
    ) -> None:
        self.safety_gate = safety_gate or AllowAllSafetyGate()
        self.transcripts = transcripts or MockTranscriptProvider()
        self.transcript_timeout = transcript_timeout

    async def extract(self, source: UrlSource) -> str:
        url = source.address

        try:
            safe = await self.safety_gate.is_safe(url)
        except Exception as e:
            logger.error("Safety check failed for %s: %s", url, e)
            safe = False
        if not safe:
            return f"[Skipped potentially unsafe URL: {url}]"

        video_id = match_video_id(url)
        if video_id:
            return await self._fetch_transcript(video_id)

        return f"[Mocked content from URL: {url}]\n\n{MOCK_PAGE_TEXT}"

    async def _fetch_transcript(self, video_id: str) -> str:
        try:
            return await asyncio.wait_for(
                self.transcripts.fetch(video_id), timeout=self.transcript_timeout
            )
        except Exception as e:
            logger.error("Failed to fetch transcript for %s: %s", video_id, e)
            return f"[Error fetching transcript for video: {video_id}]"
