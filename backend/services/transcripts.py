"""Video transcript providers.

Fetching real transcripts needs a server-side integration; the mock provider
returns one of a few canned transcripts chosen deterministically from the
video id.
"""

import asyncio
import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class TranscriptProvider(Protocol):
    """Returns the transcript text of a video."""

    async def fetch(self, video_id: str) -> str: ...


MOCK_TRANSCRIPTS: list[tuple[str, str]] = [
    (
        "Tech Review Video",
        "Welcome back to the channel! Today, we're unboxing the new 'Pixel Pro 10'. "
        "The screen is absolutely stunning with a 120Hz refresh rate. In our tests, "
        "the battery lasted a full day with heavy usage, which is a huge improvement. "
        "The camera system is where this phone really shines. The new 'Magic Erase' "
        "feature works like a charm, and low-light photos are crisp and clear. "
        "Overall, if you're in the market for a high-end smartphone, the Pixel Pro 10 "
        "should be at the top of your list.",
    ),
    (
        "Cooking Tutorial",
        "Hi everyone, and welcome to my kitchen! Today we're making a classic lasagna. "
        "First, you'll want to brown your ground beef with some onion and garlic. "
        "While that's cooking, let's prepare our ricotta mixture. Combine ricotta "
        "cheese, one egg, parmesan, and some parsley. Now it's time to layer: start "
        "with a thin layer of your meat sauce, then a layer of noodles, followed by "
        "the ricotta mixture and mozzarella. Repeat those layers and bake at 375 "
        "degrees for about 45 minutes until it's golden and bubbly. Enjoy!",
    ),
    (
        "Financial Advice Video",
        "Let's talk about building a diversified investment portfolio. One of the "
        "core principles is not to put all your eggs in one basket. We recommend a "
        "mix of stocks, bonds, and real estate. For beginners, a great starting "
        "point is a low-cost index fund that tracks the S&P 500. This gives you "
        "instant diversification across 500 of the largest U.S. companies. Remember "
        "to think long-term and avoid panic selling during market downturns. "
        "Consistency is key.",
    ),
    (
        "Travel Vlog",
        "What's up, adventurers! We've just landed in Kyoto, Japan, during the "
        "cherry blossom season, and it is absolutely breathtaking. Our first stop "
        "was the Fushimi Inari shrine with its thousands of iconic red torii gates. "
        "It was a bit of a hike, but the views from the top were totally worth it. "
        "For lunch, we had some of the best ramen I've ever tasted at a small shop "
        "near the Nishiki Market. Tomorrow, we're heading to the Arashiyama Bamboo "
        "Grove. Make sure you subscribe so you don't miss it!",
    ),
]


class MockTranscriptProvider:
    """Serves canned transcripts after a simulated network delay."""

    def __init__(self, delay: float = 0.8) -> None:
        self.delay = delay

    @staticmethod
    def pick(video_id: str) -> int:
        """Index of the canned transcript for a video id."""
        return sum(ord(c) for c in video_id) % len(MOCK_TRANSCRIPTS)

    async def fetch(self, video_id: str) -> str:
        logger.info("Fetching mock transcript for video ID: %s", video_id)
        topic, content = MOCK_TRANSCRIPTS[self.pick(video_id)]

        if self.delay > 0:
            await asyncio.sleep(self.delay)

        return f"[Mock Transcript for {topic}: {video_id}]\n\n{content}"
