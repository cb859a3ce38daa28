"""URL safety gate applied before any URL is extracted.

A rejected URL is skipped on its own; the rest of the batch is unaffected.
"""

import logging
from typing import Protocol
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)


class SafetyGate(Protocol):
    """Decides whether a URL may be extracted."""

    async def is_safe(self, url: str) -> bool: ...


class AllowAllSafetyGate:
    """Accepts every URL."""

    async def is_safe(self, url: str) -> bool:
        logger.debug("Verifying URL safety for: %s", url)
        return True


class BlocklistSafetyGate:
    """Rejects URLs whose host, or any parent domain of it, is blocklisted."""

    def __init__(self, blocked_hosts: list[str]) -> None:
        self.blocked_hosts = frozenset(h.lower().strip(".") for h in blocked_hosts)

    async def is_safe(self, url: str) -> bool:
        host = _host_of(url)
        if not host:
            return True

        labels = host.split(".")
        for i in range(len(labels)):
            if ".".join(labels[i:]) in self.blocked_hosts:
                logger.info("URL rejected by blocklist: %s", url)
                return False
        return True


def _host_of(url: str) -> str:
    """Extract the lowercase host, tolerating URLs without a scheme."""
    if "://" not in url:
        url = f"http://{url}"
    try:
        return (urlsplit(url).hostname or "").lower()
    except ValueError:
        return ""
