"""Source handlers."""

from apps.sources.handlers.submit_sources import submit_sources

__all__ = [
    "submit_sources",
]
