"""Sources module - file and URL ingestion."""

from apps.sources.routes import router

__all__ = ["router"]
