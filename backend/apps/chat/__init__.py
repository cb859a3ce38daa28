"""Chat module - questions and transcript."""

from apps.chat.routes import router

__all__ = ["router"]
