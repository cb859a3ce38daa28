"""Configuration and settings for DocuMind application.

Uses Pydantic Settings for fail-fast validation on startup.
The API key for the selected LLM provider is validated at load time.
"""

import logging
import sys
from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_VERSION = "0.1.0"

DEFAULT_MODELS: dict[str, str] = {
    "anthropic": "claude-sonnet-4-20250514",
    "gemini": "gemini-2.5-flash",
}


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("anthropic").setLevel(logging.WARNING)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Raises ValidationError on startup if the selected provider has no API key.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCUMIND_",
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # LLM provider
    llm_provider: Literal["anthropic", "gemini"] = Field(
        default="anthropic", description="Language model backend"
    )
    anthropic_api_key: str = Field(default="", description="Anthropic API key")
    google_api_key: str = Field(default="", description="Google AI Studio API key")
    llm_model: str = Field(
        default="", description="Model identifier (provider default when empty)"
    )
    llm_temperature: float = Field(
        default=0.2, description="LLM temperature for factual responses"
    )
    llm_max_tokens: int = Field(default=2048, description="Max tokens for generation")
    llm_timeout: float = Field(
        default=60.0, description="Total timeout for LLM calls in seconds"
    )

    # Application Settings
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # Source Processing
    max_file_size_mb: int = Field(default=10, description="Max upload size in MB")
    parse_docx: bool = Field(
        default=False,
        description="Parse DOCX files with python-docx instead of the placeholder",
    )
    blocked_hosts: str = Field(
        default="",
        description="Hosts rejected by the URL safety gate (comma separated)",
    )
    transcript_delay: float = Field(
        default=0.8, description="Simulated latency of the mock transcript provider"
    )
    transcript_timeout: float | None = Field(
        default=None, description="Timeout for transcript retrieval in seconds"
    )

    @model_validator(mode="after")
    def validate_provider_key(self) -> "Settings":
        """Ensure the selected provider has a non-empty API key."""
        key_field = (
            "anthropic_api_key" if self.llm_provider == "anthropic" else "google_api_key"
        )
        key = getattr(self, key_field).strip()
        if not key:
            raise ValueError(f"{key_field} cannot be empty")
        setattr(self, key_field, key)

        if not self.llm_model:
            self.llm_model = DEFAULT_MODELS[self.llm_provider]
        return self

    @property
    def blocked_host_list(self) -> list[str]:
        """Get the safety gate blocklist as normalized host names."""
        return [h.strip().lower() for h in self.blocked_hosts.split(",") if h.strip()]

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return self.max_file_size_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# CORS Configuration
CORS_CONFIG: dict[str, Any] = {
    "allow_origins": [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ],
    "allow_credentials": True,
    "allow_methods": ["GET", "POST", "OPTIONS"],
    "allow_headers": ["*"],
    "expose_headers": ["*"],
    "max_age": 600,
}

# FastAPI App Configuration
APP_CONFIG: dict[str, Any] = {
    "title": "DocuMind",
    "description": (
        "Document assistant that extracts text from uploaded files and links "
        "and answers questions grounded in that content."
    ),
    "version": APP_VERSION,
    "docs_url": "/api/docs",
    "redoc_url": "/api/redoc",
    "openapi_url": "/api/openapi.json",
    "openapi_tags": [
        {
            "name": "Health",
            "description": "Health check and service status",
        },
        {
            "name": "Sources",
            "description": "Submit files and URLs for processing",
        },
        {
            "name": "Chat",
            "description": "Grounded document Q&A",
        },
    ],
}


def get_app_config() -> dict[str, Any]:
    """Get FastAPI application configuration."""
    return APP_CONFIG.copy()


def get_cors_config() -> dict[str, Any]:
    """Get CORS middleware configuration."""
    return CORS_CONFIG.copy()
