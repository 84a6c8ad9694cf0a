"""Configuration settings for the Wordbank API."""

import os
from typing import List

from pydantic import BaseModel

from ...core.logging import get_logger

logger = get_logger(__name__)


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    """Read a positive integer override; unparseable or too-small values keep the default."""
    value = os.getenv(name)
    if not value:
        return default
    try:
        parsed = int(value)
    except ValueError:
        logger.warning(f"Ignoring {name}={value!r}: not an integer, using {default}")
        return default
    if parsed < minimum:
        logger.warning(f"Ignoring {name}={parsed}: must be at least {minimum}, using {default}")
        return default
    return parsed


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_key_header: str = "X-API-Key"

    # CORS Configuration
    cors_origins: List[str] = ["*"]

    # Trusted Hosts
    allowed_hosts: List[str] = ["*"]

    # Rate Limiting
    rate_limit_requests: int = 200
    rate_limit_window: int = 60  # seconds

    # Bulk ingestion
    bulk_chunk_size: int = 50

    # Retrieval views
    default_page_size: int = 50
    max_page_size: int = 500
    random_sample_size: int = 10

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        self.api_port = _env_int("PORT", self.api_port)
        self.bulk_chunk_size = _env_int("WORDBANK_BULK_CHUNK_SIZE", self.bulk_chunk_size)
        self.rate_limit_requests = _env_int("WORDBANK_RATE_LIMIT_REQUESTS", self.rate_limit_requests)

        # Override CORS origins from environment
        cors_origins_env = os.getenv("CORS_ORIGINS", "")
        if cors_origins_env:
            self.cors_origins = [origin.strip() for origin in cors_origins_env.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
