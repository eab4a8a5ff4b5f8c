"""
Application configuration using Pydantic Settings.
"""

import re
from dataclasses import dataclass
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from services.errors import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Content store
    SANITY_PROJECT_ID: str = ""
    SANITY_DATASET: str = ""
    SANITY_API_VERSION: str = "2023-10-01"
    SANITY_TOKEN: str = ""  # Only for private datasets; use a read-only token
    SANITY_API_HOST: str = "sanity.io"
    SANITY_TIMEOUT_SECONDS: float = 20.0

    # Redis (empty string selects the in-process cache)
    REDIS_URL: str = "redis://localhost:6379"
    CACHE_TTL_SECONDS: int = 900
    CACHE_KEY_PREFIX: str = "pmsb"
    MEMORY_CACHE_MAX_ENTRIES: int = 5000

    # Rendering
    DEBUG_ERRORS: bool = False
    SITE_BASE_PATH: str = ""
    DEFAULT_PAGE_LIMIT: int = 24

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Cache administration
    ADMIN_TOKEN: str = ""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()


@dataclass(frozen=True)
class StoreIdentity:
    project_id: str
    dataset: str
    api_version: str
    token: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.project_id and self.dataset and self.api_version)


def store_identity() -> StoreIdentity:
    """Return the configured store identity with the token whitespace stripped."""
    return StoreIdentity(
        project_id=(settings.SANITY_PROJECT_ID or "").strip(),
        dataset=(settings.SANITY_DATASET or "").strip(),
        api_version=(settings.SANITY_API_VERSION or "").strip(),
        token=re.sub(r"\s+", "", settings.SANITY_TOKEN or ""),
    )


def require_store_identity() -> StoreIdentity:
    """Return configured store identity or raise a configuration error."""
    identity = store_identity()
    if not identity.is_complete:
        raise ConfigError("Content store settings missing. Configure SANITY_PROJECT_ID and SANITY_DATASET.")
    return identity
