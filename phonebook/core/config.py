"""
Configuration management for the Phonebook service.

Environment-driven settings are centralized here using Pydantic's
`BaseSettings`. The store client, the HTTP application and the CLI all read
the shared `settings` instance.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, List, Optional

from pydantic import AnyHttpUrl, AnyUrl, Field, PositiveFloat, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration sourced from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    # General application settings
    API_TITLE: str = "Phonebook API"
    API_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = Field("development", pattern=r"^(development|staging|production)$")
    HOST: str = "0.0.0.0"
    PORT: int = 4000
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = Field(default_factory=lambda: ["*"])

    # Record store
    STORE_BASE_URL: AnyHttpUrl = Field("http://localhost:3000")
    STORE_TIMEOUT_SECONDS: PositiveFloat = 10.0
    # "open" degrades read failures to an empty collection, "closed" raises.
    STORE_READ_POLICY: str = Field("open", pattern=r"^(open|closed)$")

    # Monitoring / tracing
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[AnyUrl] = None

    @field_validator("ALLOWED_ORIGINS", mode="before")
    def _split_origins(cls, value: str | List[str]) -> List[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @property
    def store_url(self) -> str:
        return str(self.STORE_BASE_URL).rstrip("/")


@lru_cache()
def get_settings() -> Settings:
    """Return a cached `Settings` instance."""

    return Settings()


# Singleton-style settings instance for modules that prefer direct access.
settings = get_settings()
