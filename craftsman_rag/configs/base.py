"""
Unprefixed settings.

Fields every entry point needs: environment name, debug flag, log level and
the Google API key shared by chat and Google embeddings.

Dependencies: pydantic_settings
System role: Root of the settings hierarchy
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Settings read without an env prefix (ENVIRONMENT, DEBUG, LOG_LEVEL, GOOGLE_API_KEY)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development", description="Deployment name, e.g. development or production")
    debug: bool = Field(
        default=False,
        description="Append a retrieval diagnostic line to the system prompt",
    )
    log_level: str = Field(default="INFO", description="Root log level")
    google_api_key: str | None = Field(
        default=None,
        description="Google Generative AI key used for chat and Google embeddings",
    )
