"""
Language model configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Chat model selection and sampling parameters
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Gemini chat model configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    model: str = Field(default="gemini-2.0-flash", description="Gemini chat model ID")
    temperature: float = Field(
        default=0.2,
        ge=0.0,
        le=2.0,
        description="Temperature for grounded answers",
    )
    general_temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Temperature for the general assistant endpoint",
    )
