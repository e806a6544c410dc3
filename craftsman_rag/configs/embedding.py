"""
Embedding configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Embedding provider selection and endpoint configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmbeddingSettings(BaseSettings):
    """Embedding provider configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EMBEDDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(
        default="sentence_transformer",
        description="'sentence_transformer' (HTTP microservice) or 'google' (Gemini embeddings)",
    )
    service_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of the sentence-embedding service (exposes /embed and /embed-batch)",
    )
    model: str = Field(
        default="Xenova/all-MiniLM-L6-v2",
        description="Model name sent to the sentence-embedding service",
    )
    google_model: str = Field(
        default="models/text-embedding-004",
        description="Google embedding model ID",
    )
    normalize: bool = Field(default=True, description="Ask the service for unit-length vectors")
    timeout_seconds: float = Field(default=30.0, gt=0, description="HTTP timeout for embedding calls")
