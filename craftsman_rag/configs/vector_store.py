"""
Vector store configuration settings.

Astra DB connection settings plus retrieval tuning (search limit,
similarity threshold, context budget).

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AstraDBSettings(BaseSettings):
    """Astra DB Data API connection settings."""

    model_config = SettingsConfigDict(
        env_prefix="ASTRA_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    namespace: str | None = Field(default=None, description="Keyspace holding the collection")
    collection: str = Field(default="vector_collection", description="Collection name")
    api_endpoint: str | None = Field(default=None, description="Data API endpoint URL")
    application_token: str | None = Field(default=None, description="Application token (AstraCS:...)")


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (Astra DB for prod, in-memory for local dev)."""

    model_config = SettingsConfigDict(
        env_prefix="VECTOR_STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="astra",
        description="Vector store type: 'astra' for the hosted store, 'memory' for local dev",
    )
    dimension: int = Field(
        default=384,
        description="Collection vector dimension (384 for all-MiniLM-L6-v2)",
    )
    metric: str = Field(
        default="cosine",
        description="Similarity metric: cosine, dot_product or euclidean",
    )

    search_limit: int = Field(default=15, ge=1, le=1000, description="Documents fetched per query")
    min_similarity: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        description="Minimum similarity score kept in the prompt context (inclusive)",
    )
    max_context_length: int = Field(
        default=30000,
        gt=0,
        description="Maximum characters of retrieved context placed in the prompt",
    )
