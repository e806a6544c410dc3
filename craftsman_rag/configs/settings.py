"""
Application settings aggregate.

``Settings`` nests one section per concern (Astra DB, retrieval, embeddings,
chat model, loader sources). Each section reads its own env prefix.

Dependencies: pydantic_settings
System role: Central configuration for the API and the loader CLI
"""

from functools import lru_cache

from pydantic import Field

from craftsman_rag.configs.base import BaseSettings
from craftsman_rag.configs.embedding import EmbeddingSettings
from craftsman_rag.configs.llm import LLMSettings
from craftsman_rag.configs.loader import ScraperSettings, SourceAPISettings
from craftsman_rag.configs.vector_store import AstraDBSettings, VectorStoreSettings


class Settings(BaseSettings):
    """All configuration sections."""

    astra_db: AstraDBSettings = Field(default_factory=AstraDBSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    source_api: SourceAPISettings = Field(default_factory=SourceAPISettings)
    scraper: ScraperSettings = Field(default_factory=ScraperSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Process-wide settings, read from the environment and ``.env`` on first call.

    Tests build ``Settings(...)`` directly instead of going through this cache.
    """
    return Settings()
