"""
Embedder factory.

Selects the embedding provider from EMBEDDING_PROVIDER.

Dependencies: craftsman_rag.boundary.embeddings, craftsman_rag.configs
System role: Embedding client instantiation and selection
"""

import logging

from craftsman_rag.boundary.embeddings.base import Embedder
from craftsman_rag.configs import Settings

logger = logging.getLogger(__name__)


def build_embedder(settings: Settings) -> Embedder:
    """
    Build the embedder described by ``settings``.

    Raises:
        ValueError: If the provider is unknown
    """
    provider = settings.embedding.provider.lower()

    if provider == "sentence_transformer":
        from craftsman_rag.boundary.embeddings.sentence_client import SentenceTransformerEmbedder

        logger.info(
            f"{__name__}:build_embedder - Using sentence-embedding service at {settings.embedding.service_url}"
        )
        return SentenceTransformerEmbedder(
            base_url=settings.embedding.service_url,
            model=settings.embedding.model,
            normalize=settings.embedding.normalize,
            timeout=settings.embedding.timeout_seconds,
        )

    if provider == "google":
        from craftsman_rag.boundary.embeddings.google_embedder import GoogleEmbedder

        logger.info(f"{__name__}:build_embedder - Using Google embeddings ({settings.embedding.google_model})")
        return GoogleEmbedder(
            model=settings.embedding.google_model,
            dimension=settings.vector_store.dimension,
            api_key=settings.google_api_key,
        )

    raise ValueError(
        f"Invalid EMBEDDING_PROVIDER: {provider}. Must be 'sentence_transformer' or 'google'."
    )
