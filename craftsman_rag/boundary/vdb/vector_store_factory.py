"""
Vector store factory for selecting between in-memory (dev) and Astra DB (prod).

Depends on VECTOR_STORE_STORE_TYPE environment variable.
Provides consistent interface regardless of underlying implementation.

Dependencies: craftsman_rag.boundary.vdb, craftsman_rag.configs
System role: Vector store instantiation and selection
"""

import logging

from craftsman_rag.boundary.vdb.base import VectorStore
from craftsman_rag.configs import Settings

logger = logging.getLogger(__name__)


def build_vector_store(settings: Settings) -> VectorStore:
    """
    Build the vector store described by ``settings``.

    Returns:
        InMemoryVectorStore or AstraVectorStore

    Raises:
        ValueError: If the store type is invalid
    """
    store_type = settings.vector_store.store_type.lower()

    if store_type == "memory":
        from craftsman_rag.boundary.vdb.memory_store import InMemoryVectorStore

        logger.info(f"{__name__}:build_vector_store - Creating in-memory vector store (local dev mode)")
        return InMemoryVectorStore(
            collection_name=settings.astra_db.collection,
            dimension=settings.vector_store.dimension,
        )

    if store_type == "astra":
        from craftsman_rag.boundary.vdb.astra_store import AstraVectorStore

        logger.info(f"{__name__}:build_vector_store - Creating Astra DB vector store (production mode)")
        return AstraVectorStore(
            api_endpoint=settings.astra_db.api_endpoint,
            token=settings.astra_db.application_token,
            keyspace=settings.astra_db.namespace,
            collection_name=settings.astra_db.collection,
            dimension=settings.vector_store.dimension,
            metric=settings.vector_store.metric,
        )

    raise ValueError(
        f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. "
        f"Must be 'memory' (dev) or 'astra' (production)."
    )
