"""
Vector database boundary layer.

Provides vector store clients for storage and retrieval operations.
- AstraVectorStore: Production Astra DB Data API client (astra_store, imported on demand)
- InMemoryVectorStore: Local development store

Dependencies: astrapy
System role: Vector store adapter for RAG retrieval
"""

from craftsman_rag.boundary.vdb.base import VectorStore
from craftsman_rag.boundary.vdb.memory_store import InMemoryVectorStore
from craftsman_rag.boundary.vdb.vector_schemas import (
    CollectionStats,
    VectorDocument,
    VectorQuery,
    VectorSearchResult,
)

__all__ = [
    "CollectionStats",
    "InMemoryVectorStore",
    "VectorDocument",
    "VectorQuery",
    "VectorSearchResult",
    "VectorStore",
]
