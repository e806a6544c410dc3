"""
Vector store contract.

Both the Astra DB store and the in-memory store implement this protocol,
so services depend on the contract rather than on a concrete SDK.

Dependencies: typing
System role: Vector store interface
"""

from typing import Protocol, runtime_checkable

from craftsman_rag.boundary.vdb.vector_schemas import (
    CollectionStats,
    VectorDocument,
    VectorQuery,
    VectorSearchResult,
)
from craftsman_rag.core.exceptions import VectorStoreError


@runtime_checkable
class VectorStore(Protocol):
    """Contract for a collection supporting vector-sorted search."""

    @property
    def dimension(self) -> int:
        """Configured vector dimension of the collection."""
        ...

    def ensure_collection(self) -> bool:
        """Create the collection if missing. Returns True when it was created."""
        ...

    def insert(self, document: VectorDocument) -> str:
        """Insert one document and return its id."""
        ...

    def insert_many(self, documents: list[VectorDocument]) -> int:
        """Insert documents and return how many were inserted."""
        ...

    def search(self, query: VectorQuery) -> list[VectorSearchResult]:
        """Vector-sorted search, most similar first, filtered by ``query.min_similarity``."""
        ...

    def has_documents(self) -> bool:
        """Whether the collection holds at least one document."""
        ...

    def count(self, upper_bound: int = 1000) -> int:
        """Number of documents, capped at ``upper_bound``."""
        ...

    def stats(self) -> CollectionStats:
        """Count plus a sample document summary."""
        ...

    def drop_collection(self) -> None:
        """Delete the collection and its documents."""
        ...


def validate_dimension(vector: list[float], dimension: int, operation: str = "insert") -> None:
    """Raise VectorStoreError when ``vector`` does not match the collection dimension."""
    if len(vector) != dimension:
        raise VectorStoreError(
            message=f"Vector length {len(vector)} does not match collection dimension {dimension}",
            operation=operation,
            details={"expected": dimension, "actual": len(vector)},
        )
