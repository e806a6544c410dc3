"""
Vector database schemas.

Pydantic models for vector operations (documents, queries, results).
Used for type-safe vector store interactions.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any

from pydantic import BaseModel, Field


class VectorDocument(BaseModel):
    """
    Document stored in the vector collection.

    Persisted as ``{text, $vector, title, sourceId, metadata, createdAt}``.
    """

    id: str | None = Field(default=None, description="Document id (assigned by the store if None)")
    text: str = Field(description="Searchable text block")
    vector: list[float] = Field(description="Embedding of the text")
    title: str | None = Field(default=None, description="Display title")
    source_id: str | None = Field(default=None, description="Identifier of the upstream record")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Free-form metadata")


class VectorQuery(BaseModel):
    """Query parameters for vector search."""

    embedding: list[float] = Field(description="Query embedding vector")
    limit: int = Field(default=15, description="Number of candidates to fetch", ge=1, le=1000)
    min_similarity: float = Field(
        default=0.0,
        description="Minimum similarity score kept (inclusive, 0.0-1.0)",
        ge=0.0,
        le=1.0,
    )


class VectorSearchResult(BaseModel):
    """Single result from vector search."""

    document_id: str = Field(description="Document identifier")
    text: str = Field(description="Document text")
    title: str | None = Field(default=None, description="Document title")
    source_id: str | None = Field(default=None, description="Upstream record identifier")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Document metadata")
    similarity: float | None = Field(default=None, description="Similarity score, None if unknown")


class CollectionStats(BaseModel):
    """Summary of a collection for loader diagnostics."""

    name: str
    document_count: int
    sample_title: str | None = None
    sample_text_preview: str | None = None
    sample_vector_length: int | None = None
