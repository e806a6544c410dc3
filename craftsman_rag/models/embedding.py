"""
Embedding schemas.

Dependencies: pydantic
System role: Embedding API contracts
"""

from pydantic import BaseModel, Field


class EmbeddingResult(BaseModel):
    """Embedding of a single text."""

    text: str
    embedding: list[float]
    dimensions: int
    model: str
    task_type: str | None = None


class EmbedRequest(BaseModel):
    """Request schema for the embedding endpoint."""

    text: str = Field(description="Text to embed")
    task_type: str | None = Field(
        default=None,
        description="Google task type (e.g. RETRIEVAL_DOCUMENT); ignored by the sentence service",
    )
