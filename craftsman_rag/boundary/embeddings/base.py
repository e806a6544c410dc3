"""
Embedding client contract.

Dependencies: pydantic, craftsman_rag.models, craftsman_rag.core.exceptions
System role: Embedding provider interface
"""

from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError as PydanticValidationError

from craftsman_rag.core.exceptions import EmbeddingError
from craftsman_rag.models.embedding import EmbeddingResult

QUERY_TASK = "RETRIEVAL_QUERY"
DOCUMENT_TASK = "RETRIEVAL_DOCUMENT"


@runtime_checkable
class Embedder(Protocol):
    """Text to vector client. Implementations are blocking."""

    @property
    def model_name(self) -> str:
        ...

    def embed(self, text: str, task_type: str | None = None) -> EmbeddingResult:
        ...

    def embed_batch(self, texts: list[str], task_type: str | None = None) -> list[EmbeddingResult]:
        ...


def build_result(text: str, vector: Any, model: str, task_type: str | None, provider: str) -> EmbeddingResult:
    """
    Validate a provider vector into an EmbeddingResult.

    Raises:
        EmbeddingError: If the vector is empty or holds non-numeric values
    """
    if not isinstance(vector, (list, tuple)) or not vector:
        raise EmbeddingError(
            "Embedding provider returned no vector",
            provider=provider,
            details={"type": type(vector).__name__},
        )
    try:
        return EmbeddingResult(
            text=text,
            embedding=list(vector),
            dimensions=len(vector),
            model=model,
            task_type=task_type,
        )
    except PydanticValidationError as e:
        raise EmbeddingError(
            "Embedding provider returned a malformed vector",
            provider=provider,
            details={"errors": e.error_count()},
        ) from e
