"""
Exception hierarchy for the craftsman assistant.

Boundary adapters wrap SDK and HTTP failures into these types; routes map
them to status codes and the RAG agent maps them to fallback context.
``details`` is a flat dict that is safe to put in log records.

Dependencies: None (pure domain layer)
System role: Domain errors shared by the API, the agent and the loader
"""

from typing import Any


class CraftsmanRAGException(Exception):
    """Root of all domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Args:
            message: Text safe to return to a client
            details: Extra context for logs (ids, status codes, upstream errors)
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} | Details: {self.details}"


def _with(details: dict[str, Any] | None, **context: Any) -> dict[str, Any]:
    merged = dict(details or {})
    merged.update({k: v for k, v in context.items() if v is not None})
    return merged


class ValidationError(CraftsmanRAGException):
    """Raised when client input or a document fails validation."""

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, _with(details, field=field))


class EmbeddingError(CraftsmanRAGException):
    """Raised when the embedding provider fails or returns an unusable vector."""

    def __init__(self, message: str, provider: str | None = None, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, _with(details, provider=provider))


class VectorStoreError(CraftsmanRAGException):
    """
    Raised when a vector store operation fails.

    ``operation`` is one of connect, create, insert, find, count, drop.
    """

    def __init__(self, message: str, operation: str | None = None, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, _with(details, operation=operation))


class RetrievalError(CraftsmanRAGException):
    """Raised when retrieval cannot proceed, e.g. a query vector of the wrong dimension."""


class GenerationError(CraftsmanRAGException):
    """Raised when the language model cannot start a response."""

    def __init__(self, message: str, model: str | None = None, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, _with(details, model=model))


class SourceAPIError(CraftsmanRAGException):
    """Raised when the craftsmen directory API or a scraped page is unreachable."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, _with(details, url=url, status_code=status_code))
