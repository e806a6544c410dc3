"""FastAPI dependency providers."""

from craftsman_rag.api.deps.dependencies import (
    ServiceContainer,
    build_services,
    get_chat_service,
    get_embedder,
    get_services,
    get_vector_store,
)

__all__ = [
    "ServiceContainer",
    "build_services",
    "get_chat_service",
    "get_embedder",
    "get_services",
    "get_vector_store",
]
