"""
Dependency injection container.

The ServiceContainer is built once in the application lifespan, stored on
``app.state.services`` and handed to routes through the getters below.
Tests build their own container from fakes and pass it to ``create_app``.

Dependencies: craftsman_rag.configs, craftsman_rag.application, craftsman_rag.boundary
System role: DI container for service injection
"""

import logging

from fastapi import Request
from langchain_google_genai import ChatGoogleGenerativeAI

from craftsman_rag.application.services.chat_service import ChatService
from craftsman_rag.boundary.embeddings.base import Embedder
from craftsman_rag.boundary.embeddings.embedder_factory import build_embedder
from craftsman_rag.boundary.vdb.base import VectorStore
from craftsman_rag.boundary.vdb.vector_store_factory import build_vector_store
from craftsman_rag.configs import Settings
from craftsman_rag.core.rag_agent import RAGAgent

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Holds the clients and services shared by all requests."""

    def __init__(
        self,
        settings: Settings,
        vector_store: VectorStore,
        embedder: Embedder,
        rag_agent: RAGAgent,
    ) -> None:
        self.settings = settings
        self.vector_store = vector_store
        self.embedder = embedder
        self.rag_agent = rag_agent
        self.chat_service = ChatService(rag_agent=rag_agent)

    def close(self) -> None:
        """Release HTTP connection pools held by boundary clients."""
        close = getattr(self.embedder, "close", None)
        if callable(close):
            close()


def build_services(settings: Settings) -> ServiceContainer:
    """
    Construct production clients from settings.

    Raises:
        ValueError: On an unknown store type or embedding provider
        VectorStoreError: If the Astra DB configuration is incomplete
    """
    vector_store = build_vector_store(settings)
    embedder = build_embedder(settings)

    api_key = {"google_api_key": settings.google_api_key} if settings.google_api_key else {}
    model = ChatGoogleGenerativeAI(model=settings.llm.model, temperature=settings.llm.temperature, **api_key)
    general_model = ChatGoogleGenerativeAI(
        model=settings.llm.model,
        temperature=settings.llm.general_temperature,
        **api_key,
    )

    rag_agent = RAGAgent(
        vector_store=vector_store,
        embedder=embedder,
        model=model,
        general_model=general_model,
        search_limit=settings.vector_store.search_limit,
        min_similarity=settings.vector_store.min_similarity,
        max_context_length=settings.vector_store.max_context_length,
        debug=settings.debug,
        model_name=settings.llm.model,
    )
    logger.info(
        f"{__name__}:build_services - Services ready",
        extra={
            "store_type": settings.vector_store.store_type,
            "embedding_provider": settings.embedding.provider,
            "llm_model": settings.llm.model,
        },
    )
    return ServiceContainer(
        settings=settings,
        vector_store=vector_store,
        embedder=embedder,
        rag_agent=rag_agent,
    )


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_chat_service(request: Request) -> ChatService:
    return get_services(request).chat_service


def get_embedder(request: Request) -> Embedder:
    return get_services(request).embedder


def get_vector_store(request: Request) -> VectorStore:
    return get_services(request).vector_store
