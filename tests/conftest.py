"""
Shared test fixtures and configuration for entire test suite.

Provides: settings, in-memory vector store, fake embedder, fake chat models,
service container and TestClient wiring, SSE parsing helpers
Dependencies: pytest, fastapi, langchain_core
System role: Test infrastructure and fixture management
"""

import json
from typing import Any

import pytest
from fastapi.testclient import TestClient
from langchain_core.language_models.fake_chat_models import GenericFakeChatModel
from langchain_core.messages import AIMessage, AIMessageChunk

from craftsman_rag.api.deps.dependencies import ServiceContainer
from craftsman_rag.api.main import create_app
from craftsman_rag.boundary.vdb.memory_store import InMemoryVectorStore
from craftsman_rag.boundary.vdb.vector_schemas import VectorDocument
from craftsman_rag.configs import Settings
from craftsman_rag.configs.vector_store import VectorStoreSettings
from craftsman_rag.core.exceptions import EmbeddingError, ValidationError
from craftsman_rag.core.rag_agent import RAGAgent
from craftsman_rag.models.embedding import EmbeddingResult

DIMENSION = 4

SAMPLE_RECORD_TEXT = (
    "اسم الحرفي: أحمد علي\n"
    "المهنة: نجار\n"
    "العنوان: شارع النيل\n"
    "المدن: القاهرة, الجيزة\n"
    "التقييم: 4.5 (عدد التقييمات: 12)\n"
    "الوظائف المنجزة: 30\n"
    "الوظائف النشطة: 2\n"
    "الوصف: نجارة أثاث منزلي\n"
    "الحالة: متاح\n"
)


class FakeEmbedder:
    """Deterministic embedder: known texts map to fixed vectors, others to a default."""

    def __init__(
        self,
        vectors: dict[str, list[float]] | None = None,
        default: list[float] | None = None,
        fail: bool = False,
    ) -> None:
        self.vectors = vectors or {}
        self.default = default or [1.0, 0.0, 0.0, 0.0]
        self.fail = fail
        self.calls: list[str] = []

    @property
    def model_name(self) -> str:
        return "fake-embedder"

    def embed(self, text: str, task_type: str | None = None) -> EmbeddingResult:
        self.calls.append(text)
        if not isinstance(text, str) or not text.strip():
            raise ValidationError("Text must be a non-empty string", field="text")
        if self.fail:
            raise EmbeddingError("Embedding service unreachable", provider="fake")
        vector = self.vectors.get(text, self.default)
        return EmbeddingResult(
            text=text,
            embedding=vector,
            dimensions=len(vector),
            model=self.model_name,
            task_type=task_type,
        )

    def embed_batch(self, texts: list[str], task_type: str | None = None) -> list[EmbeddingResult]:
        return [self.embed(t, task_type) for t in texts]


class FailingChatModel:
    """Chat model whose stream fails before the first chunk."""

    def __init__(self) -> None:
        self.calls = 0

    def astream(self, messages: Any):
        self.calls += 1

        async def gen():
            raise RuntimeError("model unavailable")
            yield  # pragma: no cover

        return gen()


class MidStreamFailingChatModel:
    """Chat model that yields one chunk and then fails."""

    def astream(self, messages: Any):
        async def gen():
            yield AIMessageChunk(content="Partial")
            raise RuntimeError("connection reset")

        return gen()


class RecordingChatModel(GenericFakeChatModel):
    """Fake chat model that keeps the prompt of each call."""

    prompts: list = []

    def _stream(self, messages, stop=None, run_manager=None, **kwargs):
        self.prompts.append(messages)
        yield from super()._stream(messages, stop=stop, run_manager=run_manager, **kwargs)


def fake_model(*answers: str) -> RecordingChatModel:
    return RecordingChatModel(messages=iter([AIMessage(content=a) for a in answers]), prompts=[])


def parse_sse(body: str) -> list[tuple[str, dict]]:
    """Split an SSE body into ``(event, data)`` pairs."""
    events = []
    for frame in body.strip().split("\n\n"):
        if not frame.strip():
            continue
        event_name = None
        data = None
        for line in frame.split("\n"):
            if line.startswith("event: "):
                event_name = line[len("event: "):]
            elif line.startswith("data: "):
                data = json.loads(line[len("data: "):])
        events.append((event_name, data))
    return events


@pytest.fixture
def settings() -> Settings:
    """Settings with an in-memory store of dimension 4."""
    return Settings(
        vector_store=VectorStoreSettings(store_type="memory", dimension=DIMENSION),
    )


@pytest.fixture
def memory_store() -> InMemoryVectorStore:
    store = InMemoryVectorStore(collection_name="test-collection", dimension=DIMENSION)
    store.ensure_collection()
    return store


@pytest.fixture
def populated_store(memory_store: InMemoryVectorStore) -> InMemoryVectorStore:
    """Store with one craftsman record aligned with the fake embedder's default vector."""
    memory_store.insert(
        VectorDocument(
            id="doc-1",
            text=SAMPLE_RECORD_TEXT,
            vector=[1.0, 0.0, 0.0, 0.0],
            title="أحمد علي - نجار",
            source_id="101",
            metadata={"craft": "نجار"},
        )
    )
    memory_store.insert(
        VectorDocument(
            id="doc-2",
            text="اسم الحرفي: سامي\nالمهنة: سباك\n",
            vector=[0.0, 1.0, 0.0, 0.0],
            title="سامي - سباك",
            source_id="102",
        )
    )
    return memory_store


@pytest.fixture
def fake_embedder() -> FakeEmbedder:
    return FakeEmbedder()


def build_container(
    settings: Settings,
    store: InMemoryVectorStore,
    embedder: FakeEmbedder,
    model: Any,
    general_model: Any = None,
) -> ServiceContainer:
    agent = RAGAgent(
        vector_store=store,
        embedder=embedder,
        model=model,
        general_model=general_model,
        search_limit=settings.vector_store.search_limit,
        min_similarity=settings.vector_store.min_similarity,
        max_context_length=settings.vector_store.max_context_length,
        model_name="fake-model",
    )
    return ServiceContainer(settings=settings, vector_store=store, embedder=embedder, rag_agent=agent)


@pytest.fixture
def make_client(settings: Settings):
    """Factory returning a TestClient over an app wired with the given fakes."""

    def _make(store, embedder, model, general_model=None) -> TestClient:
        container = build_container(settings, store, embedder, model, general_model)
        return TestClient(create_app(services=container))

    return _make
