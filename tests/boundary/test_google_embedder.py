"""Tests for the Google embedder adapter with a mocked embeddings client."""

from unittest.mock import MagicMock, patch

import pytest
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from craftsman_rag.boundary.embeddings.base import DOCUMENT_TASK, QUERY_TASK
from craftsman_rag.boundary.embeddings.google_embedder import FixedDimensionEmbeddings, GoogleEmbedder
from craftsman_rag.core.exceptions import EmbeddingError, ValidationError


@pytest.fixture
def embeddings() -> MagicMock:
    client = MagicMock()
    client.embed_query.return_value = [0.5, 0.5]
    client.embed_documents.return_value = [[1.0, 0.0], [0.0, 1.0]]
    return client


@pytest.fixture
def embedder(embeddings: MagicMock) -> GoogleEmbedder:
    return GoogleEmbedder(model="models/text-embedding-004", dimension=2, embeddings=embeddings)


class TestGoogleEmbedder:
    def test_queries_use_retrieval_query_task(self, embedder: GoogleEmbedder, embeddings: MagicMock) -> None:
        result = embedder.embed("plumber near me")

        embeddings.embed_query.assert_called_once_with("plumber near me", task_type=QUERY_TASK)
        assert result.task_type == QUERY_TASK
        assert result.dimensions == 2

    def test_batches_use_retrieval_document_task(self, embedder: GoogleEmbedder, embeddings: MagicMock) -> None:
        results = embedder.embed_batch(["a", "b"])

        embeddings.embed_documents.assert_called_once_with(["a", "b"], task_type=DOCUMENT_TASK)
        assert [r.embedding for r in results] == [[1.0, 0.0], [0.0, 1.0]]

    def test_explicit_task_type_wins(self, embedder: GoogleEmbedder, embeddings: MagicMock) -> None:
        embedder.embed("record text", task_type=DOCUMENT_TASK)

        assert embeddings.embed_query.call_args.kwargs["task_type"] == DOCUMENT_TASK

    def test_empty_text_is_rejected(self, embedder: GoogleEmbedder, embeddings: MagicMock) -> None:
        with pytest.raises(ValidationError):
            embedder.embed("")
        embeddings.embed_query.assert_not_called()

    def test_provider_failure_is_wrapped(self, embedder: GoogleEmbedder, embeddings: MagicMock) -> None:
        embeddings.embed_query.side_effect = RuntimeError("quota exceeded")

        with pytest.raises(EmbeddingError) as exc_info:
            embedder.embed("hello")

        assert exc_info.value.details["provider"] == "google"

    def test_malformed_vector_is_wrapped(self, embedder: GoogleEmbedder, embeddings: MagicMock) -> None:
        embeddings.embed_documents.return_value = [[1.0, 0.0], [None, None]]

        with pytest.raises(EmbeddingError):
            embedder.embed_batch(["a", "b"])


class TestFixedDimensionEmbeddings:
    @pytest.fixture
    def pinned(self) -> FixedDimensionEmbeddings:
        return FixedDimensionEmbeddings(model="models/text-embedding-004", dimension=256, google_api_key="test-key")

    def test_query_forwards_pinned_dimension_and_query_task(self, pinned: FixedDimensionEmbeddings) -> None:
        with patch.object(GoogleGenerativeAIEmbeddings, "embed_query", return_value=[0.0] * 256) as parent:
            vector = pinned.embed_query("نجار")

        assert len(vector) == 256
        assert parent.call_args.kwargs["output_dimensionality"] == 256
        assert parent.call_args.kwargs["task_type"] == QUERY_TASK

    def test_documents_forward_pinned_dimension_and_document_task(self, pinned: FixedDimensionEmbeddings) -> None:
        with patch.object(GoogleGenerativeAIEmbeddings, "embed_documents", return_value=[[0.0] * 256]) as parent:
            pinned.embed_documents(["record"])

        assert parent.call_args.kwargs["output_dimensionality"] == 256
        assert parent.call_args.kwargs["task_type"] == DOCUMENT_TASK

    def test_explicit_dimension_overrides_pinned_one(self, pinned: FixedDimensionEmbeddings) -> None:
        with patch.object(GoogleGenerativeAIEmbeddings, "embed_query", return_value=[0.0] * 64) as parent:
            pinned.embed_query("نجار", output_dimensionality=64)

        assert parent.call_args.kwargs["output_dimensionality"] == 64

    def test_embedder_builds_pinned_client(self) -> None:
        embedder = GoogleEmbedder(model="models/text-embedding-004", dimension=128, api_key="test-key")

        with patch.object(GoogleGenerativeAIEmbeddings, "embed_query", return_value=[0.1] * 128) as parent:
            result = embedder.embed("سباك")

        assert result.dimensions == 128
        assert parent.call_args.kwargs["output_dimensionality"] == 128
