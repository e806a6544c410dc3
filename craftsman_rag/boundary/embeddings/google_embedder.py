"""
Google Generative AI embeddings with fixed output dimensionality.

The base GoogleGenerativeAIEmbeddings class ignores output_dimensionality
in the constructor, so the subclass below pins it on every call. The
vector collection has one dimension and every vector must match it.

Dependencies: langchain_google_genai
System role: Embedding generation adapter (hosted provider)
"""

import logging
from typing import List

from langchain_google_genai import GoogleGenerativeAIEmbeddings

from craftsman_rag.boundary.embeddings.base import DOCUMENT_TASK, QUERY_TASK, build_result
from craftsman_rag.core.exceptions import EmbeddingError, ValidationError
from craftsman_rag.models.embedding import EmbeddingResult

logger = logging.getLogger(__name__)

PROVIDER = "google"


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """
    Google embeddings pinned to the collection dimension.

    Every call sends ``output_dimensionality`` (the constructor argument is
    not applied by the parent class) and defaults the task type to the
    retrieval task matching the call: documents for batches, queries for
    single texts.
    """

    _dimension: int = 768

    def __init__(self, model: str = "models/text-embedding-004", dimension: int = 768, **kwargs) -> None:
        super().__init__(model=model, **kwargs)
        self._dimension = dimension
        logger.info(f"{__name__}:__init__ - Google embeddings {model} pinned to {dimension} dimensions")

    def embed_documents(
        self,
        texts: List[str],
        *,
        batch_size: int = 100,
        task_type: str | None = None,
        titles: List[str] | None = None,
        output_dimensionality: int | None = None,
    ) -> List[List[float]]:
        return super().embed_documents(
            texts,
            batch_size=batch_size,
            task_type=task_type or DOCUMENT_TASK,
            titles=titles,
            output_dimensionality=output_dimensionality or self._dimension,
        )

    def embed_query(
        self,
        text: str,
        task_type: str | None = None,
        title: str | None = None,
        output_dimensionality: int | None = None,
    ) -> List[float]:
        # text-embedding-004 caps at 768; larger values are rejected upstream
        return super().embed_query(
            text,
            task_type=task_type or QUERY_TASK,
            title=title,
            output_dimensionality=output_dimensionality or self._dimension,
        )


class GoogleEmbedder:
    """
    Embedder backed by Google embedding models.

    Queries default to the RETRIEVAL_QUERY task, batches to RETRIEVAL_DOCUMENT.
    """

    def __init__(
        self,
        model: str,
        dimension: int,
        api_key: str | None = None,
        embeddings: GoogleGenerativeAIEmbeddings | None = None,
    ) -> None:
        self._model = model
        if embeddings is None:
            kwargs = {"google_api_key": api_key} if api_key else {}
            embeddings = FixedDimensionEmbeddings(model=model, dimension=dimension, **kwargs)
        self._embeddings = embeddings

    @property
    def model_name(self) -> str:
        return self._model

    def embed(self, text: str, task_type: str | None = None) -> EmbeddingResult:
        if not isinstance(text, str) or not text.strip():
            raise ValidationError("Text must be a non-empty string", field="text")

        task = task_type or QUERY_TASK
        try:
            vector = self._embeddings.embed_query(text, task_type=task)
        except Exception as e:
            logger.error(f"{__name__}:embed - Google embedding failed: {type(e).__name__}: {e}")
            raise EmbeddingError(
                "Google embedding request failed",
                provider=PROVIDER,
                details={"model": self._model, "error": str(e)},
            ) from e

        return build_result(text, vector, self._model, task, PROVIDER)

    def embed_batch(self, texts: list[str], task_type: str | None = None) -> list[EmbeddingResult]:
        if not texts:
            raise ValidationError("Texts must be a non-empty list of strings", field="texts")

        task = task_type or DOCUMENT_TASK
        try:
            vectors = self._embeddings.embed_documents(texts, task_type=task)
        except Exception as e:
            logger.error(f"{__name__}:embed_batch - Google batch embedding failed: {type(e).__name__}: {e}")
            raise EmbeddingError(
                "Google batch embedding request failed",
                provider=PROVIDER,
                details={"model": self._model, "count": len(texts), "error": str(e)},
            ) from e

        return [build_result(text, vector, self._model, task, PROVIDER) for text, vector in zip(texts, vectors)]
