"""
Sentence-embedding microservice client.

Calls an HTTP service hosting a sentence-transformers model
(``POST /embed`` and ``POST /embed-batch``).

Dependencies: httpx, craftsman_rag.core.exceptions
System role: Embedding generation adapter
"""

import logging

import httpx

from craftsman_rag.boundary.embeddings.base import build_result
from craftsman_rag.core.exceptions import EmbeddingError, ValidationError
from craftsman_rag.models.embedding import EmbeddingResult

logger = logging.getLogger(__name__)

PROVIDER = "sentence_transformer"


class SentenceTransformerEmbedder:
    """
    Client for the sentence-embedding service.

    ``task_type`` is accepted for interface parity and echoed back in the
    result; the service itself has no notion of it.
    """

    def __init__(
        self,
        base_url: str,
        model: str = "Xenova/all-MiniLM-L6-v2",
        normalize: bool = True,
        timeout: float = 30.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Service root, e.g. http://localhost:8000
            model: Model name forwarded to the service
            normalize: Request unit-length vectors
            timeout: Request timeout in seconds
            http_client: Pre-built client (tests pass one with a mock transport)
        """
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._normalize = normalize
        self._client = http_client or httpx.Client(timeout=timeout)

    @property
    def model_name(self) -> str:
        return self._model

    def close(self) -> None:
        self._client.close()

    def embed(self, text: str, task_type: str | None = None) -> EmbeddingResult:
        """
        Embed a single text.

        Raises:
            ValidationError: If text is empty or not a string
            EmbeddingError: If the service call fails or returns no usable vector
        """
        if not isinstance(text, str) or not text.strip():
            raise ValidationError("Text must be a non-empty string", field="text")

        data = self._post("/embed", {"text": text, "model": self._model, "normalize": self._normalize})
        embedding = data.get("embedding")
        if not isinstance(embedding, list) or not embedding:
            raise EmbeddingError(
                "Embedding response missing embedding vector",
                provider=PROVIDER,
                details={"keys": sorted(data.keys())},
            )

        return build_result(text, embedding, self._model, task_type, PROVIDER)

    def embed_batch(self, texts: list[str], task_type: str | None = None) -> list[EmbeddingResult]:
        """
        Embed several texts in one call.

        Raises:
            ValidationError: If the batch is empty or holds an empty text
            EmbeddingError: If the service call fails or the counts disagree
        """
        if not texts:
            raise ValidationError("Texts must be a non-empty list of strings", field="texts")
        if any(not isinstance(t, str) or not t.strip() for t in texts):
            raise ValidationError("Every text must be a non-empty string", field="texts")

        data = self._post("/embed-batch", {"texts": texts, "model": self._model, "normalize": self._normalize})
        embeddings = data.get("embeddings")
        if not isinstance(embeddings, list) or len(embeddings) != len(texts):
            raise EmbeddingError(
                "Batch embedding response does not match the request",
                provider=PROVIDER,
                details={"requested": len(texts), "received": len(embeddings) if isinstance(embeddings, list) else None},
            )

        return [
            build_result(text, embedding, self._model, task_type, PROVIDER)
            for text, embedding in zip(texts, embeddings)
        ]

    def _post(self, path: str, payload: dict) -> dict:
        url = f"{self._base_url}{path}"
        try:
            response = self._client.post(url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"{__name__}:_post - Embedding service returned {e.response.status_code}",
                extra={"url": url, "body": e.response.text[:200]},
            )
            raise EmbeddingError(
                "Embedding service returned an error",
                provider=PROVIDER,
                details={"url": url, "status_code": e.response.status_code},
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"{__name__}:_post - Embedding service call failed: {type(e).__name__}: {e}")
            raise EmbeddingError(
                "Embedding service unreachable",
                provider=PROVIDER,
                details={"url": url, "error": str(e)},
            ) from e

        if not isinstance(data, dict):
            raise EmbeddingError("Embedding response is not a JSON object", provider=PROVIDER)
        return data
