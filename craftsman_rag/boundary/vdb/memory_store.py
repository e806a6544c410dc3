"""
In-memory vector store for local development and tests.

Provides the same interface as AstraVectorStore with a linear cosine scan.
Nothing is persisted; the collection lives as long as the process.

Dependencies: craftsman_rag.boundary.vdb.similarity
System role: Local vector store for development RAG
"""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Any

from craftsman_rag.boundary.vdb.base import validate_dimension
from craftsman_rag.boundary.vdb.similarity import cosine_similarity, filter_by_similarity
from craftsman_rag.boundary.vdb.vector_schemas import (
    CollectionStats,
    VectorDocument,
    VectorQuery,
    VectorSearchResult,
)
from craftsman_rag.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


class InMemoryVectorStore:
    """
    Process-local vector collection.

    Search scores every document with cosine similarity, so results always
    carry a similarity and ties keep insertion order.
    """

    def __init__(self, collection_name: str = "local-dev", dimension: int = 384) -> None:
        self._collection_name = collection_name
        self._dimension = dimension
        self._documents: dict[str, dict[str, Any]] = {}
        self._exists = False
        self._lock = threading.Lock()

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def collection_name(self) -> str:
        return self._collection_name

    def ensure_collection(self) -> bool:
        with self._lock:
            if self._exists:
                return False
            self._exists = True
        logger.info(
            f"{__name__}:ensure_collection - Created collection {self._collection_name} "
            f"(dimension={self._dimension})"
        )
        return True

    def insert(self, document: VectorDocument) -> str:
        validate_dimension(document.vector, self._dimension)
        doc_id = document.id or str(uuid.uuid4())
        with self._lock:
            if doc_id in self._documents:
                raise VectorStoreError(
                    message=f"Document {doc_id} already exists",
                    operation="insert",
                )
            self._exists = True
            self._documents[doc_id] = {
                "_id": doc_id,
                "text": document.text,
                "$vector": list(document.vector),
                "title": document.title,
                "sourceId": document.source_id,
                "metadata": dict(document.metadata),
                "createdAt": datetime.now(timezone.utc),
            }
        return doc_id

    def insert_many(self, documents: list[VectorDocument]) -> int:
        for document in documents:
            validate_dimension(document.vector, self._dimension)
        for document in documents:
            self.insert(document)
        return len(documents)

    def search(self, query: VectorQuery) -> list[VectorSearchResult]:
        validate_dimension(query.embedding, self._dimension, operation="find")
        with self._lock:
            stored = list(self._documents.values())

        scored = [
            VectorSearchResult(
                document_id=doc["_id"],
                text=doc["text"],
                title=doc["title"],
                source_id=doc["sourceId"],
                metadata=doc["metadata"],
                similarity=cosine_similarity(query.embedding, doc["$vector"]),
            )
            for doc in stored
        ]
        scored.sort(key=lambda r: r.similarity or 0.0, reverse=True)
        results = filter_by_similarity(scored[: query.limit], query.min_similarity)
        logger.debug(
            f"{__name__}:search - {len(results)} of {len(stored)} documents returned "
            f"(limit={query.limit}, min_similarity={query.min_similarity})"
        )
        return results

    def has_documents(self) -> bool:
        with self._lock:
            return bool(self._documents)

    def count(self, upper_bound: int = 1000) -> int:
        with self._lock:
            return min(len(self._documents), upper_bound)

    def stats(self) -> CollectionStats:
        with self._lock:
            sample = next(iter(self._documents.values()), None)
            total = len(self._documents)
        return CollectionStats(
            name=self._collection_name,
            document_count=total,
            sample_title=sample["title"] if sample else None,
            sample_text_preview=sample["text"][:100] if sample else None,
            sample_vector_length=len(sample["$vector"]) if sample else None,
        )

    def drop_collection(self) -> None:
        with self._lock:
            self._documents.clear()
            self._exists = False
        logger.info(f"{__name__}:drop_collection - Dropped collection {self._collection_name}")
