"""
Astra DB vector store client wrapper.

Provides a high-level interface over the Astra DB Data API collection:
collection bootstrap, inserts, and find with vector sort. Scores missing
from the API response are recomputed locally with cosine similarity.

Dependencies: astrapy, craftsman_rag.boundary.vdb, craftsman_rag.core.exceptions
System role: Vector store client for embedding operations
"""

import logging
from datetime import datetime, timezone
from typing import Any

from astrapy import DataAPIClient
from astrapy.exceptions import TooManyDocumentsToCountException

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


class AstraVectorStore:
    """
    Astra DB collection client for vector operations.

    The database handle is created once at construction; pass ``database``
    to reuse an existing handle (tests inject a mock here).
    """

    def __init__(
        self,
        api_endpoint: str | None,
        token: str | None,
        collection_name: str,
        keyspace: str | None = None,
        dimension: int = 384,
        metric: str = "cosine",
        database: Any = None,
    ) -> None:
        """
        Initialize Astra DB client with configuration.

        Args:
            api_endpoint: Data API endpoint of the database
            token: Application token
            collection_name: Vector collection name
            keyspace: Keyspace (namespace) holding the collection
            dimension: Vector dimension used when creating the collection
            metric: Similarity metric used when creating the collection
            database: Pre-built database handle, bypasses client construction

        Raises:
            VectorStoreError: If endpoint or token are missing
        """
        self._collection_name = collection_name
        self._dimension = dimension
        self._metric = metric

        if database is None:
            if not api_endpoint or not token:
                raise VectorStoreError(
                    message="Missing Astra DB configuration (ASTRA_DB_API_ENDPOINT / ASTRA_DB_APPLICATION_TOKEN)",
                    operation="connect",
                )
            client = DataAPIClient()
            database = client.get_database(api_endpoint, token=token, keyspace=keyspace or None)
            logger.info(
                f"{__name__}:__init__ - Connected to Astra DB keyspace={keyspace}, "
                f"collection={collection_name}"
            )

        self._db = database
        self._collection = database.get_collection(collection_name)

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def collection_name(self) -> str:
        return self._collection_name

    def ensure_collection(self) -> bool:
        """
        Create the vector collection if it does not exist.

        Returns:
            bool: True if the collection was created, False if it already existed

        Raises:
            VectorStoreError: If listing or creation fails
        """
        try:
            existing = self._db.list_collection_names()
            if self._collection_name in existing:
                logger.info(f"{__name__}:ensure_collection - Collection {self._collection_name} already exists")
                return False

            logger.info(
                f"{__name__}:ensure_collection - Creating collection {self._collection_name} "
                f"(dimension={self._dimension}, metric={self._metric})"
            )
            self._collection = self._db.create_collection(
                self._collection_name,
                definition={"vector": {"dimension": self._dimension, "metric": self._metric}},
            )
            return True

        except Exception as e:
            raise VectorStoreError(
                message="Failed to initialize vector collection",
                operation="create",
                details={"error": str(e), "collection": self._collection_name},
            ) from e

    def insert(self, document: VectorDocument) -> str:
        """
        Insert one document.

        Raises:
            VectorStoreError: On dimension mismatch or API failure
        """
        validate_dimension(document.vector, self._dimension)
        try:
            result = self._collection.insert_one(self._to_astra(document))
            return str(result.inserted_id)
        except Exception as e:
            raise VectorStoreError(
                message="Failed to insert vector",
                operation="insert",
                details={"error": str(e), "source_id": document.source_id},
            ) from e

    def insert_many(self, documents: list[VectorDocument]) -> int:
        """
        Insert documents in one batch.

        All vectors are validated before anything is sent.

        Raises:
            VectorStoreError: On dimension mismatch or API failure
        """
        if not documents:
            return 0
        for document in documents:
            validate_dimension(document.vector, self._dimension)
        try:
            result = self._collection.insert_many([self._to_astra(d) for d in documents])
            return len(result.inserted_ids)
        except Exception as e:
            raise VectorStoreError(
                message="Failed to insert vectors",
                operation="insert_many",
                details={"error": str(e), "document_count": len(documents)},
            ) from e

    def search(self, query: VectorQuery) -> list[VectorSearchResult]:
        """
        Find documents sorted by vector similarity.

        Args:
            query: Vector query with embedding, limit and threshold

        Returns:
            Results most similar first, filtered at ``query.min_similarity`` inclusive

        Raises:
            VectorStoreError: If the find operation fails
        """
        try:
            cursor = self._collection.find(
                {},
                sort={"$vector": query.embedding},
                limit=query.limit,
                include_similarity=True,
                projection={"*": True},
            )
            raw_documents = list(cursor)
        except Exception as e:
            raise VectorStoreError(
                message="Failed to perform vector search",
                operation="find",
                details={"error": str(e), "vector_length": len(query.embedding)},
            ) from e

        results = [self._to_result(doc, query.embedding) for doc in raw_documents]
        filtered = filter_by_similarity(results, query.min_similarity)
        logger.info(
            f"{__name__}:search - {len(filtered)} of {len(results)} documents passed "
            f"the similarity threshold of {query.min_similarity}"
        )
        return filtered

    def has_documents(self) -> bool:
        try:
            return self._collection.find_one({}) is not None
        except Exception as e:
            raise VectorStoreError(
                message="Failed to check collection contents",
                operation="find_one",
                details={"error": str(e)},
            ) from e

    def count(self, upper_bound: int = 1000) -> int:
        try:
            return int(self._collection.count_documents({}, upper_bound=upper_bound))
        except TooManyDocumentsToCountException:
            return upper_bound
        except Exception as e:
            raise VectorStoreError(
                message="Failed to count documents",
                operation="count",
                details={"error": str(e)},
            ) from e

    def stats(self) -> CollectionStats:
        total = self.count()
        try:
            sample = self._collection.find_one({}, projection={"*": True})
        except Exception as e:
            raise VectorStoreError(
                message="Failed to read sample document",
                operation="find_one",
                details={"error": str(e)},
            ) from e

        vector = self._vector_of(sample) if sample else None
        return CollectionStats(
            name=self._collection_name,
            document_count=total,
            sample_title=sample.get("title") if sample else None,
            sample_text_preview=(sample.get("text") or "")[:100] if sample else None,
            sample_vector_length=len(vector) if vector else None,
        )

    def drop_collection(self) -> None:
        try:
            self._db.drop_collection(self._collection_name)
            logger.info(f"{__name__}:drop_collection - Collection {self._collection_name} deleted")
        except Exception as e:
            raise VectorStoreError(
                message="Failed to drop collection",
                operation="drop",
                details={"error": str(e), "collection": self._collection_name},
            ) from e

    @staticmethod
    def _to_astra(document: VectorDocument) -> dict[str, Any]:
        """Map a VectorDocument to the stored JSON shape."""
        payload: dict[str, Any] = {
            "text": document.text,
            "$vector": document.vector,
            "metadata": document.metadata,
            "createdAt": datetime.now(timezone.utc),
        }
        if document.id:
            payload["_id"] = document.id
        if document.title:
            payload["title"] = document.title
        if document.source_id:
            payload["sourceId"] = document.source_id
        return payload

    @staticmethod
    def _vector_of(doc: dict[str, Any]) -> list[float] | None:
        return doc.get("$vector") or doc.get("embedding")

    def _to_result(self, doc: dict[str, Any], query_embedding: list[float]) -> VectorSearchResult:
        """Convert a raw document, computing similarity when the API omitted it."""
        similarity = doc.get("$similarity")
        if similarity is None:
            vector = self._vector_of(doc)
            if vector:
                similarity = cosine_similarity(query_embedding, list(vector))
                logger.debug(f"{__name__}:_to_result - Calculated similarity {similarity:.4f} for {doc.get('_id')}")
            else:
                logger.warning(f"{__name__}:_to_result - Document missing vector data: {doc.get('_id')}")
                similarity = 0.0

        return VectorSearchResult(
            document_id=str(doc.get("_id", "")),
            text=doc.get("text") or "",
            title=doc.get("title"),
            source_id=doc.get("sourceId"),
            metadata=doc.get("metadata") or {},
            similarity=float(similarity),
        )
