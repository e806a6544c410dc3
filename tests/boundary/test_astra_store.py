"""
Tests for the Astra DB vector store wrapper.

The Data API database handle is replaced with MagicMock objects.
"""

from unittest.mock import MagicMock

import pytest
from astrapy.exceptions import TooManyDocumentsToCountException

from craftsman_rag.boundary.vdb.astra_store import AstraVectorStore
from craftsman_rag.boundary.vdb.vector_schemas import VectorDocument, VectorQuery
from craftsman_rag.core.exceptions import VectorStoreError


@pytest.fixture
def collection() -> MagicMock:
    return MagicMock()


@pytest.fixture
def database(collection: MagicMock) -> MagicMock:
    db = MagicMock()
    db.get_collection.return_value = collection
    db.create_collection.return_value = collection
    return db


@pytest.fixture
def store(database: MagicMock) -> AstraVectorStore:
    return AstraVectorStore(
        api_endpoint=None,
        token=None,
        collection_name="craftsmen",
        dimension=3,
        database=database,
    )


class TestConstruction:
    def test_missing_credentials_raise(self) -> None:
        with pytest.raises(VectorStoreError) as exc_info:
            AstraVectorStore(api_endpoint=None, token=None, collection_name="craftsmen")

        assert exc_info.value.details["operation"] == "connect"


class TestEnsureCollection:
    def test_creates_missing_collection_with_vector_options(
        self, store: AstraVectorStore, database: MagicMock
    ) -> None:
        database.list_collection_names.return_value = ["other"]

        created = store.ensure_collection()

        assert created is True
        database.create_collection.assert_called_once_with(
            "craftsmen",
            definition={"vector": {"dimension": 3, "metric": "cosine"}},
        )

    def test_existing_collection_is_left_alone(self, store: AstraVectorStore, database: MagicMock) -> None:
        database.list_collection_names.return_value = ["craftsmen"]

        assert store.ensure_collection() is False
        database.create_collection.assert_not_called()

    def test_sdk_failure_is_wrapped(self, store: AstraVectorStore, database: MagicMock) -> None:
        database.list_collection_names.side_effect = RuntimeError("unauthorized")

        with pytest.raises(VectorStoreError) as exc_info:
            store.ensure_collection()

        assert "unauthorized" in exc_info.value.details["error"]


class TestInsert:
    def test_insert_maps_fields(self, store: AstraVectorStore, collection: MagicMock) -> None:
        collection.insert_one.return_value = MagicMock(inserted_id="abc")
        document = VectorDocument(
            text="اسم الحرفي: أحمد",
            vector=[0.1, 0.2, 0.3],
            title="أحمد - نجار",
            source_id="7",
            metadata={"craft": "نجار"},
        )

        inserted_id = store.insert(document)

        payload = collection.insert_one.call_args.args[0]
        assert inserted_id == "abc"
        assert payload["$vector"] == [0.1, 0.2, 0.3]
        assert payload["text"] == "اسم الحرفي: أحمد"
        assert payload["title"] == "أحمد - نجار"
        assert payload["sourceId"] == "7"
        assert payload["metadata"] == {"craft": "نجار"}
        assert "createdAt" in payload
        assert "_id" not in payload

    def test_insert_rejects_wrong_dimension_without_calling_sdk(
        self, store: AstraVectorStore, collection: MagicMock
    ) -> None:
        with pytest.raises(VectorStoreError):
            store.insert(VectorDocument(text="x", vector=[0.1, 0.2]))

        collection.insert_one.assert_not_called()

    def test_insert_many_returns_count(self, store: AstraVectorStore, collection: MagicMock) -> None:
        collection.insert_many.return_value = MagicMock(inserted_ids=["a", "b"])
        documents = [VectorDocument(text=t, vector=[1.0, 0.0, 0.0]) for t in ("a", "b")]

        assert store.insert_many(documents) == 2
        assert store.insert_many([]) == 0


class TestSearch:
    def test_search_uses_vector_sort_and_similarity(self, store: AstraVectorStore, collection: MagicMock) -> None:
        collection.find.return_value = [
            {"_id": "1", "text": "a", "title": "A", "sourceId": "s1", "$similarity": 0.91},
            {"_id": "2", "text": "b", "$similarity": 0.2},
            {"_id": "3", "text": "c", "$similarity": 0.19},
        ]

        results = store.search(VectorQuery(embedding=[1.0, 0.0, 0.0], limit=15, min_similarity=0.2))

        kwargs = collection.find.call_args.kwargs
        assert kwargs["sort"] == {"$vector": [1.0, 0.0, 0.0]}
        assert kwargs["limit"] == 15
        assert kwargs["include_similarity"] is True
        assert [r.document_id for r in results] == ["1", "2"]
        assert results[0].source_id == "s1"

    def test_missing_similarity_is_computed_from_stored_vector(
        self, store: AstraVectorStore, collection: MagicMock
    ) -> None:
        collection.find.return_value = [
            {"_id": "vec", "text": "a", "$vector": [1.0, 0.0, 0.0]},
            {"_id": "legacy", "text": "b", "embedding": [0.0, 1.0, 0.0]},
            {"_id": "novector", "text": "c"},
        ]

        results = store.search(VectorQuery(embedding=[1.0, 0.0, 0.0]))

        scores = {r.document_id: r.similarity for r in results}
        assert scores["vec"] == pytest.approx(1.0)
        assert scores["legacy"] == pytest.approx(0.0)
        assert scores["novector"] == 0.0

    def test_find_failure_is_wrapped(self, store: AstraVectorStore, collection: MagicMock) -> None:
        collection.find.side_effect = ConnectionError("timeout")

        with pytest.raises(VectorStoreError) as exc_info:
            store.search(VectorQuery(embedding=[1.0, 0.0, 0.0]))

        assert exc_info.value.details["operation"] == "find"


class TestMaintenance:
    def test_has_documents(self, store: AstraVectorStore, collection: MagicMock) -> None:
        collection.find_one.return_value = None
        assert store.has_documents() is False

        collection.find_one.return_value = {"_id": "1"}
        assert store.has_documents() is True

    def test_count_caps_at_upper_bound(self, store: AstraVectorStore, collection: MagicMock) -> None:
        collection.count_documents.side_effect = TooManyDocumentsToCountException(
            "Document count exceeds the upper bound", server_max_count_exceeded=False
        )

        assert store.count(upper_bound=1000) == 1000

    def test_other_count_failures_are_wrapped(self, store: AstraVectorStore, collection: MagicMock) -> None:
        collection.count_documents.side_effect = RuntimeError("Count would exceed a timeout")

        with pytest.raises(VectorStoreError) as exc_info:
            store.count()

        assert exc_info.value.details["operation"] == "count"

    def test_stats_summarises_sample(self, store: AstraVectorStore, collection: MagicMock) -> None:
        collection.count_documents.return_value = 2
        collection.find_one.return_value = {"_id": "1", "title": "أحمد - نجار", "text": "x" * 150, "$vector": [0.0] * 3}

        stats = store.stats()

        assert stats.document_count == 2
        assert stats.sample_title == "أحمد - نجار"
        assert len(stats.sample_text_preview) == 100
        assert stats.sample_vector_length == 3

    def test_drop_collection(self, store: AstraVectorStore, database: MagicMock) -> None:
        store.drop_collection()

        database.drop_collection.assert_called_once_with("craftsmen")
