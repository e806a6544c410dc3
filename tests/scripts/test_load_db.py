"""Tests for the offline loader CLI."""

from unittest.mock import MagicMock

import pytest

from craftsman_rag.boundary.vdb.memory_store import InMemoryVectorStore
from craftsman_rag.boundary.vdb.vector_schemas import VectorDocument
from craftsman_rag.core.exceptions import SourceAPIError, VectorStoreError
from craftsman_rag.models.craftsman import CraftsmanPage, CraftsmanRecord
from craftsman_rag.scripts.load_db import LoaderRuntime, build_parser, main
from tests.conftest import DIMENSION, FakeEmbedder


@pytest.fixture
def store() -> InMemoryVectorStore:
    return InMemoryVectorStore(collection_name="cli", dimension=DIMENSION)


def _runtime(settings, store, **kwargs) -> LoaderRuntime:
    kwargs.setdefault("embedder", FakeEmbedder())
    return LoaderRuntime(settings, vector_store=store, **kwargs)


class TestParser:
    def test_command_is_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_scrape_needs_urls(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["scrape"])


class TestLoadCommand:
    def test_load_inserts_records(self, settings, store, capsys) -> None:
        # Arrange
        settings.source_api.crafts = ["نجار"]
        api = MagicMock()
        api.fetch_page.return_value = CraftsmanPage(
            records=[CraftsmanRecord.model_validate({"id": 1, "name": "أحمد", "craft": {"name": "نجار"}})],
            last_page=1,
        )

        # Act
        code = main(["load"], runtime=_runtime(settings, store, api_client=api))

        # Assert
        assert code == 0
        assert store.count() == 1
        out = capsys.readouterr().out
        assert "Inserted: 1" in out
        assert "نجار: 1" in out


class TestScrapeCommand:
    def test_failed_url_gives_exit_code_one(self, settings, store, capsys) -> None:
        fetcher = MagicMock()
        fetcher.fetch_text.side_effect = [
            "Some page text about plumbing",
            SourceAPIError("Page returned an error status", url="http://b", status_code=404),
        ]

        code = main(["scrape", "http://a", "http://b"], runtime=_runtime(settings, store, fetcher=fetcher))

        assert code == 1
        assert store.count() == 1
        assert "http://a: 1/1 chunks inserted" in capsys.readouterr().out


class TestMaintenanceCommands:
    def test_inspect_and_reset(self, settings, store, capsys) -> None:
        store.insert(VectorDocument(text="اسم الحرفي: أحمد", vector=[1.0, 0.0, 0.0, 0.0], title="أحمد - نجار"))
        runtime = _runtime(settings, store)

        assert main(["inspect"], runtime=runtime) == 0
        assert "Total documents in cli: 1" in capsys.readouterr().out

        assert main(["reset"], runtime=runtime) == 0
        assert store.count() == 0

    def test_store_error_is_exit_code_one(self, settings) -> None:
        store = MagicMock()
        store.stats.side_effect = VectorStoreError("Failed to read collection", operation="find")

        assert main(["inspect"], runtime=_runtime(settings, store)) == 1


class TestDiagnostics:
    def test_embedding_dimension_matches(self, settings, store, capsys) -> None:
        assert main(["test-embedding"], runtime=_runtime(settings, store)) == 0
        assert "Dimensions: 4" in capsys.readouterr().out

    def test_embedding_dimension_mismatch(self, settings, store) -> None:
        embedder = FakeEmbedder(default=[1.0, 0.0])

        assert main(["test-embedding", "--text", "hi"], runtime=_runtime(settings, store, embedder=embedder)) == 1

    def test_check_api(self, settings, store) -> None:
        api = MagicMock()
        api.check_connection.return_value = False

        assert main(["check-api"], runtime=_runtime(settings, store, api_client=api)) == 1
