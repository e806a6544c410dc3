"""
Offline loader CLI for the craftsman vector collection.

Usage:
    craftsman-loader load
    craftsman-loader scrape https://example.com/page ...
    craftsman-loader reset
    craftsman-loader inspect
    craftsman-loader test-embedding
    craftsman-loader check-api

Purpose:
- Create the collection (configured dimension, cosine metric) when missing
- Page through the craftsmen directory and insert one document per record
- Ingest web pages as chunked documents
- Drop or inspect the collection, check the embedding service and the API

Dependencies: argparse, craftsman_rag.application.services, craftsman_rag.boundary
System role: Vector store population and maintenance
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

from craftsman_rag.application.services.loader_service import CraftsmenLoader, PageIngestionService
from craftsman_rag.boundary.embeddings.base import DOCUMENT_TASK, Embedder
from craftsman_rag.boundary.embeddings.embedder_factory import build_embedder
from craftsman_rag.boundary.sources.craftsmen_api import CraftsmenApiClient
from craftsman_rag.boundary.sources.web_page import PageFetcher
from craftsman_rag.boundary.vdb.base import VectorStore
from craftsman_rag.boundary.vdb.vector_store_factory import build_vector_store
from craftsman_rag.configs import Settings, get_settings
from craftsman_rag.core.chunking import TextChunker
from craftsman_rag.core.exceptions import CraftsmanRAGException
from craftsman_rag.observability.logger import configure_logging

logger = logging.getLogger(__name__)

TEST_SENTENCE = "This is a test sentence for embedding generation."


class LoaderRuntime:
    """Lazily built clients for one CLI run. Pass instances to override."""

    def __init__(
        self,
        settings: Settings,
        vector_store: VectorStore | None = None,
        embedder: Embedder | None = None,
        api_client: CraftsmenApiClient | None = None,
        fetcher: PageFetcher | None = None,
    ) -> None:
        self.settings = settings
        self._vector_store = vector_store
        self._embedder = embedder
        self._api_client = api_client
        self._fetcher = fetcher

    @property
    def vector_store(self) -> VectorStore:
        if self._vector_store is None:
            self._vector_store = build_vector_store(self.settings)
        return self._vector_store

    @property
    def embedder(self) -> Embedder:
        if self._embedder is None:
            self._embedder = build_embedder(self.settings)
        return self._embedder

    @property
    def api_client(self) -> CraftsmenApiClient:
        if self._api_client is None:
            source = self.settings.source_api
            self._api_client = CraftsmenApiClient(
                url=source.url,
                token=source.token,
                page_size=source.page_size,
                timeout=source.timeout_seconds,
            )
        return self._api_client

    @property
    def fetcher(self) -> PageFetcher:
        if self._fetcher is None:
            self._fetcher = PageFetcher(timeout=self.settings.scraper.timeout_seconds)
        return self._fetcher

    def craftsmen_loader(self) -> CraftsmenLoader:
        return CraftsmenLoader(
            api_client=self.api_client,
            embedder=self.embedder,
            vector_store=self.vector_store,
            crafts=self.settings.source_api.crafts,
        )

    def page_ingestion(self) -> PageIngestionService:
        return PageIngestionService(
            fetcher=self.fetcher,
            chunker=TextChunker(
                chunk_size=self.settings.scraper.chunk_size,
                chunk_overlap=self.settings.scraper.chunk_overlap,
            ),
            embedder=self.embedder,
            vector_store=self.vector_store,
        )


def cmd_load(runtime: LoaderRuntime, args: argparse.Namespace) -> int:
    loader = runtime.craftsmen_loader()
    loader.ensure_collection()
    report = loader.load()

    print(f"Inserted: {report.inserted}  Skipped: {report.skipped}  Pages: {report.pages}")
    for craft, count in report.per_craft.items():
        print(f"  {craft}: {count}")
    return 0


def cmd_scrape(runtime: LoaderRuntime, args: argparse.Namespace) -> int:
    runtime.vector_store.ensure_collection()
    service = runtime.page_ingestion()
    failed = 0
    for url in args.urls:
        try:
            report = service.ingest_url(url)
        except CraftsmanRAGException as e:
            logger.error(f"{__name__}:cmd_scrape - Failed to ingest {url}: {e}")
            failed += 1
            continue
        print(f"{url}: {report.inserted}/{report.chunks} chunks inserted")
    return 1 if failed else 0


def cmd_reset(runtime: LoaderRuntime, args: argparse.Namespace) -> int:
    runtime.vector_store.drop_collection()
    print(f"Collection {runtime.settings.astra_db.collection} deleted")
    return 0


def cmd_inspect(runtime: LoaderRuntime, args: argparse.Namespace) -> int:
    stats = runtime.vector_store.stats()
    print(f"Total documents in {stats.name}: {stats.document_count}")
    if stats.document_count:
        print(f"  Sample title: {stats.sample_title or 'No title'}")
        print(f"  Text preview: {stats.sample_text_preview}")
        print(f"  Vector length: {stats.sample_vector_length}")
    else:
        print("  Collection is empty")
    return 0


def cmd_test_embedding(runtime: LoaderRuntime, args: argparse.Namespace) -> int:
    result = runtime.embedder.embed(args.text, DOCUMENT_TASK)
    print(f"Model: {result.model}")
    print(f"Dimensions: {result.dimensions}")
    print(f"First values: {result.embedding[:5]}")
    if result.dimensions != runtime.settings.vector_store.dimension:
        print(f"WARNING: collection dimension is {runtime.settings.vector_store.dimension}")
        return 1
    return 0


def cmd_check_api(runtime: LoaderRuntime, args: argparse.Namespace) -> int:
    ok = runtime.api_client.check_connection()
    print("Craftsmen API reachable" if ok else "Craftsmen API NOT reachable")
    return 0 if ok else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="craftsman-loader",
        description="Populate and maintain the craftsman vector collection",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("load", help="Load craftsmen from the directory API").set_defaults(func=cmd_load)

    scrape = sub.add_parser("scrape", help="Ingest web pages as chunked documents")
    scrape.add_argument("urls", nargs="+", help="Page URLs")
    scrape.set_defaults(func=cmd_scrape)

    sub.add_parser("reset", help="Drop the collection").set_defaults(func=cmd_reset)
    sub.add_parser("inspect", help="Show document count and a sample").set_defaults(func=cmd_inspect)

    test_embedding = sub.add_parser("test-embedding", help="Embed a test sentence")
    test_embedding.add_argument("--text", default=TEST_SENTENCE, help="Text to embed")
    test_embedding.set_defaults(func=cmd_test_embedding)

    sub.add_parser("check-api", help="Check that the craftsmen directory API answers").set_defaults(func=cmd_check_api)
    return parser


def main(argv: list[str] | None = None, runtime: LoaderRuntime | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    if runtime is None:
        load_dotenv()
        settings = get_settings()
        configure_logging(settings.log_level)
        runtime = LoaderRuntime(settings)

    try:
        return args.func(runtime, args)
    except (CraftsmanRAGException, ValueError) as e:
        logger.error(f"{__name__}:main - {args.command} failed: {e}")
        return 1


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
