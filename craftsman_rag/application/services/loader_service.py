"""
Offline loading services.

CraftsmenLoader pages through the craftsmen directory, formats each record,
embeds it and writes it to the vector store. PageIngestionService does the
same for scraped web pages, chunk by chunk. Both run sequentially; a record
or chunk that fails is logged and skipped, never retried.

Dependencies: craftsman_rag.boundary, craftsman_rag.core
System role: Vector store population
"""

import logging

from pydantic import BaseModel, Field

from craftsman_rag.boundary.embeddings.base import DOCUMENT_TASK, Embedder
from craftsman_rag.boundary.sources.craftsmen_api import CraftsmenApiClient
from craftsman_rag.boundary.sources.web_page import PageFetcher
from craftsman_rag.boundary.vdb.base import VectorStore
from craftsman_rag.boundary.vdb.vector_schemas import VectorDocument
from craftsman_rag.core.chunking import TextChunker
from craftsman_rag.core.exceptions import CraftsmanRAGException
from craftsman_rag.core.record_formatter import document_metadata, document_title, format_craftsman
from craftsman_rag.models.craftsman import CraftsmanRecord

logger = logging.getLogger(__name__)


class LoadReport(BaseModel):
    """Outcome of a loader run."""

    inserted: int = 0
    skipped: int = 0
    pages: int = 0
    per_craft: dict[str, int] = Field(default_factory=dict)


class IngestReport(BaseModel):
    """Outcome of ingesting one web page."""

    url: str
    chunks: int = 0
    inserted: int = 0
    skipped: int = 0


class CraftsmenLoader:
    """Loads craftsmen directory records into the vector store."""

    def __init__(
        self,
        api_client: CraftsmenApiClient,
        embedder: Embedder,
        vector_store: VectorStore,
        crafts: list[str],
    ) -> None:
        self._api = api_client
        self._embedder = embedder
        self._store = vector_store
        self._crafts = crafts

    def ensure_collection(self) -> int:
        """
        Create the collection if missing and report how many documents it holds.

        Raises:
            VectorStoreError: If the collection cannot be created or counted
        """
        created = self._store.ensure_collection()
        count = 0 if created else self._store.count()
        if created:
            logger.info(f"{__name__}:ensure_collection - Collection created")
        elif count == 0:
            logger.warning(
                f"{__name__}:ensure_collection - Collection exists but is empty. "
                f"Consider resetting it if it was created with different settings."
            )
        else:
            logger.info(f"{__name__}:ensure_collection - Collection already holds {count} documents")
        return count

    def load(self) -> LoadReport:
        """Fetch every configured craft page by page and insert each record."""
        report = LoadReport()
        for craft in self._crafts:
            logger.info(f"{__name__}:load - Processing craft: {craft}")
            report.per_craft[craft] = 0
            page = 1
            while True:
                result = self._api.fetch_page(craft, page)
                if result is None or result.is_empty:
                    logger.info(f"{__name__}:load - No more data for {craft}")
                    break
                if not result.records:
                    logger.warning(f"{__name__}:load - No valid records on page {page} for {craft}")

                report.pages += 1
                for record in result.records:
                    if self.load_record(record):
                        report.inserted += 1
                        report.per_craft[craft] += 1
                    else:
                        report.skipped += 1

                if result.last_page > page:
                    page += 1
                else:
                    break

        logger.info(
            f"{__name__}:load - Total craftsmen documents inserted: {report.inserted}",
            extra={"skipped": report.skipped, "pages": report.pages},
        )
        return report

    def load_record(self, record: CraftsmanRecord) -> bool:
        """Embed and insert one record. Returns False when it was skipped."""
        text = format_craftsman(record)
        try:
            embedding = self._embedder.embed(text, DOCUMENT_TASK)
            metadata = document_metadata(record)
            document = VectorDocument(
                text=text,
                vector=embedding.embedding,
                title=document_title(record),
                source_id=str(record.id),
                metadata=metadata,
            )
            inserted_id = self._store.insert(document)
        except CraftsmanRAGException as e:
            logger.error(
                f"{__name__}:load_record - Error processing craftsman {record.name}: {e}",
                extra={"record_id": str(record.id)},
            )
            return False

        logger.debug(f"{__name__}:load_record - Document inserted with ID: {inserted_id}")
        return True


class PageIngestionService:
    """Scrapes pages, chunks their text and inserts one document per chunk."""

    def __init__(
        self,
        fetcher: PageFetcher,
        chunker: TextChunker,
        embedder: Embedder,
        vector_store: VectorStore,
    ) -> None:
        self._fetcher = fetcher
        self._chunker = chunker
        self._embedder = embedder
        self._store = vector_store

    def ingest_url(self, url: str) -> IngestReport:
        """
        Ingest one page.

        Raises:
            SourceAPIError: If the page cannot be fetched
        """
        text = self._fetcher.fetch_text(url)
        chunks = self._chunker.split(text)
        report = IngestReport(url=url, chunks=len(chunks))

        for index, chunk in enumerate(chunks):
            try:
                embedding = self._embedder.embed(chunk, DOCUMENT_TASK)
                self._store.insert(
                    VectorDocument(
                        text=chunk,
                        vector=embedding.embedding,
                        source_id=url,
                        metadata={"url": url, "chunk_index": index, "chunk_count": len(chunks)},
                    )
                )
                report.inserted += 1
            except CraftsmanRAGException as e:
                logger.error(f"{__name__}:ingest_url - Skipping chunk {index} of {url}: {e}")
                report.skipped += 1

        logger.info(
            f"{__name__}:ingest_url - Ingested {report.inserted}/{report.chunks} chunks from {url}"
        )
        return report
