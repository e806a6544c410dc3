"""
Text chunking for page ingestion.

Dependencies: langchain_text_splitters
System role: Document chunking before embedding
"""

import logging

from langchain_text_splitters import RecursiveCharacterTextSplitter

logger = logging.getLogger(__name__)


class TextChunker:
    """Recursive character splitter with the configured size and overlap."""

    def __init__(self, chunk_size: int = 512, chunk_overlap: int = 100) -> None:
        """
        Args:
            chunk_size: Maximum characters per chunk
            chunk_overlap: Characters shared by consecutive chunks
        """
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            length_function=len,
        )

    def split(self, text: str) -> list[str]:
        chunks = [c for c in self._splitter.split_text(text) if c.strip()]
        logger.debug(f"{__name__}:split - Split {len(text)} chars into {len(chunks)} chunks")
        return chunks
