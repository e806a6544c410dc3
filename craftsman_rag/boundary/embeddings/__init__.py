"""Embedding provider clients."""

from craftsman_rag.boundary.embeddings.base import DOCUMENT_TASK, QUERY_TASK, Embedder
from craftsman_rag.boundary.embeddings.sentence_client import SentenceTransformerEmbedder

__all__ = ["DOCUMENT_TASK", "QUERY_TASK", "Embedder", "SentenceTransformerEmbedder"]
