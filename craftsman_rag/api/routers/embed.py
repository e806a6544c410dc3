"""Embedding API endpoint.

Routes:
- POST /embed - Embed one text with the configured provider

Dependencies: craftsman_rag.boundary.embeddings
System role: Embedding diagnostics HTTP API
"""

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from craftsman_rag.api.deps import get_embedder
from craftsman_rag.api.routers.error_handling import handle_service_errors
from craftsman_rag.boundary.embeddings.base import Embedder
from craftsman_rag.models.embedding import EmbeddingResult, EmbedRequest

router = APIRouter(prefix="/embed", tags=["embedding"])


@router.post("", response_model=EmbeddingResult)
@handle_service_errors
async def embed_text(
    request: EmbedRequest,
    embedder: Embedder = Depends(get_embedder),
) -> EmbeddingResult:
    """Return ``{text, embedding, dimensions, model, task_type}``. Empty text is a 400."""
    return await run_in_threadpool(embedder.embed, request.text, request.task_type)
