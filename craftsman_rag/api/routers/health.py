"""
Health check API endpoints.

Routes: GET /health, GET /health/vector-store

Dependencies: craftsman_rag.boundary.vdb
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from craftsman_rag.api.deps import get_vector_store
from craftsman_rag.boundary.vdb.base import VectorStore
from craftsman_rag.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    document_count: int | None = None


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/vector-store", response_model=HealthResponse)
async def health_check_vector_store(
    vector_store: VectorStore = Depends(get_vector_store),
):
    """Count documents in the collection; 503 when the store is unreachable."""
    try:
        count = await run_in_threadpool(vector_store.count)
    except VectorStoreError as e:
        logger.error(f"{__name__}:health_check_vector_store - {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=HealthResponse(status="unhealthy", message=e.message).model_dump(exclude_none=True),
        )
    return HealthResponse(status="healthy", message="Vector store accessible", document_count=count)
