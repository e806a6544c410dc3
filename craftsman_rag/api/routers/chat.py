"""Chat API endpoints.

Routes:
- POST /chat - Stream a grounded answer using Server-Sent Events (SSE)
- POST /chat/general - Stream a general assistant answer (no retrieval)

The body is parsed by hand so that malformed JSON and wrong shapes are
answered with the same 400 body as an invalid final message.

Dependencies: craftsman_rag.application.services.chat_service
System role: Chat messaging HTTP API with streaming support
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from craftsman_rag.api.deps import get_chat_service
from craftsman_rag.api.routers.error_handling import handle_service_errors
from craftsman_rag.application.services.chat_service import INVALID_MESSAGE, ChatService
from craftsman_rag.core.exceptions import ValidationError
from craftsman_rag.models.chat import ChatRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


async def parse_chat_request(request: Request) -> ChatRequest:
    """
    Read a ChatRequest from the raw body.

    Raises:
        ValidationError: If the body is not JSON or not ``{"messages": [...]}``
    """
    try:
        body: Any = await request.json()
        return ChatRequest.model_validate(body)
    except ValueError as e:
        # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
        raise ValidationError(INVALID_MESSAGE, field="body", details={"error": str(e)[:200]}) from e


@router.post("", response_model=None)
@handle_service_errors
async def chat(
    request: Request,
    chat_service: ChatService = Depends(get_chat_service),
):
    """Stream an answer grounded in retrieved craftsman documents.

    Events:
        context: {"documents_found", "document_count", "sources"}
        token: {"token", "index"}
        craftsmen: {"craftsmen": [...]} when the answer carries document blocks
        complete: {"full_answer"}
        error: {"code", "message"} if generation fails mid-stream
    """
    chat_request = await parse_chat_request(request)
    stream = await chat_service.stream_chat(chat_request)
    return StreamingResponse(stream, media_type="text/event-stream", headers=SSE_HEADERS)


@router.post("/general", response_model=None)
@handle_service_errors
async def chat_general(
    request: Request,
    chat_service: ChatService = Depends(get_chat_service),
):
    """Stream a general assistant answer with the same event protocol."""
    chat_request = await parse_chat_request(request)
    stream = await chat_service.stream_general(chat_request)
    return StreamingResponse(stream, media_type="text/event-stream", headers=SSE_HEADERS)
