"""API and domain schemas."""

from craftsman_rag.models.chat import ChatMessage, ChatRequest, ErrorResponse
from craftsman_rag.models.craftsman import Craftsman, CraftsmanPage, CraftsmanRecord
from craftsman_rag.models.embedding import EmbeddingResult, EmbedRequest
from craftsman_rag.models.streaming import ContextSource, StreamEvent, StreamEventType

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ContextSource",
    "Craftsman",
    "CraftsmanPage",
    "CraftsmanRecord",
    "EmbedRequest",
    "EmbeddingResult",
    "ErrorResponse",
    "StreamEvent",
    "StreamEventType",
]
