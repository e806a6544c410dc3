"""
Chat service for craftsman Q&A with RAG.

Validates chat requests, starts generation through the RAGAgent and turns
its events into Server-Sent-Events frames. Nothing is persisted; each
request stands alone.

Dependencies: craftsman_rag.core.rag_agent
System role: Chat service orchestration layer
"""

import logging
from collections.abc import AsyncGenerator

from craftsman_rag.core.exceptions import ValidationError
from craftsman_rag.core.rag_agent import PreparedStream, RAGAgent
from craftsman_rag.models.chat import ChatRequest
from craftsman_rag.models.streaming import StreamEventType
from craftsman_rag.observability.log_utils import safe_log_value

logger = logging.getLogger(__name__)

INVALID_MESSAGE = "Invalid message format"


class ChatService:
    """
    Chat service for streamed answers.

    ``stream_chat`` and ``stream_general`` do all upstream work that can fail
    with an HTTP status before returning; the returned generator only relays.
    """

    def __init__(self, rag_agent: RAGAgent) -> None:
        self.rag_agent = rag_agent

    @staticmethod
    def validate_request(request: ChatRequest) -> str:
        """
        Check that the conversation ends with a non-empty string message.

        Returns:
            str: The latest message content

        Raises:
            ValidationError: If the list is empty or the final content is not a non-empty string
        """
        latest = request.latest_content
        if not isinstance(latest, str) or not latest:
            raise ValidationError(
                INVALID_MESSAGE,
                field="messages",
                details={"message_count": len(request.messages), "content_type": type(latest).__name__},
            )
        return latest

    async def stream_chat(self, request: ChatRequest) -> AsyncGenerator[str, None]:
        """
        Answer the latest message from retrieved craftsman context.

        Raises:
            ValidationError: Before any upstream call, for an invalid request
            GenerationError: If the model fails before its first token
        """
        question = self.validate_request(request)
        logger.info(
            f"{__name__}:stream_chat - Processing query",
            extra={"query_preview": safe_log_value(question, 50), "message_count": len(request.messages)},
        )
        prepared = await self.rag_agent.prepare_chat(request.messages)
        return self._relay(prepared)

    async def stream_general(self, request: ChatRequest) -> AsyncGenerator[str, None]:
        """
        Answer without retrieval.

        Raises:
            ValidationError: Before any upstream call, for an invalid request
            GenerationError: If the model fails before its first token
        """
        self.validate_request(request)
        prepared = await self.rag_agent.prepare_general(request.messages)
        return self._relay(prepared)

    async def _relay(self, prepared: PreparedStream) -> AsyncGenerator[str, None]:
        event_count = 0
        async for event in prepared.events():
            event_count += 1
            if event.event != StreamEventType.TOKEN:
                logger.info(f"{__name__}:_relay - Event #{event_count}: {event.event.value}")
            yield event.to_sse()
        logger.info(f"{__name__}:_relay - Stream finished, total_events={event_count}")
