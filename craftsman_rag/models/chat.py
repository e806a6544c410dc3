"""
Chat domain models and schemas.

Request/response schemas for chat operations. Message content is typed
loosely so that non-string content reaches the service-level check and
is answered with a 400 instead of a framework validation error.

Dependencies: pydantic
System role: Chat API contracts
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

ChatRole = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    """Single chat message as sent by the web client."""

    id: str | None = Field(default=None, description="Client-side message identifier")
    role: ChatRole = Field(description="Message role: 'system', 'user' or 'assistant'")
    content: Any = Field(default=None, description="Message text")


class ChatRequest(BaseModel):
    """Request schema for chat endpoints."""

    messages: list[ChatMessage] = Field(description="Conversation so far, latest message last")

    @property
    def latest_content(self) -> Any:
        """Content of the final message, or None for an empty conversation."""
        if not self.messages:
            return None
        return self.messages[-1].content


class ErrorResponse(BaseModel):
    """JSON error body returned with non-2xx status codes."""

    error: str
    details: str | None = None
