"""
Server-Sent-Events schemas for chat responses.

A chat response is a sequence of ``context``, ``token``..., optional
``craftsmen`` and ``complete`` events, or ends early with ``error``.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel


class StreamEventType(str, Enum):
    """SSE ``event:`` names."""

    CONTEXT = "context"
    TOKEN = "token"
    CRAFTSMEN = "craftsmen"
    COMPLETE = "complete"
    ERROR = "error"


class StreamEvent(BaseModel):
    """One SSE frame: an event name and its JSON payload."""

    event: StreamEventType
    data: dict[str, Any]

    def to_sse(self) -> str:
        """Format as ``event: {type}\\ndata: {json}\\n\\n`` (Arabic text kept unescaped)."""
        payload = json.dumps(self.data, ensure_ascii=False)
        return f"event: {self.event.value}\ndata: {payload}\n\n"


class ContextSource(BaseModel):
    """Summary of one retrieved document in the ``context`` event."""

    document_id: str
    title: str | None = None
    source_id: str | None = None
    similarity: float | None = None
