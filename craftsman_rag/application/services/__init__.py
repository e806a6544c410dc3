"""
Application services.

Orchestration layer between the API / CLI and the core and boundary layers.
"""

from craftsman_rag.application.services.chat_service import ChatService
from craftsman_rag.application.services.loader_service import (
    CraftsmenLoader,
    IngestReport,
    LoadReport,
    PageIngestionService,
)

__all__ = [
    "ChatService",
    "CraftsmenLoader",
    "IngestReport",
    "LoadReport",
    "PageIngestionService",
]
