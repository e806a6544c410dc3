"""
API routers.

All routers are mounted under /api/v1 by the app factory.
"""

from craftsman_rag.api.routers.chat import router as chat_router
from craftsman_rag.api.routers.craftsmen import router as craftsmen_router
from craftsman_rag.api.routers.embed import router as embed_router
from craftsman_rag.api.routers.health import router as health_router

__all__ = ["chat_router", "craftsmen_router", "embed_router", "health_router"]
