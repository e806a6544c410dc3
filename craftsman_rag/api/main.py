"""
Craftsman RAG HTTP application.

``create_app`` wires middleware and the /api/v1 routers around a
ServiceContainer, which the lifespan builds from settings unless one is
injected. ``run`` is the ``craftsman-api`` console entry point.

Dependencies: fastapi, uvicorn, craftsman_rag.api.routers
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from craftsman_rag.api.deps.dependencies import ServiceContainer, build_services
from craftsman_rag.api.routers import chat_router, craftsmen_router, embed_router, health_router
from craftsman_rag.configs import Settings, get_settings
from craftsman_rag.observability.logger import configure_logging
from craftsman_rag.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, services: ServiceContainer | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to build services from (defaults to environment)
        services: Pre-built container; when given, nothing is built or closed
    """
    settings = settings or (services.settings if services else get_settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = services is None
        container = services or build_services(settings)
        app.state.services = container
        logger.info(f"{__name__}:lifespan - Service container ready")

        yield

        if owned:
            container.close()
            logger.info(f"{__name__}:lifespan - Service container closed")

    app = FastAPI(
        title="Craftsman RAG API",
        description="Retrieval-augmented assistant for finding craftsmen",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Also set eagerly so injected containers work without running the lifespan
    if services is not None:
        app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")
    app.include_router(embed_router, prefix="/api/v1")
    app.include_router(craftsmen_router, prefix="/api/v1")

    return app


def run() -> None:
    """Console entry point: configure logging and serve the app with uvicorn."""
    load_dotenv()
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host="0.0.0.0",
        port=8000,
    )


if __name__ == "__main__":
    run()
