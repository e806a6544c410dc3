"""
Route error handling.

Maps domain exceptions raised by services to JSON error responses of the
form ``{"error": ..., "details": ...}``.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import status
from fastapi.responses import JSONResponse

from craftsman_rag.core.exceptions import (
    EmbeddingError,
    GenerationError,
    ValidationError,
    VectorStoreError,
)
from craftsman_rag.models.chat import ErrorResponse

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def error_response(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


def handle_service_errors(func: F) -> F:
    """
    Decorator turning service exceptions into JSON error responses.

    - ValidationError -> 400 with the validation message
    - EmbeddingError -> 502
    - VectorStoreError -> 503
    - GenerationError and anything unexpected -> 500
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except ValidationError as e:
            logger.warning("Invalid request", extra={"error": str(e)})
            return error_response(status.HTTP_400_BAD_REQUEST, e.message)

        except EmbeddingError as e:
            logger.error("Embedding provider failed", extra={"error": str(e)})
            return error_response(status.HTTP_502_BAD_GATEWAY, "Embedding service error", e.message)

        except VectorStoreError as e:
            logger.error("Vector store unavailable", extra={"error": str(e)})
            return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "Vector store unavailable", e.message)

        except GenerationError as e:
            logger.error("Generation failed before streaming", extra={"error": str(e)})
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Internal server error",
                str(e.details.get("error", e.message)),
            )

        except Exception as e:
            logger.exception("Unexpected error in route", extra={"error_type": type(e).__name__})
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", str(e))

    return wrapper  # type: ignore
