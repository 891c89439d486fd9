"""Error Handlers - global exception handlers producing the ApiResponse envelope.

Invariants:
    - VocabularyError → its http_status, envelope with public message
    - RequestValidationError → 400 envelope naming the offending parameters
    - Exception (catch-all) → 500 envelope, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (VocabularyError), validation (Pydantic), catch-all (Exception)
    - Same envelope as the word routes: clients parse one error shape everywhere
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from vocabulary_api.core.errors import VocabularyError, GENERIC_ERROR_MESSAGE
from vocabulary_api.schemas.envelope import ApiResponse

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_vocabulary_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_vocabulary_error_handler(app: FastAPI) -> None:

    @app.exception_handler(VocabularyError)
    async def vocabulary_error_handler(request: Request, exc: VocabularyError):
        """Handle all vocabulary domain/infrastructure errors."""
        logger.error(
            f"VocabularyError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ApiResponse.error_result(GENERIC_ERROR_MESSAGE).model_dump(),
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build envelope listing each invalid parameter."""
    fields = sorted({
        str(e["loc"][-1]) for e in exc.errors() if e.get("loc")
    })
    message = "Invalid request parameters"
    if fields:
        message = f"{message}: {', '.join(fields)}"
    return ApiResponse.error_result(message).model_dump()
