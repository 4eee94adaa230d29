"""Error Handlers — keep HTTP failures in the tool-result envelope shape.

Invariants:
    - Every failure body is {status: "failed", error, errorCode}, same as dispatcher results
    - RequestValidationError → 400 VALIDATION_ERROR naming the first bad body field
    - Exception (catch-all) → 500 INTERNAL_ERROR, never leaks internal details

Design Decisions:
    - No DecompositionError handler: the dispatcher turns every domain error into an
      envelope before it can reach FastAPI
    - Extracted from main.py (ADR: ExMA import fan-out < 10)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from decomposition_engine.core.errors import (
    DecompositionError, ErrorCategory, ErrorSeverity, ToolValidationError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register the request-validation and catch-all handlers on the FastAPI app."""
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Malformed tool-call body (e.g. no action) — rejected before dispatch."""
        error = request_validation_to_tool_error(exc)
        logger.warning(
            f"Validation error on {request.url.path}: {error.message}",
            extra={"error_code": error.code},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error.to_envelope(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        error = DecompositionError(
            "An unexpected error occurred", "INTERNAL_ERROR",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error.to_envelope(),
        )


def request_validation_to_tool_error(exc: RequestValidationError) -> ToolValidationError:
    """First failing body field, reported the way payload validation reports it."""
    errors = exc.errors()
    if not errors:
        return ToolValidationError("Invalid request body", "body")
    first = errors[0]
    loc = [str(part) for part in first["loc"] if part != "body"]
    field = ".".join(loc) or "body"
    return ToolValidationError(f"Invalid {field}: {first['msg']}", field)
