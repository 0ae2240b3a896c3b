"""
Exception handlers for FastAPI application.

This module follows SRP by centralizing all exception handling logic.
Every error leaves the API with the same envelope.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from clinic_scheduler.api.errors import ApiError, error_body
from clinic_scheduler.core.domain import DomainException

logger = logging.getLogger(__name__)


async def api_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle ApiError raised by routes and dependencies."""
    api_error = exc if isinstance(exc, ApiError) else ApiError("INTERNAL_ERROR", str(exc), status_code=500)
    return JSONResponse(status_code=api_error.status_code, content=api_error.to_body())


async def domain_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle a DomainException that escaped a use case."""
    if not isinstance(exc, DomainException):
        return await global_exception_handler(request, exc)
    logger.warning(f"Domain error on {request.method} {request.url.path}: {exc.code} {exc.message}")
    api_error = ApiError.from_domain_exception(exc)
    return JSONResponse(status_code=api_error.status_code, content=api_error.to_body())


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle HTTPException with consistent response format."""
    http_exc = exc if isinstance(exc, HTTPException) else HTTPException(status_code=500, detail=str(exc))
    code = "NOT_FOUND" if http_exc.status_code == status.HTTP_404_NOT_FOUND else "HTTP_ERROR"
    return JSONResponse(
        status_code=http_exc.status_code,
        content=error_body(code, str(http_exc.detail), {"status_code": http_exc.status_code}),
        headers=http_exc.headers,
    )


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle request validation errors as INVALID_PAYLOAD with per-field details."""
    if not isinstance(exc, RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("INVALID_PAYLOAD", str(exc)),
        )

    errors = []
    for error in exc.errors():
        errors.append(
            {
                "field": ".".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
        )

    logger.warning(f"Validation error on {request.url.path}: {errors}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("INVALID_PAYLOAD", "Validation error", {"errors": errors}),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all unhandled exceptions.

    Logs the full exception with traceback and returns a safe error response.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc!s}",
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("INTERNAL_ERROR", "Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    logger.info("Exception handlers registered")
