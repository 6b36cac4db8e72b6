"""
Error Handler Middleware

Global exception handling for the API.

Every failure leaves the API in the same envelope:

    {
        "success": false,
        "error": "Forum post 'hello-world' not found",
        "code": "NOT_FOUND",
        "details": {...}          ← only when there is something to add
    }

Exception Handling:
===================
1. CraftboardException subclasses → their status_code and to_dict()
2. Request validation errors      → 400 with [{field, message}]
3. IntegrityError                 → 409 (a unique index fired, e.g. a slug race)
4. Operational/Interface/Timeout  → 500 TransientStorageError, generic message
5. Anything else                  → 500, generic message; stack trace only logged
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from craftboard.shared.core.exceptions import (
    ConflictError,
    CraftboardException,
    RateLimitError,
    TransientStorageError,
)
from craftboard.shared.core.logging import logger


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    errors = []
    for error in exc.errors():
        # loc is ("body", "title") / ("query", "page"); drop the location prefix
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({"field": ".".join(location) or "body", "message": error.get("msg", "Invalid value")})
    return errors


def _respond(exc: CraftboardException) -> JSONResponse:
    headers = None
    if isinstance(exc, RateLimitError) and exc.retry_after:
        headers = {"Retry-After": str(exc.retry_after)}
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(CraftboardException)
    async def craftboard_exception_handler(
        request: Request,
        exc: CraftboardException,
    ) -> JSONResponse:
        logger.warning(
            "Application error",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
        )
        return _respond(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = _field_errors(exc)
        logger.warning("Validation error", errors=errors, path=request.url.path)
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "error": "Request validation failed",
                "code": "VALIDATION_ERROR",
                "details": {"errors": errors},
            },
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(
        request: Request,
        exc: IntegrityError,
    ) -> JSONResponse:
        logger.warning("Integrity conflict", error=str(exc.orig), path=request.url.path)
        return _respond(ConflictError("The resource was modified concurrently, please retry"))

    @app.exception_handler(OperationalError)
    @app.exception_handler(InterfaceError)
    @app.exception_handler(PoolTimeoutError)
    async def storage_error_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.error(
            "Storage error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return _respond(TransientStorageError())

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.error(
            "Unexpected error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )
