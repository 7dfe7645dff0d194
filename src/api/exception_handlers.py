"""Exception handlers for the FastAPI application.

Every error leaves the API as ``{"error_code", "message", "details"}``.
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.exceptions import AppException, ErrorCode

logger = structlog.get_logger()


def _error_body(error_code: str, message: str, details: Any = None) -> dict[str, Any]:
    return {"error_code": error_code, "message": message, "details": details}


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Handle application exceptions raised by services and dependencies."""
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "app_exception",
            error_code=exc.error_code.value,
            message=exc.message,
            status_code=exc.status_code,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.error_code.value, exc.message, exc.details),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle HTTP exceptions from FastAPI/Starlette (404 routes, 405, ...)."""
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body("HTTP_ERROR", str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle malformed request shapes (wrong types, bad UUIDs)."""
        logger.info("request_validation_failed", errors=len(exc.errors()))
        return JSONResponse(
            status_code=422,
            content=_error_body(
                ErrorCode.VALIDATION_ERROR.value,
                "Request validation failed",
                [
                    {
                        "field": ".".join(str(x) for x in error["loc"]),
                        "message": error["msg"],
                        "type": error["type"],
                    }
                    for error in exc.errors()
                ],
            ),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Handle database failures without leaking SQL in production."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "database_error",
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )
        message = "A database error occurred" if settings.is_production else str(exc)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                ErrorCode.DATABASE_ERROR.value, message, {"request_id": request_id}
            ),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )

        message = "An unexpected error occurred"
        if not settings.is_production:
            message = str(exc)

        return JSONResponse(
            status_code=500,
            content=_error_body(
                ErrorCode.INTERNAL_ERROR.value, message, {"request_id": request_id}
            ),
        )
