"""Access logging middleware."""

import time
from typing import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger()

# Probes hit these every few seconds
QUIET_PATHS = frozenset({"/health", "/health/detailed"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its outcome and duration.

    5xx responses log at error level and 4xx at warning. Health probes log
    at debug so they do not drown the access log.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start_time = time.perf_counter()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=getattr(request.state, "request_id", "unknown"),
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=_elapsed_ms(start_time),
            )
            raise

        if request.url.path in QUIET_PATHS:
            log = logger.debug
        elif response.status_code >= 500:
            log = logger.error
        elif response.status_code >= 400:
            log = logger.warning
        else:
            log = logger.info

        log(
            "request_completed",
            status_code=response.status_code,
            duration_ms=_elapsed_ms(start_time),
            client_ip=request.client.host if request.client else None,
        )
        return response


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)
