"""Rate limiting configuration using slowapi."""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from core.config import settings
from core.exceptions import ErrorCode

# Per-client limits shared by the route modules
READ_LIMIT = "30/minute"
WRITE_LIMIT = "10/minute"
UPLOAD_LIMIT = "5/minute"

limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled,
)


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a slowapi rejection in the standard error shape."""
    detail = exc.detail if isinstance(exc, RateLimitExceeded) else str(exc)
    return JSONResponse(
        status_code=429,
        content={
            "error_code": ErrorCode.RATE_LIMIT_EXCEEDED.value,
            "message": f"Too many requests, limit is {detail}",
            "details": {"limit": str(detail)},
        },
    )
