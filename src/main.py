"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import limiter, rate_limit_exceeded_handler
from infrastructure.database.session import engine

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup/shutdown tasks."""
    logger.info(
        "application_started",
        environment=settings.app_env,
        storage_backend=settings.storage_backend,
    )
    yield
    await engine.dispose()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## Peer-to-peer Skill Exchange\n\n"
            "SkillSphere lets people trade skills: publish a skill profile, "
            "post service requests, propose skill-for-skill exchanges and "
            "review each other.\n\n"
            "### Authentication\n"
            "Write endpoints and personal views require a JWT issued by the "
            "identity service in the Authorization header:\n"
            "```\nAuthorization: Bearer <your_token>\n```\n\n"
            "### Rate Limits\n"
            "- GET endpoints: 30 requests/minute\n"
            "- POST/PUT/PATCH/DELETE: 10 requests/minute\n"
            "- Portfolio uploads: 5 requests/minute"
        ),
        version=API_VERSION,
        debug=settings.debug,
        contact={
            "name": "SkillSphere Support",
        },
        license_info={
            "name": "MIT",
        },
        openapi_tags=[
            {
                "name": "health",
                "description": "Health check endpoints",
            },
            {
                "name": "profiles",
                "description": "Skill profile management and discovery",
            },
            {
                "name": "reviews",
                "description": "Profile reviews and ratings",
            },
            {
                "name": "portfolio",
                "description": "Portfolio file uploads",
            },
            {
                "name": "service-requests",
                "description": "Request board operations",
            },
            {
                "name": "exchanges",
                "description": "Skill-for-skill exchange proposals",
            },
            {
                "name": "dashboard",
                "description": "Personal statistics and activity feed",
            },
        ],
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Security & tracking middleware (LIFO order - last added = outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # GZip compression for responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    # Locally stored portfolio files
    if settings.storage_backend == "local":
        app.mount(
            settings.local_storage_url_prefix,
            StaticFiles(directory=settings.local_storage_dir, check_dir=False),
            name="uploads",
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
