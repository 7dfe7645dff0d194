"""Unit tests for exception handlers."""

import json
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from api.exception_handlers import setup_exception_handlers
from core.exceptions import (
    DuplicateReviewError,
    ForbiddenError,
    ProfileNotFoundError,
    StorageError,
    ValidationError,
)


def _create_test_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    return app


async def _call(app: FastAPI, method: str, path: str, **kwargs):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        return await c.request(method, path, **kwargs)


class TestExceptionHandlers:
    @pytest.mark.asyncio
    async def test_app_exception_returns_error_code_and_message(self) -> None:
        app = _create_test_app()

        @app.get("/raise-app")
        async def _() -> None:
            raise ProfileNotFoundError("some-id")

        response = await _call(app, "GET", "/raise-app")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "PROFILE_NOT_FOUND"
        assert "some-id" in body["message"]
        assert body["details"]["profile_id"] == "some-id"

    @pytest.mark.parametrize(
        ("exc", "status_code", "error_code"),
        [
            (ValidationError("bad"), 400, "VALIDATION_ERROR"),
            (ForbiddenError(), 403, "FORBIDDEN"),
            (DuplicateReviewError("p"), 409, "DUPLICATE_REVIEW"),
            (StorageError(), 500, "STORAGE_ERROR"),
        ],
    )
    @pytest.mark.asyncio
    async def test_error_taxonomy_maps_to_status_codes(
        self, exc: Exception, status_code: int, error_code: str
    ) -> None:
        app = _create_test_app()

        @app.get("/raise")
        async def _() -> None:
            raise exc

        response = await _call(app, "GET", "/raise")

        assert response.status_code == status_code
        assert response.json()["error_code"] == error_code

    @pytest.mark.asyncio
    async def test_http_exception_returns_standard_format(self) -> None:
        from starlette.exceptions import HTTPException

        app = _create_test_app()

        @app.get("/raise-http")
        async def _() -> None:
            raise HTTPException(status_code=403, detail="Forbidden")

        response = await _call(app, "GET", "/raise-http")

        assert response.status_code == 403
        body = response.json()
        assert body["error_code"] == "HTTP_ERROR"
        assert body["message"] == "Forbidden"

    @pytest.mark.asyncio
    async def test_validation_error_returns_field_details(self) -> None:
        from uuid import UUID

        app = _create_test_app()

        @app.get("/items/{item_id}")
        async def _(item_id: UUID) -> dict[str, bool]:
            return {"ok": True}

        response = await _call(app, "GET", "/items/not-a-uuid")

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"][0]["field"] == "path.item_id"

    @pytest.mark.asyncio
    async def test_database_error_returns_500(self) -> None:
        app = _create_test_app()

        @app.get("/raise-db")
        async def _() -> None:
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        response = await _call(app, "GET", "/raise-db")

        assert response.status_code == 500
        assert response.json()["error_code"] == "DATABASE_ERROR"

    @pytest.mark.asyncio
    async def test_unhandled_exception_returns_500(self) -> None:
        app = _create_test_app()

        # Build a fake request with request.state.request_id
        mock_request = MagicMock()
        mock_request.state.request_id = "test-req-id"

        exc = RuntimeError("Something went wrong")

        handler = app.exception_handlers.get(Exception)
        assert handler is not None, "Global exception handler not registered"

        response = await handler(mock_request, exc)  # type: ignore[misc]

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error_code"] == "INTERNAL_ERROR"
        assert body["details"]["request_id"] == "test-req-id"
