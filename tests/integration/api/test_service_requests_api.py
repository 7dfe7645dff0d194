"""Integration tests for Service Requests API."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

REQUEST = {
    "title": "Need a logo",
    "description": "Looking for a simple wordmark.",
    "skill_needed": "Graphic Design",
    "skill_offered": "Web Development",
}


@pytest.fixture
async def request_id(authenticated_client: AsyncClient) -> str:
    """A request posted by the test user."""
    response = await authenticated_client.post("/api/v1/service-requests", json=REQUEST)
    return str(response.json()["data"]["id"])


class TestServiceRequestsAPI:
    """Integration tests for Service Requests API."""

    @pytest.mark.asyncio
    async def test_create_request(self, authenticated_client: AsyncClient) -> None:
        """Test POST /api/v1/service-requests."""
        response = await authenticated_client.post("/api/v1/service-requests", json=REQUEST)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["title"] == "Need a logo"
        assert data["requester_name"] == "Test User"
        assert data["status"] == "open"
        assert data["views"] == 0
        assert data["responses"] == []

    @pytest.mark.asyncio
    async def test_missing_fields_return_400(self, authenticated_client: AsyncClient) -> None:
        response = await authenticated_client.post(
            "/api/v1/service-requests", json={"title": "Need a logo", "skill_needed": "  "}
        )

        assert response.status_code == 400
        assert response.json()["details"]["missing_fields"] == [
            "description",
            "skill_needed",
            "skill_offered",
        ]

    @pytest.mark.asyncio
    async def test_list_filters_by_status_and_skill(
        self, authenticated_client: AsyncClient, request_id: str
    ) -> None:
        await authenticated_client.post(
            "/api/v1/service-requests",
            json={**REQUEST, "title": "Edit my vlog", "skill_needed": "Video Editing"},
        )
        await authenticated_client.patch(
            f"/api/v1/service-requests/{request_id}/status", json={"status": "completed"}
        )

        everything = await authenticated_client.get("/api/v1/service-requests")
        open_only = await authenticated_client.get(
            "/api/v1/service-requests", params={"status": "open"}
        )
        by_skill = await authenticated_client.get(
            "/api/v1/service-requests", params={"skill": "graphic"}
        )
        by_offered = await authenticated_client.get(
            "/api/v1/service-requests", params={"skill": "web dev"}
        )

        assert [r["title"] for r in everything.json()["data"]] == ["Edit my vlog", "Need a logo"]
        assert [r["title"] for r in open_only.json()["data"]] == ["Edit my vlog"]
        assert [r["title"] for r in by_skill.json()["data"]] == ["Need a logo"]
        assert by_offered.json()["meta"]["total"] == 2

    @pytest.mark.asyncio
    async def test_unknown_status_filter_returns_400(
        self, authenticated_client: AsyncClient
    ) -> None:
        response = await authenticated_client.get(
            "/api/v1/service-requests", params={"status": "archived"}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_get_counts_views(
        self, authenticated_client: AsyncClient, request_id: str
    ) -> None:
        await authenticated_client.get(f"/api/v1/service-requests/{request_id}")
        response = await authenticated_client.get(f"/api/v1/service-requests/{request_id}")

        assert response.status_code == 200
        assert response.json()["data"]["views"] == 2

    @pytest.mark.asyncio
    async def test_get_unknown_request_returns_404(
        self, authenticated_client: AsyncClient
    ) -> None:
        response = await authenticated_client.get(f"/api/v1/service-requests/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error_code"] == "SERVICE_REQUEST_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_add_response(self, other_client: AsyncClient, request_id: str) -> None:
        response = await other_client.post(
            f"/api/v1/service-requests/{request_id}/responses",
            json={"message": "  I can help  "},
        )

        assert response.status_code == 201
        (reply,) = response.json()["data"]["responses"]
        assert reply["message"] == "I can help"

        fetched = await other_client.get(f"/api/v1/service-requests/{request_id}")
        assert len(fetched.json()["data"]["responses"]) == 1

    @pytest.mark.asyncio
    async def test_empty_response_returns_400(
        self, other_client: AsyncClient, request_id: str
    ) -> None:
        response = await other_client.post(
            f"/api/v1/service-requests/{request_id}/responses", json={"message": " "}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Message is required"

    @pytest.mark.asyncio
    async def test_owner_changes_status(
        self, authenticated_client: AsyncClient, request_id: str
    ) -> None:
        response = await authenticated_client.patch(
            f"/api/v1/service-requests/{request_id}/status", json={"status": "in-progress"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "in-progress"

    @pytest.mark.asyncio
    async def test_non_owner_cannot_change_status(
        self, other_client: AsyncClient, request_id: str
    ) -> None:
        response = await other_client.patch(
            f"/api/v1/service-requests/{request_id}/status", json={"status": "completed"}
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_invalid_status_returns_400(
        self, authenticated_client: AsyncClient, request_id: str
    ) -> None:
        response = await authenticated_client.patch(
            f"/api/v1/service-requests/{request_id}/status", json={"status": "done"}
        )

        assert response.status_code == 400
        assert response.json()["details"]["valid_statuses"] == [
            "open",
            "in-progress",
            "completed",
        ]
