"""Integration tests for Profiles API."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

PROFILE = {
    "name": "Ada",
    "primarySkill": "Web Development",
    "description": "Full-stack developer, happy to pair.",
    "lookingFor": ["UI/UX Design"],
}


class TestProfilesAPI:
    """Integration tests for Profiles API."""

    @pytest.mark.asyncio
    async def test_create_profile(self, authenticated_client: AsyncClient) -> None:
        """Test POST /api/v1/profiles creates a profile."""
        response = await authenticated_client.post("/api/v1/profiles", json=PROFILE)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["name"] == "Ada"
        assert data["primary_skill"] == "Web Development"
        assert data["looking_for"] == ["UI/UX Design"]
        assert data["rating"] == 0.0
        assert data["credits"] == 0
        assert data["review_count"] == 0
        assert data["portfolio"] == []

    @pytest.mark.asyncio
    async def test_second_save_updates_instead_of_duplicating(
        self, authenticated_client: AsyncClient
    ) -> None:
        first = await authenticated_client.post("/api/v1/profiles", json=PROFILE)
        second = await authenticated_client.post(
            "/api/v1/profiles", json={**PROFILE, "name": "Ada Lovelace"}
        )

        assert second.status_code == 200
        assert second.json()["data"]["id"] == first.json()["data"]["id"]
        assert second.json()["data"]["name"] == "Ada Lovelace"

        listing = await authenticated_client.get("/api/v1/profiles")
        assert listing.json()["meta"]["total"] == 1

    @pytest.mark.asyncio
    async def test_snake_case_fields_are_accepted(self, authenticated_client: AsyncClient) -> None:
        response = await authenticated_client.post(
            "/api/v1/profiles",
            json={
                "name": "Ada",
                "primary_skill": "Data Analysis",
                "description": "Numbers",
                "looking_for": [],
            },
        )

        assert response.status_code == 201
        assert response.json()["data"]["primary_skill"] == "Data Analysis"

    @pytest.mark.asyncio
    async def test_missing_fields_return_400(self, authenticated_client: AsyncClient) -> None:
        response = await authenticated_client.post("/api/v1/profiles", json={"name": "Ada"})

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"]["missing_fields"] == ["primary_skill", "description"]

    @pytest.mark.asyncio
    async def test_unknown_skill_returns_400(self, authenticated_client: AsyncClient) -> None:
        response = await authenticated_client.post(
            "/api/v1/profiles", json={**PROFILE, "primarySkill": "Juggling"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid primary skill"

    @pytest.mark.asyncio
    async def test_long_description_returns_400(self, authenticated_client: AsyncClient) -> None:
        response = await authenticated_client.post(
            "/api/v1/profiles", json={**PROFILE, "description": "x" * 501}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_get_my_profile(self, authenticated_client: AsyncClient) -> None:
        await authenticated_client.post("/api/v1/profiles", json=PROFILE)

        response = await authenticated_client.get("/api/v1/profiles/me")

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Ada"

    @pytest.mark.asyncio
    async def test_get_my_profile_without_one_returns_404(
        self, authenticated_client: AsyncClient
    ) -> None:
        response = await authenticated_client.get("/api/v1/profiles/me")

        assert response.status_code == 404
        assert response.json()["error_code"] == "PROFILE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_update_my_profile(self, authenticated_client: AsyncClient) -> None:
        await authenticated_client.post("/api/v1/profiles", json=PROFILE)

        response = await authenticated_client.put(
            "/api/v1/profiles/me",
            json={**PROFILE, "primarySkill": "Video Editing", "lookingFor": ["SEO Optimization"]},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["primary_skill"] == "Video Editing"
        assert data["looking_for"] == ["SEO Optimization"]

    @pytest.mark.asyncio
    async def test_delete_my_profile(self, authenticated_client: AsyncClient) -> None:
        created = await authenticated_client.post("/api/v1/profiles", json=PROFILE)
        profile_id = created.json()["data"]["id"]

        response = await authenticated_client.delete("/api/v1/profiles/me")

        assert response.status_code == 200
        assert response.json()["message"] == "Profile deleted"
        missing = await authenticated_client.get(f"/api/v1/profiles/{profile_id}")
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_public_profile_view(
        self, authenticated_client: AsyncClient, other_client: AsyncClient
    ) -> None:
        created = await authenticated_client.post("/api/v1/profiles", json=PROFILE)
        profile_id = created.json()["data"]["id"]

        response = await other_client.get(f"/api/v1/profiles/{profile_id}")

        assert response.status_code == 200
        assert response.json()["data"]["id"] == profile_id

    @pytest.mark.asyncio
    async def test_unknown_profile_returns_404(self, authenticated_client: AsyncClient) -> None:
        response = await authenticated_client.get(f"/api/v1/profiles/{uuid4()}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_malformed_profile_id_returns_422(
        self, authenticated_client: AsyncClient
    ) -> None:
        response = await authenticated_client.get("/api/v1/profiles/not-a-uuid")

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_list_filters(
        self, authenticated_client: AsyncClient, other_client: AsyncClient
    ) -> None:
        await authenticated_client.post("/api/v1/profiles", json=PROFILE)
        await other_client.post(
            "/api/v1/profiles",
            json={
                "name": "Grace",
                "primarySkill": "Graphic Design",
                "description": "Logos and branding",
                "lookingFor": ["Web Development"],
            },
        )

        by_skill = await authenticated_client.get(
            "/api/v1/profiles", params={"skill": "Web Development"}
        )
        by_search = await authenticated_client.get("/api/v1/profiles", params={"search": "LOGOS"})
        by_wanted = await authenticated_client.get(
            "/api/v1/profiles", params={"skill": "UI/UX Design"}
        )

        assert by_skill.json()["meta"]["total"] == 2
        assert [p["name"] for p in by_search.json()["data"]] == ["Grace"]
        assert [p["name"] for p in by_wanted.json()["data"]] == ["Ada"]

    @pytest.mark.asyncio
    async def test_list_is_newest_first(
        self, authenticated_client: AsyncClient, other_client: AsyncClient
    ) -> None:
        await authenticated_client.post("/api/v1/profiles", json=PROFILE)
        await other_client.post("/api/v1/profiles", json={**PROFILE, "name": "Grace"})

        response = await authenticated_client.get("/api/v1/profiles")

        assert [p["name"] for p in response.json()["data"]] == ["Grace", "Ada"]

    @pytest.mark.asyncio
    async def test_writes_require_authentication(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/profiles", json=PROFILE)

        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"

    @pytest.mark.asyncio
    async def test_invalid_token_is_rejected(self, client: AsyncClient) -> None:
        response = await client.get(
            "/api/v1/profiles/me", headers={"Authorization": "Bearer not-a-token"}
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "INVALID_TOKEN"
