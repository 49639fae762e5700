"""Progress and achievement API tests."""

from __future__ import annotations

import pytest
from httpx import AsyncClient


class TestAuthentication:
    @pytest.mark.asyncio
    async def test_missing_token(self, client: AsyncClient):
        response = await client.get("/api/v1/users/progress")
        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Access denied. No token provided."}

    @pytest.mark.asyncio
    async def test_invalid_token(self, client: AsyncClient):
        response = await client.get("/api/v1/users/progress", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 403
        assert response.json() == {"success": False, "message": "Invalid token."}

    @pytest.mark.asyncio
    async def test_achievement_catalogue_is_public(self, client: AsyncClient):
        response = await client.get("/api/v1/achievements")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data[0] == {
            "id": "first_workout",
            "title": "First Workout",
            "description": "Complete your first workout",
            "icon": "\U0001f3c3",
        }


class TestRecordProgress:
    @pytest.mark.asyncio
    async def test_record_workout(self, authed_client: AsyncClient):
        response = await authed_client.post(
            "/api/v1/users/progress",
            json={"referenceId": "mock-workout-1", "kind": "workout"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] is None
        assert body["data"]["degraded"] is False
        assert body["data"]["stats"]["totalWorkouts"] == 1
        assert body["data"]["stats"]["workoutStreak"] == 1
        assert [a["achievementId"] for a in body["data"]["newlyAwarded"]] == ["first_workout"]

    @pytest.mark.asyncio
    async def test_progress_reflects_recorded_meals(self, authed_client: AsyncClient):
        for i in range(7):
            await authed_client.post("/api/v1/users/progress", json={"referenceId": f"meal-{i}", "kind": "meal"})

        response = await authed_client.get("/api/v1/users/progress")
        assert response.status_code == 200
        stats = response.json()["data"]
        assert stats["totalMeals"] == 7
        assert stats["mealAdherence"] == 33

    @pytest.mark.asyncio
    async def test_history_and_achievements(self, authed_client: AsyncClient):
        await authed_client.post("/api/v1/users/progress", json={"referenceId": "a", "kind": "workout"})
        await authed_client.post("/api/v1/users/progress", json={"referenceId": "b", "kind": "meal"})

        history = (await authed_client.get("/api/v1/users/progress/history", params={"limit": 1})).json()["data"]
        assert len(history) == 1
        assert history[0]["userId"] == "user-1"

        achievements = (await authed_client.get("/api/v1/users/achievements")).json()["data"]
        assert [a["achievementId"] for a in achievements] == ["first_workout"]

    @pytest.mark.asyncio
    async def test_unknown_kind_is_400(self, authed_client: AsyncClient):
        response = await authed_client.post("/api/v1/users/progress", json={"referenceId": "x", "kind": "nap"})
        assert response.status_code == 400
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_missing_reference_is_422(self, authed_client: AsyncClient):
        response = await authed_client.post("/api/v1/users/progress", json={"kind": "workout"})
        assert response.status_code == 422
        assert response.json()["message"] == "Validation error"

    @pytest.mark.asyncio
    async def test_new_user_has_zero_progress(self, authed_client: AsyncClient):
        response = await authed_client.get("/api/v1/users/progress")
        assert response.status_code == 200
        assert response.json()["data"]["totalWorkouts"] == 0


class TestDegradedStore:
    """Firestore denying access: writes degrade, canonical reads fail, achievements fall back."""

    @pytest.fixture
    def store(self, failing_store):
        return failing_store

    @pytest.mark.asyncio
    async def test_record_completion_offline_mode(self, authed_client: AsyncClient):
        response = await authed_client.post(
            "/api/v1/users/progress",
            json={"referenceId": "mock-workout-1", "kind": "workout"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["data"]["degraded"] is True
        assert body["data"]["stats"]["totalWorkouts"] == 1
        assert "offline mode" in body["message"]

    @pytest.mark.asyncio
    async def test_progress_read_is_503(self, authed_client: AsyncClient):
        response = await authed_client.get("/api/v1/users/progress")
        assert response.status_code == 503
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_achievements_fall_back_to_mock(self, authed_client: AsyncClient):
        response = await authed_client.get("/api/v1/users/achievements")
        assert response.status_code == 200
        icons = [a["icon"] for a in response.json()["data"]]
        assert icons == ["\U0001f3c3", "\U0001f957", "\U0001f525"]


class TestUnavailableStore:
    @pytest.fixture
    def store(self, flaky_store):
        return flaky_store({"get", "query"})

    @pytest.mark.asyncio
    async def test_history_is_503(self, authed_client: AsyncClient):
        response = await authed_client.get("/api/v1/users/progress/history")
        assert response.status_code == 503
        assert response.json()["message"].startswith("The service is temporarily unavailable")

