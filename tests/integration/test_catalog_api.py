"""Catalog API tests."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

WORKOUT_SUBMISSION = {
    "title": "Desk Break Circuit",
    "description": "Five minute circuits between meetings",
    "difficulty": "beginner",
    "duration": "2 weeks",
    "exercises": "Air squats, 2, 15\nWall push-ups, 2, 12, 30 seconds",
}


class TestPublicListings:
    @pytest.mark.asyncio
    async def test_workouts_filtered_by_difficulty(self, client: AsyncClient):
        response = await client.get("/api/v1/catalog/workouts", params={"difficulty": "advanced"})
        assert response.status_code == 200
        plans = response.json()["data"]
        assert [p["id"] for p in plans] == ["mock-workout-4"]
        assert plans[0]["exercises"][0]["name"] == "Back Squat"
        assert plans[0]["avgRating"] == 4.8

    @pytest.mark.asyncio
    async def test_meals_filtered_by_category(self, client: AsyncClient):
        response = await client.get("/api/v1/catalog/meals", params={"dietaryCategory": "keto"})
        assert response.status_code == 200
        assert [p["dietaryCategory"] for p in response.json()["data"]] == ["keto"]


class TestDeniedCatalog:
    @pytest.fixture
    def store(self, failing_store):
        return failing_store

    @pytest.mark.asyncio
    async def test_listing_never_fails(self, client: AsyncClient):
        response = await client.get("/api/v1/catalog/workouts", params={"difficulty": "beginner"})
        assert response.status_code == 200
        plans = response.json()["data"]
        assert plans
        assert {p["difficulty"] for p in plans} == {"beginner"}

    @pytest.mark.asyncio
    async def test_submission_fails_with_503(self, authed_client: AsyncClient):
        response = await authed_client.post("/api/v1/catalog/workout", json=WORKOUT_SUBMISSION)
        assert response.status_code == 503


class TestSubmission:
    @pytest.mark.asyncio
    async def test_submit_requires_auth(self, client: AsyncClient):
        response = await client.post("/api/v1/catalog/workout", json=WORKOUT_SUBMISSION)
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_submit_workout(self, authed_client: AsyncClient):
        response = await authed_client.post("/api/v1/catalog/workout", json=WORKOUT_SUBMISSION)
        assert response.status_code == 201
        plan = response.json()["data"]
        assert plan["status"] == "pending"
        assert plan["ownerId"] == "user-1"
        assert plan["exercises"] == [
            {"name": "Air squats", "sets": 2, "reps": 15, "rest": None},
            {"name": "Wall push-ups", "sets": 2, "reps": 12, "rest": "30 seconds"},
        ]

    @pytest.mark.asyncio
    async def test_malformed_exercises_is_422(self, authed_client: AsyncClient):
        response = await authed_client.post(
            "/api/v1/catalog/workout",
            json={**WORKOUT_SUBMISSION, "exercises": "bad,data"},
        )
        assert response.status_code == 422
        assert "Exercise line 1" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_unknown_kind_is_400(self, authed_client: AsyncClient):
        response = await authed_client.post("/api/v1/catalog/pilates", json=WORKOUT_SUBMISSION)
        assert response.status_code == 400


class TestApproval:
    @pytest.mark.asyncio
    async def test_non_admin_cannot_approve(self, authed_client: AsyncClient):
        response = await authed_client.post("/api/v1/catalog/workout/anything/approve")
        assert response.status_code == 403
        assert response.json()["message"] == "Access denied. Admin privileges required."

    @pytest.mark.asyncio
    async def test_admin_approves_submission(self, admin_client: AsyncClient):
        submitted = await admin_client.post("/api/v1/catalog/workout", json=WORKOUT_SUBMISSION)
        plan_id = submitted.json()["data"]["id"]

        response = await admin_client.post(f"/api/v1/catalog/workout/{plan_id}/approve")
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "approved"

        listed = await admin_client.get("/api/v1/catalog/workouts", params={"difficulty": "beginner"})
        assert [p["title"] for p in listed.json()["data"]] == ["Desk Break Circuit"]

    @pytest.mark.asyncio
    async def test_approve_missing_plan_is_404(self, admin_client: AsyncClient):
        response = await admin_client.post("/api/v1/catalog/meal/missing/approve")
        assert response.status_code == 404
