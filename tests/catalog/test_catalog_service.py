"""Plan catalog tests: approved listings, mock fallback, submission and approval."""

from __future__ import annotations

import pytest

from fitplan.catalog.schemas import PlanStatus, PlanSubmission
from fitplan.catalog.service import PlanCatalog
from fitplan.errors import InvalidArgument, InvalidFormat, NotFound, PermissionDenied
from fitplan.store.collections import MEAL_PLANS, WORKOUT_PLANS


def _workout(title: str = "Morning Mobility", **extra) -> PlanSubmission:
    return PlanSubmission(
        title=title,
        description="Ten minutes a day",
        difficulty="beginner",
        duration="4 weeks",
        exercises="Cat-cow, 2, 10\nHip circles, 2, 8, 30 seconds",
        **extra,
    )


class TestListings:
    @pytest.mark.asyncio
    async def test_empty_store_serves_filtered_mock(self, memory_store):
        plans = await PlanCatalog(memory_store).list_workout_plans(difficulty="beginner")
        assert plans
        assert all(p.difficulty == "beginner" for p in plans)
        assert all(p.id.startswith("mock-workout") for p in plans)

    @pytest.mark.asyncio
    async def test_denied_store_serves_filtered_mock(self, failing_store):
        plans = await PlanCatalog(failing_store).list_workout_plans(difficulty="beginner")
        assert plans
        assert all(p.difficulty == "beginner" for p in plans)

    @pytest.mark.asyncio
    async def test_all_means_no_filter(self, memory_store):
        everything = await PlanCatalog(memory_store).list_workout_plans()
        also_everything = await PlanCatalog(memory_store).list_workout_plans(difficulty="all", duration="All")
        assert len(everything) == len(also_everything) == 4

    @pytest.mark.asyncio
    async def test_combined_filters(self, memory_store):
        plans = await PlanCatalog(memory_store).list_workout_plans(difficulty="beginner", duration="8 weeks")
        assert [p.id for p in plans] == ["mock-workout-2"]

    @pytest.mark.asyncio
    async def test_filter_with_no_match_is_empty(self, memory_store):
        assert await PlanCatalog(memory_store).list_workout_plans(difficulty="elite") == []

    @pytest.mark.asyncio
    async def test_stored_approved_plans_replace_mock(self, memory_store):
        await memory_store.set(WORKOUT_PLANS, "real", {"status": "approved", "title": "Real", "difficulty": "beginner"})
        await memory_store.set(WORKOUT_PLANS, "hidden", {"status": "pending", "title": "Hidden", "difficulty": "beginner"})
        plans = await PlanCatalog(memory_store).list_workout_plans(difficulty="beginner")
        assert [p.id for p in plans] == ["real"]

    @pytest.mark.asyncio
    async def test_invalid_stored_plan_is_skipped(self, memory_store):
        await memory_store.set(WORKOUT_PLANS, "good", {"status": "approved", "title": "Good"})
        bad = {"status": "approved", "title": "Bad", "exercises": [{"name": "a"}]}
        await memory_store.set(WORKOUT_PLANS, "bad", bad)
        plans = await PlanCatalog(memory_store).list_workout_plans()
        assert [p.id for p in plans] == ["good"]

    @pytest.mark.asyncio
    async def test_only_invalid_stored_plans_serves_mock(self, memory_store):
        await memory_store.set(MEAL_PLANS, "bad", {"status": "approved", "title": "Bad", "meals": "not a list"})
        plans = await PlanCatalog(memory_store).list_meal_plans()
        assert len(plans) == 4
        assert "bad" not in [p.id for p in plans]

    @pytest.mark.asyncio
    async def test_meal_plans_by_category(self, failing_store):
        plans = await PlanCatalog(failing_store).list_meal_plans(dietary_category="vegan")
        assert [p.dietary_category for p in plans] == ["vegan"]

    @pytest.mark.asyncio
    async def test_meal_plans_unfiltered(self, memory_store):
        assert len(await PlanCatalog(memory_store).list_meal_plans()) == 4


class TestSubmitPlan:
    @pytest.mark.asyncio
    async def test_workout_submission_is_pending(self, memory_store):
        plan = await PlanCatalog(memory_store).submit_plan("u1", _workout(), "workout")

        assert plan.id
        doc = await memory_store.get(WORKOUT_PLANS, plan.id)
        assert doc["status"] == "pending"
        assert doc["ownerId"] == "u1"
        assert doc["avgRating"] == 0
        assert doc["totalRatings"] == 0
        assert doc["exercises"][1] == {"name": "Hip circles", "sets": 2, "reps": 8, "rest": "30 seconds"}

    @pytest.mark.asyncio
    async def test_pending_plan_not_listed(self, memory_store):
        catalog = PlanCatalog(memory_store)
        await catalog.submit_plan("u1", _workout(), "workout")
        plans = await catalog.list_workout_plans(difficulty="beginner")
        assert all(p.status is PlanStatus.APPROVED for p in plans)

    @pytest.mark.asyncio
    async def test_meal_submission(self, memory_store):
        raw = PlanSubmission(
            title="Lean Lunches",
            dietary_category="high-protein",
            calories=1800,
            meals='[{"name": "Chicken Wrap", "type": "Lunch", "protein": 32}]',
        )
        plan = await PlanCatalog(memory_store).submit_plan("u1", raw, "meal")
        doc = await memory_store.get(MEAL_PLANS, plan.id)
        assert doc["dietaryCategory"] == "high-protein"
        assert doc["meals"][0]["name"] == "Chicken Wrap"

    @pytest.mark.asyncio
    async def test_unknown_fields_are_not_accepted(self, memory_store):
        raw = PlanSubmission.model_validate({"title": "Extras", "status": "approved", "featured": True})
        assert raw.model_extra is None

        plan = await PlanCatalog(memory_store).submit_plan("u1", raw, "workout")
        doc = await memory_store.get(WORKOUT_PLANS, plan.id)
        assert doc["status"] == "pending"
        assert "featured" not in doc

    @pytest.mark.asyncio
    async def test_malformed_exercises(self, memory_store):
        raw = PlanSubmission(title="Broken", exercises="bad,data")
        with pytest.raises(InvalidFormat):
            await PlanCatalog(memory_store).submit_plan("u1", raw, "workout")
        assert await memory_store.query(WORKOUT_PLANS) == []

    @pytest.mark.asyncio
    async def test_unknown_kind(self, memory_store):
        with pytest.raises(InvalidArgument):
            await PlanCatalog(memory_store).submit_plan("u1", _workout(), "yoga")

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, failing_store):
        with pytest.raises(PermissionDenied):
            await PlanCatalog(failing_store).submit_plan("u1", _workout(), "workout")


class TestApprovePlan:
    @pytest.mark.asyncio
    async def test_approved_plan_is_listed(self, memory_store):
        catalog = PlanCatalog(memory_store)
        submitted = await catalog.submit_plan("u1", _workout("Community Flow"), "workout")

        approved = await catalog.approve_plan("workout", submitted.id)
        assert approved.status is PlanStatus.APPROVED

        plans = await catalog.list_workout_plans(difficulty="beginner")
        assert [p.title for p in plans] == ["Community Flow"]

    @pytest.mark.asyncio
    async def test_missing_plan(self, memory_store):
        with pytest.raises(NotFound):
            await PlanCatalog(memory_store).approve_plan("meal", "nope")
