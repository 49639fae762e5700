"""Public plan catalog endpoints plus community submission and moderation."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from fitplan.auth.dependencies import get_current_user, require_admin
from fitplan.auth.gateway import Identity
from fitplan.catalog.schemas import MealPlan, PlanEntry, PlanSubmission, WorkoutPlan
from fitplan.catalog.service import PlanCatalog
from fitplan.dependencies import get_plan_catalog
from fitplan.schemas import Envelope

router = APIRouter(prefix="/api/v1/catalog", tags=["Catalog"])


@router.get("/workouts", response_model=Envelope[list[WorkoutPlan]])
async def list_workout_plans(
    difficulty: str | None = Query(None, max_length=50),
    duration: str | None = Query(None, max_length=50),
    catalog: PlanCatalog = Depends(get_plan_catalog),
):
    """Approved workout plans. Filters of ``all`` are ignored."""
    return Envelope(data=await catalog.list_workout_plans(difficulty=difficulty, duration=duration))


@router.get("/meals", response_model=Envelope[list[MealPlan]])
async def list_meal_plans(
    dietary_category: str | None = Query(None, alias="dietaryCategory", max_length=50),
    catalog: PlanCatalog = Depends(get_plan_catalog),
):
    """Approved meal plans, optionally filtered by dietary category."""
    return Envelope(data=await catalog.list_meal_plans(dietary_category=dietary_category))


# ── Authenticated endpoints ──


@router.post("/{kind}", response_model=Envelope[PlanEntry], status_code=201)
async def submit_plan(
    kind: str,
    body: PlanSubmission,
    user: Identity = Depends(get_current_user),
    catalog: PlanCatalog = Depends(get_plan_catalog),
):
    """Submit a plan for review. It stays ``pending`` until an admin approves it."""
    plan = await catalog.submit_plan(user.uid, body, kind)
    return Envelope(data=plan, message="Plan submitted for review")


# ── Admin endpoints ──


@router.post("/{kind}/{plan_id}/approve", response_model=Envelope[PlanEntry])
async def approve_plan(
    kind: str,
    plan_id: str,
    _admin: Identity = Depends(require_admin),
    catalog: PlanCatalog = Depends(get_plan_catalog),
):
    plan = await catalog.approve_plan(kind, plan_id)
    return Envelope(data=plan, message="Plan approved")
