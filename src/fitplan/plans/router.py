"""Personal plan endpoints (``/workouts`` and ``/meals``) and fitness advice."""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends

from fitplan.auth.dependencies import get_current_user
from fitplan.auth.gateway import Identity
from fitplan.catalog.schemas import PlanEntry, PlanKind
from fitplan.dependencies import get_plan_library
from fitplan.plans.schemas import (
    AdviceRequest,
    AdviceResponse,
    GeneratePlanRequest,
    PlanCreateRequest,
    PlanUpdateRequest,
)
from fitplan.plans.service import PlanLibrary
from fitplan.schemas import Envelope, MessageResponse


def _plan_router(kind: PlanKind, prefix: str, label: str) -> APIRouter:
    """The same CRUD and generation routes for each plan kind."""
    router = APIRouter(prefix=f"/api/v1/{prefix}", tags=[f"{label} Plans"])

    @router.get("", response_model=Envelope[list[PlanEntry]])
    async def list_plans(
        user: Identity = Depends(get_current_user),
        library: PlanLibrary = Depends(get_plan_library),
    ):
        return Envelope(data=await library.list_user_plans(user.uid, kind))

    @router.post("", response_model=Envelope[PlanEntry], status_code=201)
    async def create_plan(
        body: PlanCreateRequest,
        user: Identity = Depends(get_current_user),
        library: PlanLibrary = Depends(get_plan_library),
    ):
        return Envelope(data=await library.create_plan(user.uid, kind, body))

    @router.post("/generate", response_model=Envelope[PlanEntry], status_code=201)
    async def generate_plan(
        body: GeneratePlanRequest | None = Body(None),
        user: Identity = Depends(get_current_user),
        library: PlanLibrary = Depends(get_plan_library),
    ):
        """Draft a plan from the caller's profile and save it privately."""
        return Envelope(data=await library.generate_plan(user.uid, kind, body))

    @router.get("/{plan_id}", response_model=Envelope[PlanEntry])
    async def get_plan(
        plan_id: str,
        user: Identity = Depends(get_current_user),
        library: PlanLibrary = Depends(get_plan_library),
    ):
        return Envelope(data=await library.get_plan(user.uid, kind, plan_id))

    @router.put("/{plan_id}", response_model=Envelope[PlanEntry])
    async def update_plan(
        plan_id: str,
        body: PlanUpdateRequest,
        user: Identity = Depends(get_current_user),
        library: PlanLibrary = Depends(get_plan_library),
    ):
        return Envelope(data=await library.update_plan(user.uid, kind, plan_id, body))

    @router.delete("/{plan_id}", response_model=MessageResponse)
    async def delete_plan(
        plan_id: str,
        user: Identity = Depends(get_current_user),
        library: PlanLibrary = Depends(get_plan_library),
    ):
        await library.delete_plan(user.uid, kind, plan_id)
        return MessageResponse(message=f"{label} plan with ID {plan_id} deleted successfully")

    return router


workouts_router = _plan_router(PlanKind.WORKOUT, "workouts", "Workout")
meals_router = _plan_router(PlanKind.MEAL, "meals", "Meal")

advice_router = APIRouter(prefix="/api/v1", tags=["Advice"])


@advice_router.post("/advice", response_model=Envelope[AdviceResponse])
async def fitness_advice(
    body: AdviceRequest,
    user: Identity = Depends(get_current_user),
    library: PlanLibrary = Depends(get_plan_library),
):
    """Answer a fitness question in the context of the caller's profile."""
    answer = await library.fitness_advice(user.uid, body.question)
    return Envelope(data=AdviceResponse(question=body.question, answer=answer))
