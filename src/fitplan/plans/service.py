"""Personal workout and meal plans, including AI-generated ones."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import structlog

from fitplan.catalog.parsing import parse_exercises, parse_meals
from fitplan.catalog.schemas import PlanEntry, PlanKind, PlanStatus
from fitplan.catalog.service import build_plan, parse_plan_kind, plan_collection, plan_model
from fitplan.errors import NotFound
from fitplan.generation.client import ADVICE_MAX_TOKENS, PLAN_MAX_TOKENS, GenerationClient
from fitplan.generation.prompts import (
    ADVICE_SYSTEM,
    MEAL_SYSTEM,
    WORKOUT_SYSTEM,
    advice_prompt,
    meal_prompt,
    workout_prompt,
)
from fitplan.plans.schemas import GeneratePlanRequest, PlanCreateRequest, PlanUpdateRequest
from fitplan.store import DocumentStore, OrderBy, Where, try_store
from fitplan.store.collections import USERS

logger = structlog.get_logger()

_GENERATED_TITLES = {
    PlanKind.WORKOUT: "AI Workout Plan",
    PlanKind.MEAL: "AI Meal Plan",
}


class PlanLibrary:
    """A user's own plans. Reads of other users' plans only see approved ones."""

    def __init__(self, store: DocumentStore, generator: GenerationClient) -> None:
        self.store = store
        self.generator = generator

    async def list_user_plans(self, user_id: str, kind: str | PlanKind) -> list[PlanEntry]:
        kind = parse_plan_kind(kind)
        docs = await self.store.query(
            plan_collection(kind),
            [Where("ownerId", user_id)],
            order_by=OrderBy("createdAt", descending=True),
        )
        model = plan_model(kind)
        return [model.model_validate(d) for d in docs]

    async def _load(self, kind: PlanKind, plan_id: str) -> dict[str, Any]:
        doc = await self.store.get(plan_collection(kind), plan_id)
        if doc is None:
            msg = f"Plan {plan_id} not found"
            raise NotFound(msg)
        return doc

    async def _load_owned(self, user_id: str, kind: PlanKind, plan_id: str) -> dict[str, Any]:
        doc = await self._load(kind, plan_id)
        # Someone else's plan is reported as missing.
        if doc.get("ownerId") != user_id:
            msg = f"Plan {plan_id} not found"
            raise NotFound(msg)
        return doc

    async def get_plan(self, user_id: str, kind: str | PlanKind, plan_id: str) -> PlanEntry:
        """Return an owned or approved plan.

        Raises:
            NotFound: Missing, or private to another user.
        """
        kind = parse_plan_kind(kind)
        doc = await self._load(kind, plan_id)
        if doc.get("ownerId") != user_id and doc.get("status") != PlanStatus.APPROVED.value:
            msg = f"Plan {plan_id} not found"
            raise NotFound(msg)
        return plan_model(kind).model_validate(doc)

    async def create_plan(self, user_id: str, kind: str | PlanKind, body: PlanCreateRequest) -> PlanEntry:
        kind = parse_plan_kind(kind)
        plan = build_plan(kind, user_id, body, PlanStatus.PRIVATE)
        plan.id = await self.store.add(plan_collection(kind), plan.to_document())
        logger.info("plan_created", user_id=user_id, kind=kind.value, plan_id=plan.id)
        return plan

    async def update_plan(
        self,
        user_id: str,
        kind: str | PlanKind,
        plan_id: str,
        body: PlanUpdateRequest,
    ) -> PlanEntry:
        kind = parse_plan_kind(kind)
        doc = await self._load_owned(user_id, kind, plan_id)

        patch = body.model_dump(mode="json", by_alias=True, exclude_unset=True)
        if body.exercises is not None:
            patch["exercises"] = [e.model_dump(mode="json", by_alias=True) for e in parse_exercises(body.exercises)]
        if body.meals is not None:
            patch["meals"] = [m.model_dump(mode="json", by_alias=True) for m in parse_meals(body.meals)]
        # Ownership and moderation state are not client-editable.
        for key in ("id", "ownerId", "status", "avgRating", "totalRatings", "createdAt"):
            patch.pop(key, None)
        patch["updatedAt"] = datetime.now(timezone.utc).isoformat()

        await self.store.update(plan_collection(kind), plan_id, patch)
        return plan_model(kind).model_validate({**doc, **patch})

    async def delete_plan(self, user_id: str, kind: str | PlanKind, plan_id: str) -> None:
        kind = parse_plan_kind(kind)
        await self._load_owned(user_id, kind, plan_id)
        await self.store.delete(plan_collection(kind), plan_id)
        logger.info("plan_deleted", user_id=user_id, kind=kind.value, plan_id=plan_id)

    # ── Generation ──

    async def _profile(self, user_id: str) -> dict[str, Any]:
        result = await try_store(self.store.get(USERS, user_id))
        if not result.ok:
            logger.warning("profile_read_failed", user_id=user_id, error=str(result.error))
        return result.or_else(None) or {}

    async def generate_plan(
        self,
        user_id: str,
        kind: str | PlanKind,
        overrides: GeneratePlanRequest | None = None,
    ) -> PlanEntry:
        """Draft a plan with the generation service and save it as private.

        Raises:
            GenerationError: Generation failed; nothing is stored.
        """
        kind = parse_plan_kind(kind)
        if overrides is None:
            overrides = GeneratePlanRequest()

        stored = await self._profile(user_id)
        fields = overrides.model_dump(by_alias=True, exclude_none=True)
        title = fields.pop("title", None) or _GENERATED_TITLES[kind]
        calories = fields.pop("calories", None)
        macros = fields.pop("macroPreferences", None)
        profile = {**stored, **fields}

        if kind is PlanKind.WORKOUT:
            content = await self.generator.complete(WORKOUT_SYSTEM, workout_prompt(profile), PLAN_MAX_TOKENS)
        else:
            settings = dict(stored.get("settings") or {})
            meal_prefs = dict(settings.get("mealPreferences") or {})
            if calories is not None:
                meal_prefs["calories"] = calories
            if macros is not None:
                meal_prefs["macroPreferences"] = macros
            settings["mealPreferences"] = meal_prefs
            content = await self.generator.complete(MEAL_SYSTEM, meal_prompt(profile, settings), PLAN_MAX_TOKENS)

        now = datetime.now(timezone.utc)
        plan = plan_model(kind)(
            owner_id=user_id,
            status=PlanStatus.PRIVATE,
            title=title,
            description=f"Generated {now.date().isoformat()}",
            created_at=now,
            updated_at=now,
            source="generated",
            content=content,
        )
        plan.id = await self.store.add(plan_collection(kind), plan.to_document())
        logger.info("plan_generated", user_id=user_id, kind=kind.value, plan_id=plan.id)
        return plan

    async def fitness_advice(self, user_id: str, question: str) -> str:
        profile = await self._profile(user_id)
        return await self.generator.complete(ADVICE_SYSTEM, advice_prompt(profile, question), ADVICE_MAX_TOKENS)
