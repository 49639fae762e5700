"""Plan catalog: approved curated and community plans, submissions, moderation."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

import structlog
from pydantic import ValidationError

from fitplan.catalog.mock_data import MOCK_MEAL_PLANS, MOCK_WORKOUT_PLANS
from fitplan.catalog.parsing import parse_exercises, parse_meals
from fitplan.catalog.schemas import MealPlan, PlanEntry, PlanKind, PlanStatus, PlanSubmission, WorkoutPlan
from fitplan.errors import InvalidArgument, NotFound
from fitplan.store import DocumentStore, Where, try_store
from fitplan.store.base import matches
from fitplan.store.collections import MEAL_PLANS, WORKOUT_PLANS

logger = structlog.get_logger()

_COLLECTIONS = {PlanKind.WORKOUT: WORKOUT_PLANS, PlanKind.MEAL: MEAL_PLANS}


def parse_plan_kind(kind: str | PlanKind) -> PlanKind:
    try:
        return PlanKind(kind)
    except ValueError:
        msg = f"Invalid plan kind: {kind!r} (expected 'workout' or 'meal')"
        raise InvalidArgument(msg) from None


def plan_collection(kind: PlanKind) -> str:
    return _COLLECTIONS[kind]


def plan_model(kind: PlanKind) -> type[PlanEntry]:
    return WorkoutPlan if kind is PlanKind.WORKOUT else MealPlan


def build_plan(
    kind: PlanKind,
    owner_id: str,
    raw: PlanSubmission,
    status: PlanStatus,
    now: datetime | None = None,
) -> PlanEntry:
    """Normalise a raw plan body into a stored plan with fresh rating counters."""
    if now is None:
        now = datetime.now(timezone.utc)
    common: dict[str, Any] = {
        "owner_id": owner_id,
        "status": status,
        "title": raw.title,
        "description": raw.description,
        "avg_rating": 0,
        "total_ratings": 0,
        "created_at": now,
        "updated_at": now,
    }
    if kind is PlanKind.WORKOUT:
        return WorkoutPlan(
            **common,
            difficulty=raw.difficulty,
            duration=raw.duration,
            exercises=parse_exercises(raw.exercises),
        )
    return MealPlan(
        **common,
        dietary_category=raw.dietary_category,
        calories=raw.calories,
        meals=parse_meals(raw.meals),
    )


def _filters(**values: str | None) -> list[Where]:
    """Equality predicates for every filter that is set and not "all"."""
    return [
        Where(field, value)
        for field, value in values.items()
        if value and value.lower() != "all"
    ]


class PlanCatalog:
    """Lists approved plans, degrading to the static catalogs."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def _list(
        self,
        kind: PlanKind,
        filters: Sequence[Where],
        mock: list[dict[str, Any]],
    ) -> list[PlanEntry]:
        collection = plan_collection(kind)
        result = await try_store(
            self.store.query(collection, [Where("status", PlanStatus.APPROVED.value), *filters])
        )
        if not result.ok:
            logger.warning("catalog_fallback_to_mock", collection=collection, error=str(result.error))
        model = plan_model(kind)
        plans = []
        for doc in result.or_else([]):
            try:
                plans.append(model.model_validate(doc))
            except ValidationError as exc:
                logger.warning(
                    "catalog_plan_invalid", collection=collection, plan_id=doc.get("id"), errors=exc.error_count()
                )
        if not plans:
            plans = [model.model_validate(d) for d in mock if matches(d, filters)]
        return plans

    async def list_workout_plans(
        self,
        difficulty: str | None = None,
        duration: str | None = None,
    ) -> list[WorkoutPlan]:
        filters = _filters(difficulty=difficulty, duration=duration)
        return await self._list(PlanKind.WORKOUT, filters, MOCK_WORKOUT_PLANS)  # type: ignore[return-value]

    async def list_meal_plans(self, dietary_category: str | None = None) -> list[MealPlan]:
        filters = _filters(dietaryCategory=dietary_category)
        return await self._list(PlanKind.MEAL, filters, MOCK_MEAL_PLANS)  # type: ignore[return-value]

    async def submit_plan(
        self,
        user_id: str,
        raw: PlanSubmission,
        kind: str | PlanKind,
        now: datetime | None = None,
    ) -> PlanEntry:
        """Normalise and store a community submission awaiting approval.

        Raises:
            InvalidArgument: Unknown kind.
            InvalidFormat: Exercise or meal text does not parse.
            StoreError: The submission could not be saved.
        """
        kind = parse_plan_kind(kind)
        plan = build_plan(kind, user_id, raw, PlanStatus.PENDING, now)
        plan.id = await self.store.add(plan_collection(kind), plan.to_document())
        logger.info("plan_submitted", user_id=user_id, kind=kind.value, plan_id=plan.id)
        return plan

    async def approve_plan(self, kind: str | PlanKind, plan_id: str, now: datetime | None = None) -> PlanEntry:
        """Publish a pending submission to the catalog.

        Raises:
            NotFound: No such plan.
        """
        kind = parse_plan_kind(kind)
        if now is None:
            now = datetime.now(timezone.utc)
        collection = plan_collection(kind)

        doc = await self.store.get(collection, plan_id)
        if doc is None:
            msg = f"Plan {plan_id} not found"
            raise NotFound(msg)

        patch = {"status": PlanStatus.APPROVED.value, "updatedAt": now.isoformat()}
        await self.store.update(collection, plan_id, patch)
        logger.info("plan_approved", kind=kind.value, plan_id=plan_id)
        return plan_model(kind).model_validate({**doc, **patch})
