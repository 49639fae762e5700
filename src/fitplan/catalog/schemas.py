"""Plan models shared by the catalog and the personal plan library."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field

from fitplan.schemas import CamelModel


class PlanKind(str, Enum):
    WORKOUT = "workout"
    MEAL = "meal"


class PlanStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    PRIVATE = "private"


class Exercise(CamelModel):
    name: str
    sets: int = Field(ge=0)
    reps: int | str
    rest: str | None = None


class Meal(CamelModel):
    name: str
    type: str | None = None
    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    ingredients: list[str] = []


class PlanEntry(CamelModel):
    """A stored workout or meal plan; unknown fields are carried through."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    owner_id: str | None = None
    status: PlanStatus = PlanStatus.APPROVED
    title: str = ""
    description: str = ""
    avg_rating: float = 0
    total_ratings: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class WorkoutPlan(PlanEntry):
    difficulty: str | None = None
    duration: str | None = None
    exercises: list[Exercise] = []


class MealPlan(PlanEntry):
    dietary_category: str | None = None
    calories: float | None = None
    meals: list[Meal] = []


# --- Requests ---


class PlanSubmission(CamelModel):
    """Raw user submission. ``exercises``/``meals`` may be free text or structured."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=5000)
    difficulty: str | None = None
    duration: str | None = None
    dietary_category: str | None = None
    calories: float | None = None
    exercises: str | list[dict[str, Any]] | None = None
    meals: str | list[dict[str, Any]] | None = None
