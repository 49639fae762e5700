"""Request models for the personal plan library."""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field

from fitplan.catalog.schemas import PlanSubmission
from fitplan.schemas import CamelModel


class PlanCreateRequest(PlanSubmission):
    """A personal plan. Same body as a catalog submission."""


class PlanUpdateRequest(CamelModel):
    """Partial update; only the fields that are sent change."""

    model_config = ConfigDict(extra="allow")

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    difficulty: str | None = None
    duration: str | None = None
    dietary_category: str | None = None
    calories: float | None = None
    exercises: str | list[dict[str, Any]] | None = None
    meals: str | list[dict[str, Any]] | None = None


class GeneratePlanRequest(CamelModel):
    """Profile overrides applied on top of the stored profile for one generation."""

    title: str | None = Field(default=None, max_length=200)
    age: int | None = Field(default=None, ge=1, le=120)
    weight: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    fitness_goals: str | list[str] | None = None
    activity_level: str | None = None
    dietary_restrictions: str | list[str] | None = None
    calories: int | None = Field(default=None, gt=0)
    macro_preferences: str | None = None


class AdviceRequest(CamelModel):
    question: str = Field(min_length=1, max_length=2000)


class AdviceResponse(CamelModel):
    question: str
    answer: str
