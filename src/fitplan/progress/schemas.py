"""Progress and achievement models (stored documents and API payloads)."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum

from pydantic import Field

from fitplan.schemas import CamelModel


class CompletionKind(str, Enum):
    WORKOUT = "workout"
    MEAL = "meal"


class UserProgressStats(CamelModel):
    total_workouts: int = Field(default=0, ge=0)
    total_meals: int = Field(default=0, ge=0)
    workout_streak: int = Field(default=0, ge=0)
    last_workout_date: date | None = None
    meal_adherence: int = Field(default=0, ge=0, le=100)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class CompletionEvent(CamelModel):
    user_id: str
    reference_id: str
    kind: CompletionKind
    completed_at: datetime


class CompletionEventResponse(CompletionEvent):
    id: str | None = None


class AchievementResponse(CamelModel):
    id: str
    title: str
    description: str
    icon: str


class AwardedAchievement(CamelModel):
    achievement_id: str
    user_id: str
    title: str
    description: str
    icon: str
    earned_at: datetime


class CompletionOutcome(CamelModel):
    stats: UserProgressStats
    newly_awarded: list[AwardedAchievement] = []
    degraded: bool = False


# --- Requests ---


class RecordCompletionRequest(CamelModel):
    reference_id: str = Field(min_length=1, max_length=256)
    kind: str
