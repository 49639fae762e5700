"""User profile, settings and preference models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field

from fitplan.schemas import CamelModel

DEFAULT_SETTINGS: dict[str, Any] = {
    "emailNotifications": False,
    "workoutIntensity": "medium",
    "mealPreferences": {
        "calories": "",
        "macroPreferences": "balanced",
    },
    "darkMode": False,
    "language": "english",
    "measurementSystem": "metric",
}


class UserProfile(CamelModel):
    """The ``users/{uid}`` document. Unknown fields are carried through."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    display_name: str | None = None
    email: str | None = None
    photo_url: str | None = Field(default=None, alias="photoURL")
    age: int | None = None
    weight: float | None = None
    height: float | None = None
    fitness_goals: str | list[str] | None = None
    activity_level: str | None = None
    dietary_restrictions: str | list[str] | None = None
    settings: dict[str, Any] = {}
    preferences: dict[str, Any] = {}
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfileUpdateRequest(CamelModel):
    display_name: str | None = Field(default=None, max_length=100)
    photo_url: str | None = Field(default=None, alias="photoURL", max_length=2048)
    age: int | None = Field(default=None, ge=1, le=120)
    weight: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    fitness_goals: str | list[str] | None = None
    activity_level: str | None = None
    dietary_restrictions: str | list[str] | None = None


class AccountDeletionSummary(CamelModel):
    user_id: str
    progress_events: int = 0
    achievements: int = 0
    plans: int = 0
