"""Achievement definitions and unlock selection.

Definitions are static and evaluated in declaration order. These ids and icons
MUST match the frontend badge shelf.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from fitplan.progress.schemas import AwardedAchievement, UserProgressStats


@dataclass(frozen=True)
class Achievement:
    id: str
    title: str
    description: str
    icon: str
    condition: Callable[[UserProgressStats], bool]

    def award(self, user_id: str, earned_at: datetime) -> AwardedAchievement:
        return AwardedAchievement(
            achievement_id=self.id,
            user_id=user_id,
            title=self.title,
            description=self.description,
            icon=self.icon,
            earned_at=earned_at,
        )


ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement(
        id="first_workout",
        title="First Workout",
        description="Complete your first workout",
        icon="\U0001f3c3",  # 🏃
        condition=lambda s: s.total_workouts >= 1,
    ),
    Achievement(
        id="healthy_eater",
        title="Healthy Eater",
        description="Log 10 healthy meals",
        icon="\U0001f957",  # 🥗
        condition=lambda s: s.total_meals >= 10,
    ),
    Achievement(
        id="streak_7",
        title="7 Day Streak",
        description="Work out 7 days in a row",
        icon="\U0001f525",  # 🔥
        condition=lambda s: s.workout_streak >= 7,
    ),
    Achievement(
        id="workouts_25",
        title="Consistency Counts",
        description="Complete 25 workouts",
        icon="\U0001f4aa",  # 💪
        condition=lambda s: s.total_workouts >= 25,
    ),
    Achievement(
        id="perfect_week",
        title="Perfect Week",
        description="Reach 100% meal adherence",
        icon="\U0001f3c6",  # 🏆
        condition=lambda s: s.meal_adherence >= 100,
    ),
    Achievement(
        id="streak_30",
        title="Unstoppable",
        description="Work out 30 days in a row",
        icon="\u26a1",  # ⚡
        condition=lambda s: s.workout_streak >= 30,
    ),
)

ACHIEVEMENTS_BY_ID: dict[str, Achievement] = {a.id: a for a in ACHIEVEMENTS}


def newly_unlocked(
    definitions: Sequence[Achievement],
    stats: UserProgressStats,
    already_awarded: Collection[str],
) -> list[Achievement]:
    """Definitions satisfied by ``stats`` that have not been awarded yet."""
    return [a for a in definitions if a.id not in already_awarded and a.condition(stats)]


def award_doc_id(user_id: str, achievement_id: str) -> str:
    """Deterministic document id, one per (user, achievement)."""
    return f"{user_id}_{achievement_id}"


# Shown when the award set cannot be read, so the badge shelf is never empty.
_MOCK_EARNED_AT = datetime(2024, 1, 1, tzinfo=timezone.utc)

MOCK_ACHIEVEMENTS: tuple[tuple[str, str, str, str], ...] = (
    ("first_workout", "First Workout", "Completed your first workout", "\U0001f3c3"),
    ("healthy_eater", "Healthy Eater", "Logged 10 healthy meals", "\U0001f957"),
    ("streak_7", "7 Day Streak", "Worked out 7 days in a row", "\U0001f525"),
)


def mock_achievements() -> list[AwardedAchievement]:
    return [
        AwardedAchievement(
            achievement_id=achievement_id,
            user_id="demo",
            title=title,
            description=description,
            icon=icon,
            earned_at=_MOCK_EARNED_AT,
        )
        for achievement_id, title, description, icon in MOCK_ACHIEVEMENTS
    ]
