"""Pure progress rules: streaks, meal adherence, and legacy event-log derivation."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta, timezone

from fitplan.errors import InvalidArgument
from fitplan.progress.schemas import CompletionEvent, CompletionKind, UserProgressStats

# 3 meals x 7 days
MEAL_WEEKLY_TARGET = 21


def parse_kind(kind: str | CompletionKind) -> CompletionKind:
    try:
        return CompletionKind(kind)
    except ValueError:
        msg = f"Invalid completion kind: {kind!r} (expected 'workout' or 'meal')"
        raise InvalidArgument(msg) from None


def utc_day(dt: datetime) -> date:
    """Truncate a timestamp to its UTC calendar day."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).date()


def meal_adherence(total_meals: int) -> int:
    """Percentage of the weekly meal target, rounded half-up and capped at 100."""
    if total_meals <= 0:
        return 0
    # floor(100 * n / 21 + 0.5) in integer arithmetic
    return min(100, (total_meals * 200 + MEAL_WEEKLY_TARGET) // (2 * MEAL_WEEKLY_TARGET))


def day_gap(last: date | None, today: date) -> int | None:
    """Whole days since ``last``; None when there was no previous workout."""
    if last is None:
        return None
    return (today - last).days


def next_streak(current: int, gap: int | None) -> int:
    """Streak after logging a workout ``gap`` days after the previous one.

    Exactly one day extends the streak. A same-day repeat keeps it (a zero
    streak becomes 1). Anything else, including the first workout or a clock
    that went backwards, restarts it at 1.
    """
    if gap == 1:
        return current + 1
    if gap == 0:
        return max(current, 1)
    return 1


def apply_completion(
    stats: UserProgressStats,
    kind: CompletionKind,
    now: datetime,
) -> UserProgressStats:
    """Return new stats with one completion of ``kind`` applied at ``now``."""
    update: dict = {"updated_at": now}
    if kind is CompletionKind.WORKOUT:
        today = utc_day(now)
        update["workout_streak"] = next_streak(stats.workout_streak, day_gap(stats.last_workout_date, today))
        update["total_workouts"] = stats.total_workouts + 1
        update["last_workout_date"] = today
    else:
        total_meals = stats.total_meals + 1
        update["total_meals"] = total_meals
        update["meal_adherence"] = meal_adherence(total_meals)
    return stats.model_copy(update=update)


def trailing_streak(workout_days: Iterable[date]) -> int:
    """Length of the run of consecutive days ending at the latest workout day."""
    days = sorted(set(workout_days), reverse=True)
    if not days:
        return 0
    streak = 1
    for prev, cur in zip(days, days[1:]):
        if prev - cur != timedelta(days=1):
            break
        streak += 1
    return streak


def derive_stats(events: Iterable[CompletionEvent]) -> UserProgressStats:
    """Rebuild aggregate stats from (a window of) the completion event log."""
    events = list(events)
    if not events:
        return UserProgressStats()

    workout_days = [utc_day(e.completed_at) for e in events if e.kind is CompletionKind.WORKOUT]
    total_meals = sum(1 for e in events if e.kind is CompletionKind.MEAL)
    return UserProgressStats(
        total_workouts=len(workout_days),
        total_meals=total_meals,
        workout_streak=trailing_streak(workout_days),
        last_workout_date=max(workout_days) if workout_days else None,
        meal_adherence=meal_adherence(total_meals),
        updated_at=max(e.completed_at for e in events),
    )
