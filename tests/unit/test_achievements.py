"""Achievement definition and selection tests."""

from datetime import datetime, timezone

from fitplan.progress.achievements import (
    ACHIEVEMENTS,
    ACHIEVEMENTS_BY_ID,
    award_doc_id,
    mock_achievements,
    newly_unlocked,
)
from fitplan.progress.schemas import UserProgressStats


def _ids(achievements) -> list[str]:
    return [a.id for a in achievements]


class TestDefinitions:
    def test_ids_are_unique(self):
        assert len(ACHIEVEMENTS_BY_ID) == len(ACHIEVEMENTS)

    def test_catalogue_starts_with_core_badges(self):
        assert _ids(ACHIEVEMENTS)[:3] == ["first_workout", "healthy_eater", "streak_7"]

    def test_award_copies_definition(self):
        earned = datetime(2026, 3, 2, tzinfo=timezone.utc)
        award = ACHIEVEMENTS_BY_ID["first_workout"].award("u1", earned)
        assert award.achievement_id == "first_workout"
        assert award.user_id == "u1"
        assert award.icon == "\U0001f3c3"
        assert award.earned_at == earned

    def test_award_document_uses_camel_case(self):
        award = ACHIEVEMENTS_BY_ID["streak_7"].award("u1", datetime(2026, 3, 2, tzinfo=timezone.utc))
        doc = award.to_document()
        assert doc["achievementId"] == "streak_7"
        assert doc["userId"] == "u1"
        assert doc["earnedAt"].startswith("2026-03-02")

    def test_doc_id_is_deterministic(self):
        assert award_doc_id("u1", "streak_7") == "u1_streak_7"


class TestNewlyUnlocked:
    """Selection is pure and keeps definition order."""

    def test_nothing_before_first_workout(self):
        assert newly_unlocked(ACHIEVEMENTS, UserProgressStats(), set()) == []

    def test_first_workout(self):
        stats = UserProgressStats(total_workouts=1, workout_streak=1)
        assert _ids(newly_unlocked(ACHIEVEMENTS, stats, set())) == ["first_workout"]

    def test_already_awarded_is_skipped(self):
        stats = UserProgressStats(total_workouts=1, workout_streak=1)
        assert newly_unlocked(ACHIEVEMENTS, stats, {"first_workout"}) == []

    def test_several_in_one_pass_in_definition_order(self):
        stats = UserProgressStats(total_workouts=7, total_meals=10, workout_streak=7)
        assert _ids(newly_unlocked(ACHIEVEMENTS, stats, set())) == ["first_workout", "healthy_eater", "streak_7"]

    def test_streak_threshold(self):
        six = UserProgressStats(total_workouts=6, workout_streak=6)
        seven = UserProgressStats(total_workouts=7, workout_streak=7)
        assert "streak_7" not in _ids(newly_unlocked(ACHIEVEMENTS, six, {"first_workout"}))
        assert "streak_7" in _ids(newly_unlocked(ACHIEVEMENTS, seven, {"first_workout"}))

    def test_perfect_week_needs_full_adherence(self):
        stats = UserProgressStats(total_meals=21, meal_adherence=100)
        assert "perfect_week" in _ids(newly_unlocked(ACHIEVEMENTS, stats, set()))


class TestMockAchievements:
    def test_fixed_three_element_shelf(self):
        shelf = mock_achievements()
        assert [a.icon for a in shelf] == ["\U0001f3c3", "\U0001f957", "\U0001f525"]
        assert {a.user_id for a in shelf} == {"demo"}

    def test_shelf_is_stable(self):
        assert mock_achievements() == mock_achievements()
