"""Progress engine: turns completion events into stats and achievement awards.

Writes degrade: a failing store never fails ``record_completion``; the caller
gets locally computed stats with ``degraded=True``. The canonical progress
read does not degrade and raises ``StoreUnavailable``.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

import structlog

from fitplan.errors import InvalidArgument, StoreUnavailable
from fitplan.progress.achievements import (
    ACHIEVEMENTS,
    Achievement,
    award_doc_id,
    mock_achievements,
    newly_unlocked,
)
from fitplan.progress.rules import apply_completion, derive_stats, parse_kind
from fitplan.progress.schemas import (
    AwardedAchievement,
    CompletionEvent,
    CompletionEventResponse,
    CompletionKind,
    CompletionOutcome,
    UserProgressStats,
)
from fitplan.store import DocumentStore, OrderBy, Where, try_store
from fitplan.store.collections import USER_ACHIEVEMENTS, USER_PROGRESS, USER_STATS

logger = structlog.get_logger()


class ProgressEngine:
    """Records completions, maintains per-user stats and awards achievements."""

    def __init__(
        self,
        store: DocumentStore,
        definitions: Sequence[Achievement] = ACHIEVEMENTS,
        history_limit: int = 30,
    ) -> None:
        self.store = store
        self.definitions = definitions
        self.history_limit = history_limit

    async def record_completion(
        self,
        user_id: str,
        reference_id: str,
        kind: str | CompletionKind,
        now: datetime | None = None,
    ) -> CompletionOutcome:
        """Log one completed workout or meal and return the updated stats.

        Raises:
            InvalidArgument: If ``user_id`` is empty or ``kind`` is unknown.
        """
        if not user_id:
            msg = "user_id is required"
            raise InvalidArgument(msg)
        kind = parse_kind(kind)
        if now is None:
            now = datetime.now(timezone.utc)

        event = CompletionEvent(user_id=user_id, reference_id=reference_id, kind=kind, completed_at=now)
        appended = await try_store(self.store.add(USER_PROGRESS, event.to_document()))
        if not appended.ok:
            logger.warning("completion_append_failed", user_id=user_id, kind=kind.value, error=str(appended.error))

        loaded = await try_store(self.store.get(USER_STATS, user_id))
        if not loaded.ok:
            logger.warning("progress_read_failed", user_id=user_id, error=str(loaded.error))
        doc = loaded.or_else(None)
        previous = UserProgressStats.model_validate(doc) if doc else UserProgressStats(updated_at=now)

        stats = apply_completion(previous, kind, now)

        # Stats built from a failed read start at zero and must not replace the stored record.
        saved_ok = False
        if loaded.ok:
            saved = await try_store(self.store.set(USER_STATS, user_id, stats.to_document()))
            saved_ok = saved.ok
            if not saved.ok:
                logger.warning("progress_write_failed", user_id=user_id, error=str(saved.error))

        awarded = await self.evaluate_achievements(user_id, stats, now=now)

        degraded = not (appended.ok and loaded.ok and saved_ok)
        if degraded:
            logger.info("completion_logged_degraded", user_id=user_id, kind=kind.value)
        return CompletionOutcome(stats=stats, newly_awarded=awarded, degraded=degraded)

    async def evaluate_achievements(
        self,
        user_id: str,
        stats: UserProgressStats,
        now: datetime | None = None,
    ) -> list[AwardedAchievement]:
        """Award every satisfied achievement the user does not have yet.

        Returns the awards that were persisted. Store failures are logged and
        swallowed; when the current award set cannot be read nothing is
        awarded in this pass.
        """
        if now is None:
            now = datetime.now(timezone.utc)

        existing = await try_store(self.store.query(USER_ACHIEVEMENTS, [Where("userId", user_id)]))
        if not existing.ok:
            logger.warning("achievements_read_failed", user_id=user_id, error=str(existing.error))
            return []
        already = {doc.get("achievementId") for doc in existing.unwrap()}

        awarded: list[AwardedAchievement] = []
        for achievement in newly_unlocked(self.definitions, stats, already):
            award = achievement.award(user_id, now)
            saved = await try_store(
                self.store.set(USER_ACHIEVEMENTS, award_doc_id(user_id, achievement.id), award.to_document())
            )
            if saved.ok:
                awarded.append(award)
                logger.info("achievement_awarded", user_id=user_id, achievement=achievement.id)
            else:
                logger.warning(
                    "achievement_write_failed",
                    user_id=user_id,
                    achievement=achievement.id,
                    error=str(saved.error),
                )
        return awarded

    async def get_progress(self, user_id: str) -> UserProgressStats:
        """Read the user's stats, falling back to the recent event log.

        Raises:
            StoreUnavailable: If neither source can be read.
        """
        canonical = await try_store(self.store.get(USER_STATS, user_id))
        doc = canonical.or_else(None)
        if doc:
            return UserProgressStats.model_validate(doc)
        if not canonical.ok:
            logger.warning("progress_read_failed", user_id=user_id, error=str(canonical.error))

        history = await try_store(self.get_history(user_id))
        if not history.ok:
            logger.warning("progress_history_read_failed", user_id=user_id, error=str(history.error))
            msg = "Progress is temporarily unavailable"
            raise StoreUnavailable(msg) from history.error
        return derive_stats(history.unwrap())

    async def get_history(self, user_id: str, limit: int | None = None) -> list[CompletionEventResponse]:
        """Most recent completion events, newest first."""
        docs = await self.store.query(
            USER_PROGRESS,
            [Where("userId", user_id)],
            order_by=OrderBy("completedAt", descending=True),
            limit=limit or self.history_limit,
        )
        return [CompletionEventResponse.model_validate(d) for d in docs]

    async def get_achievements(self, user_id: str) -> list[AwardedAchievement]:
        """The user's awards, newest first; the sample shelf if the store fails."""
        result = await try_store(
            self.store.query(
                USER_ACHIEVEMENTS,
                [Where("userId", user_id)],
                order_by=OrderBy("earnedAt", descending=True),
            )
        )
        if not result.ok:
            logger.warning("achievements_fallback_to_mock", user_id=user_id, error=str(result.error))
            return mock_achievements()
        return [AwardedAchievement.model_validate(d) for d in result.unwrap()]
