"""Progress and achievement endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from fitplan.auth.dependencies import get_current_user
from fitplan.auth.gateway import Identity
from fitplan.dependencies import get_progress_engine
from fitplan.progress.achievements import ACHIEVEMENTS
from fitplan.progress.engine import ProgressEngine
from fitplan.progress.schemas import (
    AchievementResponse,
    AwardedAchievement,
    CompletionEventResponse,
    CompletionOutcome,
    RecordCompletionRequest,
    UserProgressStats,
)
from fitplan.schemas import Envelope

router = APIRouter(prefix="/api/v1", tags=["Progress"])

OFFLINE_MESSAGE = "Progress logged in offline mode. It will show up once the connection is restored."


@router.get("/achievements", response_model=Envelope[list[AchievementResponse]])
async def list_achievement_definitions():
    """Every achievement that can be earned, in evaluation order."""
    return Envelope(data=[
        AchievementResponse(id=a.id, title=a.title, description=a.description, icon=a.icon)
        for a in ACHIEVEMENTS
    ])


# ── Authenticated endpoints ──


@router.get("/users/progress", response_model=Envelope[UserProgressStats])
async def get_my_progress(
    user: Identity = Depends(get_current_user),
    engine: ProgressEngine = Depends(get_progress_engine),
):
    """Current aggregate stats. 503 when the store cannot be read."""
    return Envelope(data=await engine.get_progress(user.uid))


@router.post("/users/progress", response_model=Envelope[CompletionOutcome], status_code=201)
async def record_completion(
    body: RecordCompletionRequest,
    user: Identity = Depends(get_current_user),
    engine: ProgressEngine = Depends(get_progress_engine),
):
    """Log a completed workout or meal."""
    outcome = await engine.record_completion(user.uid, body.reference_id, body.kind)
    return Envelope(data=outcome, message=OFFLINE_MESSAGE if outcome.degraded else None)


@router.get("/users/progress/history", response_model=Envelope[list[CompletionEventResponse]])
async def get_my_history(
    limit: int = Query(30, ge=1, le=100),
    user: Identity = Depends(get_current_user),
    engine: ProgressEngine = Depends(get_progress_engine),
):
    """Recent completion events, newest first."""
    events = await engine.get_history(user.uid, limit=limit)
    return Envelope(data=events)


@router.get("/users/achievements", response_model=Envelope[list[AwardedAchievement]])
async def get_my_achievements(
    user: Identity = Depends(get_current_user),
    engine: ProgressEngine = Depends(get_progress_engine),
):
    """Earned achievements, newest first."""
    return Envelope(data=await engine.get_achievements(user.uid))
