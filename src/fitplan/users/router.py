"""User management router: all /api/v1/users/* profile endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from fitplan.auth.dependencies import get_current_user
from fitplan.auth.gateway import AuthGateway, Identity, get_auth_gateway
from fitplan.dependencies import get_profile_service
from fitplan.schemas import Envelope
from fitplan.users.schemas import AccountDeletionSummary, ProfileUpdateRequest, UserProfile
from fitplan.users.service import ProfileService

router = APIRouter(prefix="/api/v1/users", tags=["Users"])


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


@router.get("/profile", response_model=Envelope[UserProfile])
async def get_profile(
    user: Identity = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Get own profile, creating it on first access."""
    return Envelope(data=await profiles.get_or_create_profile(user))


@router.put("/profile", response_model=Envelope[UserProfile])
async def update_profile(
    body: ProfileUpdateRequest,
    user: Identity = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    return Envelope(data=await profiles.update_profile(user, body), message="Profile updated")


# ---------------------------------------------------------------------------
# Settings & preferences
# ---------------------------------------------------------------------------


@router.get("/settings", response_model=Envelope[dict[str, Any]])
async def get_settings(
    user: Identity = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    return Envelope(data=await profiles.get_settings(user))


@router.put("/settings", response_model=Envelope[dict[str, Any]])
async def update_settings(
    body: dict[str, Any] = Body(...),
    user: Identity = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Deep-merge the sent keys into the stored settings."""
    return Envelope(data=await profiles.update_settings(user, body), message="Settings updated")


@router.get("/preferences", response_model=Envelope[dict[str, Any]])
async def get_preferences(
    user: Identity = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    return Envelope(data=await profiles.get_preferences(user))


@router.put("/preferences", response_model=Envelope[dict[str, Any]])
async def update_preferences(
    body: dict[str, Any] = Body(...),
    user: Identity = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    return Envelope(data=await profiles.update_preferences(user, body), message="Preferences updated")


# ---------------------------------------------------------------------------
# Account
# ---------------------------------------------------------------------------


@router.delete("/me", response_model=Envelope[AccountDeletionSummary])
async def delete_account(
    confirm: str | None = Query(None, description="Account email, required to match when given"),
    user: Identity = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
    gateway: AuthGateway = Depends(get_auth_gateway),
):
    """Delete the account and everything it owns."""
    summary = await profiles.delete_account(user, gateway, confirm_email=confirm)
    return Envelope(data=summary, message="Your account has been deleted.")
