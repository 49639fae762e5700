"""User profile business logic."""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import Any

import structlog

from fitplan.auth.gateway import AuthGateway, Identity
from fitplan.catalog.schemas import PlanStatus
from fitplan.errors import InvalidArgument
from fitplan.store import DocumentStore, Where
from fitplan.store.collections import (
    MEAL_PLANS,
    USER_ACHIEVEMENTS,
    USER_PROGRESS,
    USER_STATS,
    USERS,
    WORKOUT_PLANS,
)
from fitplan.users.schemas import DEFAULT_SETTINGS, AccountDeletionSummary, ProfileUpdateRequest, UserProfile

logger = structlog.get_logger()

_PROTECTED_KEYS = frozenset({"id", "email", "settings", "preferences", "createdAt", "updatedAt"})


def deep_merge(base: dict[str, Any], patch: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``patch`` into a copy of ``base``; nested dicts merge, everything else replaces."""
    merged = copy.deepcopy(base)
    for key, value in patch.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class ProfileService:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def get_or_create_profile(self, identity: Identity) -> UserProfile:
        """Return the caller's profile, seeding it from the token on first sight."""
        doc = await self.store.get(USERS, identity.uid)
        if doc is not None:
            return UserProfile.model_validate(doc)

        now = datetime.now(timezone.utc)
        profile = UserProfile(
            display_name=identity.display_name,
            email=identity.email,
            photo_url=identity.photo_url,
            created_at=now,
            updated_at=now,
        )
        await self.store.set(USERS, identity.uid, profile.to_document())
        logger.info("profile_created", user_id=identity.uid)
        profile.id = identity.uid
        return profile

    async def update_profile(self, identity: Identity, body: ProfileUpdateRequest) -> UserProfile:
        profile = await self.get_or_create_profile(identity)
        patch = {
            k: v
            for k, v in body.model_dump(mode="json", by_alias=True, exclude_unset=True).items()
            if k not in _PROTECTED_KEYS
        }
        patch["updatedAt"] = datetime.now(timezone.utc).isoformat()
        await self.store.update(USERS, identity.uid, patch)
        return UserProfile.model_validate({**profile.model_dump(by_alias=True), **patch})

    # --- Settings ---

    async def get_settings(self, identity: Identity) -> dict[str, Any]:
        """Stored settings layered over the defaults."""
        profile = await self.get_or_create_profile(identity)
        return deep_merge(DEFAULT_SETTINGS, profile.settings)

    async def update_settings(self, identity: Identity, patch: dict[str, Any]) -> dict[str, Any]:
        """
        Deep-merge update user settings.

        Only the provided keys are updated; others remain unchanged.
        """
        profile = await self.get_or_create_profile(identity)
        merged = deep_merge(profile.settings, patch)
        await self.store.update(
            USERS,
            identity.uid,
            {"settings": merged, "updatedAt": datetime.now(timezone.utc).isoformat()},
        )
        logger.info("settings_updated", user_id=identity.uid, keys=sorted(patch))
        return deep_merge(DEFAULT_SETTINGS, merged)

    # --- Preferences ---

    async def get_preferences(self, identity: Identity) -> dict[str, Any]:
        profile = await self.get_or_create_profile(identity)
        return profile.preferences

    async def update_preferences(self, identity: Identity, patch: dict[str, Any]) -> dict[str, Any]:
        profile = await self.get_or_create_profile(identity)
        merged = deep_merge(profile.preferences, patch)
        await self.store.update(
            USERS,
            identity.uid,
            {"preferences": merged, "updatedAt": datetime.now(timezone.utc).isoformat()},
        )
        return merged

    # --- Account deletion ---

    async def delete_account(
        self,
        identity: Identity,
        gateway: AuthGateway,
        confirm_email: str | None = None,
    ) -> AccountDeletionSummary:
        """
        Delete everything the user owns, then the auth identity.

        Approved plans stay in the catalog. Store errors propagate and leave
        the auth identity in place so the deletion can be retried.

        Raises:
            InvalidArgument: If ``confirm_email`` does not match the account email.
        """
        if identity.email and confirm_email is not None and confirm_email.lower() != identity.email.lower():
            msg = "Email does not match. Account deletion cancelled."
            raise InvalidArgument(msg)

        uid = identity.uid
        summary = AccountDeletionSummary(user_id=uid)

        for doc in await self.store.query(USER_PROGRESS, [Where("userId", uid)]):
            await self.store.delete(USER_PROGRESS, doc["id"])
            summary.progress_events += 1
        await self.store.delete(USER_STATS, uid)

        for doc in await self.store.query(USER_ACHIEVEMENTS, [Where("userId", uid)]):
            await self.store.delete(USER_ACHIEVEMENTS, doc["id"])
            summary.achievements += 1

        for collection in (WORKOUT_PLANS, MEAL_PLANS):
            for doc in await self.store.query(collection, [Where("ownerId", uid)]):
                if doc.get("status") == PlanStatus.APPROVED.value:
                    continue
                await self.store.delete(collection, doc["id"])
                summary.plans += 1

        await self.store.delete(USERS, uid)
        await gateway.delete_user(uid)
        logger.info(
            "account_deleted",
            user_id=uid,
            progress_events=summary.progress_events,
            achievements=summary.achievements,
            plans=summary.plans,
        )
        return summary
