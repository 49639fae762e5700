"""Identity verification boundary: Firebase Authentication or local JWTs."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import firebase_admin
import jwt
import structlog
from firebase_admin import auth as firebase_auth

from fitplan.auth.jwt import verify_token as verify_local_token
from fitplan.config import Settings
from fitplan.errors import InvalidToken

logger = structlog.get_logger()


@dataclass(frozen=True)
class Identity:
    """A verified caller."""

    uid: str
    email: str | None = None
    email_verified: bool = False
    admin: bool = False
    display_name: str | None = None
    photo_url: str | None = None

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> Identity:
        return cls(
            uid=str(claims.get("uid") or claims["sub"]),
            email=claims.get("email"),
            email_verified=bool(claims.get("email_verified", False)),
            admin=claims.get("admin") is True,
            display_name=claims.get("name"),
            photo_url=claims.get("picture"),
        )


class AuthGateway(ABC):
    @abstractmethod
    async def verify_token(self, token: str) -> Identity:
        """Verify an identity token.

        Raises:
            InvalidToken: If the token cannot be verified.
        """

    @abstractmethod
    async def delete_user(self, uid: str) -> None:
        """Remove the identity from the auth provider."""


class FirebaseAuthGateway(AuthGateway):
    """Verifies Firebase ID tokens with the Admin SDK."""

    def __init__(self, app: firebase_admin.App) -> None:
        self._app = app

    async def verify_token(self, token: str) -> Identity:
        try:
            # The Admin SDK is synchronous (it may fetch signing certs)
            claims = await asyncio.to_thread(firebase_auth.verify_id_token, token, self._app)
        except (firebase_auth.InvalidIdTokenError, firebase_auth.CertificateFetchError, ValueError) as exc:
            logger.info("firebase_token_rejected", error=str(exc))
            raise InvalidToken(str(exc)) from exc
        return Identity.from_claims(claims)

    async def delete_user(self, uid: str) -> None:
        try:
            await asyncio.to_thread(firebase_auth.delete_user, uid, self._app)
        except firebase_auth.UserNotFoundError:
            logger.info("firebase_user_already_deleted", uid=uid)


class JwtAuthGateway(AuthGateway):
    """Verifies tokens issued by ``fitplan.auth.jwt``."""

    async def verify_token(self, token: str) -> Identity:
        try:
            claims = verify_local_token(token)
        except jwt.InvalidTokenError as exc:
            raise InvalidToken(str(exc)) from exc
        return Identity.from_claims(claims)

    async def delete_user(self, uid: str) -> None:
        # Local identities live only in their tokens
        return None


_gateway: AuthGateway | None = None


def init_auth_gateway(settings: Settings) -> AuthGateway:
    global _gateway  # noqa: PLW0603
    provider = settings.auth_provider.lower()
    if provider == "firebase":
        from fitplan.firebase import init_firebase

        _gateway = FirebaseAuthGateway(init_firebase(settings))
    elif provider == "jwt":
        _gateway = JwtAuthGateway()
    else:
        msg = f"Unknown auth provider: {settings.auth_provider}"
        raise ValueError(msg)
    return _gateway


def get_auth_gateway() -> AuthGateway:
    """Get the auth gateway (FastAPI dependency)."""
    if _gateway is None:
        msg = "Auth gateway not initialized. Call init_auth_gateway() first."
        raise RuntimeError(msg)
    return _gateway
