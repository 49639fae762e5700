"""
Locally issued JWT tokens.

Used by the ``jwt`` auth provider in development and tests, where no Firebase
project is available. Claims mirror the decoded Firebase ID token fields the
API relies on (``sub``/``uid``, ``email``, ``email_verified``, ``admin``).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from fitplan.config import get_settings


def create_access_token(
    uid: str,
    email: str | None = None,
    *,
    email_verified: bool = False,
    admin: bool = False,
    expires_in: timedelta | None = None,
) -> str:
    """
    Create a signed access token.

    Args:
        uid: The user's identity id.
        email: The user's email address, if any.
        email_verified: Whether the email has been verified.
        admin: Grants the admin custom claim.
        expires_in: Override the configured lifetime.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    lifetime = expires_in or timedelta(minutes=settings.jwt_access_token_expire_minutes)
    payload: dict[str, Any] = {
        "sub": uid,
        "email": email,
        "email_verified": email_verified,
        "admin": admin,
        "iat": now,
        "exp": now + lifetime,
        "iss": settings.jwt_issuer,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> dict[str, Any]:
    """
    Verify and decode an access token.

    Raises:
        jwt.InvalidTokenError: If the token is invalid or expired.
    """
    settings = get_settings()
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
        )
    except jwt.ExpiredSignatureError:
        msg = "Token has expired"
        raise jwt.InvalidTokenError(msg) from None

    if not payload.get("sub"):
        msg = "Token has no subject"
        raise jwt.InvalidTokenError(msg)
    return payload
