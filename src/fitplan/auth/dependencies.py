"""FastAPI authentication dependencies."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from fitplan.auth.gateway import AuthGateway, Identity, get_auth_gateway
from fitplan.errors import InvalidToken

_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Security(_bearer),
    gateway: AuthGateway = Depends(get_auth_gateway),
) -> Identity:
    """
    Verify the bearer token and return the caller's identity.

    401 when no token is sent, 403 when the token does not verify.
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Access denied. No token provided.")
    try:
        return await gateway.verify_token(credentials.credentials)
    except InvalidToken as e:
        raise HTTPException(status_code=403, detail="Invalid token.") from e


async def require_admin(
    user: Identity = Depends(get_current_user),
) -> Identity:
    """Same as get_current_user but additionally requires the admin claim."""
    if not user.admin:
        raise HTTPException(status_code=403, detail="Access denied. Admin privileges required.")
    return user
