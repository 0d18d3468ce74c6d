"""FastAPI auth dependencies.

Learn: These are used as Depends() in route handlers to extract
and validate the current user from the `Authorization: Bearer <token>`
header.

- get_current_user: required auth. No token → 401, bad token → 403.
- get_current_user_optional: for public reads that personalise their
  output (e.g. the `liked` flag on posts). Bad tokens are ignored.
"""

from dataclasses import dataclass
from typing import Optional

import structlog
from fastapi import Depends, Header

from linkedcommunity.auth.jwt import TokenError, verify_token
from linkedcommunity.config import Settings, get_settings
from linkedcommunity.errors import ForbiddenError, UnauthorizedError

logger = structlog.get_logger()


@dataclass(frozen=True)
class CurrentIdentity:
    """The verified caller of a request.

    Learn: This is the per-request auth context. It only ever comes
    from a verified token, so handlers can trust user_id for ownership
    checks.
    """

    user_id: int
    email: str


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_current_user(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> CurrentIdentity:
    """Extract current identity (required)."""
    token = _bearer_token(authorization)
    if token is None:
        raise UnauthorizedError("Access token required")

    try:
        claims = verify_token(settings, token)
    except TokenError:
        logger.info("auth.token_rejected")
        raise ForbiddenError("Invalid or expired token")

    structlog.contextvars.bind_contextvars(user_id=claims.user_id)
    return CurrentIdentity(user_id=claims.user_id, email=claims.email)


async def get_current_user_optional(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> Optional[CurrentIdentity]:
    """Extract current identity if a valid token is present, else None."""
    token = _bearer_token(authorization)
    if token is None:
        return None
    try:
        claims = verify_token(settings, token)
    except TokenError:
        return None
    return CurrentIdentity(user_id=claims.user_id, email=claims.email)
