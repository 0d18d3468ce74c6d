"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication. There
is one token type: a bearer token valid for settings.token_expire_days
(7 by default). Nothing is stored server-side, so a token stays valid
until it expires — there is no revocation list.

Payload: {"userId": int, "email": str, "iat": ..., "exp": ...}
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from linkedcommunity.config import Settings


class TokenError(Exception):
    """Raised when a token fails verification.

    The message is intentionally generic: callers must not learn
    whether the signature, the expiry or the shape was wrong.
    """


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    email: str
    issued_at: datetime
    expires_at: datetime


def create_access_token(
    settings: Settings,
    user_id: int,
    email: str,
    now: Optional[datetime] = None,
) -> str:
    """Create a signed bearer token for a user."""
    issued = now or datetime.now(timezone.utc)
    payload = {
        "userId": user_id,
        "email": email,
        "iat": issued,
        "exp": issued + timedelta(days=settings.token_expire_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(settings: Settings, token: str) -> TokenClaims:
    """Verify and decode a bearer token.

    Returns the claims on success. Raises TokenError on any failure.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.PyJWTError:
        raise TokenError("Invalid or expired token")

    user_id = payload.get("userId")
    email = payload.get("email")
    # bool is an int subclass; a forged {"userId": true} must not pass.
    if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(email, str):
        raise TokenError("Invalid or expired token")

    return TokenClaims(
        user_id=user_id,
        email=email,
        issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
