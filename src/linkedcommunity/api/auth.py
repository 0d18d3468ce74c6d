"""Auth API — registration, login, current user.

Learn: Routes for member authentication:
- POST /auth/register → create account → token + user
- POST /auth/login → email/password → token + user
- GET /auth/me → current user info (bearer token required)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from linkedcommunity.auth.dependencies import CurrentIdentity, get_current_user
from linkedcommunity.auth.jwt import create_access_token
from linkedcommunity.config import Settings, get_settings
from linkedcommunity.db.engine import get_db
from linkedcommunity.schemas.user import (
    AuthResponse,
    AuthUser,
    LoginRequest,
    RegisterRequest,
    UserEnvelope,
    UserRead,
)
from linkedcommunity.services.user_service import UserService

router = APIRouter(prefix="/auth")


def _svc(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> UserService:
    return UserService(db, bcrypt_rounds=settings.bcrypt_rounds)


# ─── Register ────────────────────────────────────────────


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    body: RegisterRequest,
    svc: UserService = Depends(_svc),
    settings: Settings = Depends(get_settings),
):
    """Create a new account and sign it in."""
    user = await svc.create(
        name=body.name, email=body.email, password=body.password, bio=body.bio
    )
    return AuthResponse(
        token=create_access_token(settings, user.id, user.email),
        user=AuthUser.model_validate(user),
    )


# ─── Login ───────────────────────────────────────────────


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    svc: UserService = Depends(_svc),
    settings: Settings = Depends(get_settings),
):
    user = await svc.authenticate(body.email, body.password)
    return AuthResponse(
        token=create_access_token(settings, user.id, user.email),
        user=AuthUser.model_validate(user),
    )


# ─── Current user ───────────────────────────────────────


@router.get("/me", response_model=UserEnvelope)
async def get_me(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(_svc),
):
    """Get the current authenticated user's info."""
    user = await svc.get(identity.user_id)
    return UserEnvelope(user=UserRead.model_validate(user))
