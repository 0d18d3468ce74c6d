"""Pydantic schemas for users and auth.

Learn: Request bodies are deliberately permissive (every field
optional). Required-field and length rules live in UserService so the
client gets the same messages the original API returned, instead of a
generic schema error.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ─── Requests ───────────────────────────────────────────

class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    bio: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    bio: Optional[str] = None


# ─── Responses ──────────────────────────────────────────

class UserSummary(BaseModel):
    id: int
    name: str
    email: str
    bio: Optional[str] = None
    avatar: Optional[str] = None

    model_config = {"from_attributes": True}


class UserRead(UserSummary):
    created_at: Optional[datetime] = None


class AuthUser(UserSummary):
    """User as returned alongside a fresh token (camelCase timestamp)."""
    created_at: Optional[datetime] = Field(
        default=None, serialization_alias="createdAt"
    )


class AuthResponse(BaseModel):
    token: str
    user: AuthUser


class UserEnvelope(BaseModel):
    user: UserRead


class UserProfile(UserRead):
    posts_count: int = Field(serialization_alias="postsCount")


class UserSearchResults(BaseModel):
    users: list[UserSummary]
