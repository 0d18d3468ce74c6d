"""User API routes — public profiles, a user's posts, own profile edits."""

from typing import Optional

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from linkedcommunity.api.posts import PageParams, page_params
from linkedcommunity.auth.dependencies import (
    CurrentIdentity,
    get_current_user,
    get_current_user_optional,
)
from linkedcommunity.config import Settings, get_settings
from linkedcommunity.db.engine import get_db
from linkedcommunity.db.models import MAX_ROW_ID
from linkedcommunity.schemas.common import Pagination
from linkedcommunity.schemas.post import PostPage
from linkedcommunity.schemas.user import (
    ProfileUpdate,
    UserEnvelope,
    UserProfile,
    UserRead,
)
from linkedcommunity.services.post_service import PostService
from linkedcommunity.services.user_service import UserService

router = APIRouter(prefix="/users")


def _users(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> UserService:
    return UserService(db, bcrypt_rounds=settings.bcrypt_rounds)


def _posts(db: AsyncSession = Depends(get_db)) -> PostService:
    return PostService(db)


@router.put("/profile", response_model=UserEnvelope)
async def update_profile(
    body: ProfileUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(_users),
):
    """Update the caller's own name and bio. There is no user id to spoof."""
    user = await svc.update_profile(identity.user_id, name=body.name, bio=body.bio)
    return UserEnvelope(user=UserRead.model_validate(user))


@router.get("/{user_id}", response_model=UserProfile)
async def get_user(
    user_id: int = Path(ge=1, le=MAX_ROW_ID),
    svc: UserService = Depends(_users),
):
    user, posts_count = await svc.get_profile(user_id)
    return UserProfile(
        **UserRead.model_validate(user).model_dump(), posts_count=posts_count
    )


@router.get("/{user_id}/posts", response_model=PostPage)
async def list_user_posts(
    user_id: int = Path(ge=1, le=MAX_ROW_ID),
    paging: PageParams = Depends(page_params),
    viewer: Optional[CurrentIdentity] = Depends(get_current_user_optional),
    svc: PostService = Depends(_posts),
):
    posts, total = await svc.list_posts(
        page=paging.page,
        limit=paging.limit,
        author_id=user_id,
        viewer_id=viewer.user_id if viewer else None,
    )
    return PostPage(
        posts=posts, pagination=Pagination.build(paging.page, paging.limit, total)
    )
