"""Post API routes — feed, authoring, deletion, likes.

Learn: Reads are public; writes need a bearer token. The author of a
new post and the actor for delete/like always come from the verified
identity, never from the request body.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from linkedcommunity.auth.dependencies import (
    CurrentIdentity,
    get_current_user,
    get_current_user_optional,
)
from linkedcommunity.db.engine import get_db
from linkedcommunity.db.models import MAX_ROW_ID
from linkedcommunity.schemas.common import Message, Pagination
from linkedcommunity.schemas.post import LikeToggled, PostCreate, PostPage, PostRead
from linkedcommunity.services.post_service import PostService

router = APIRouter(prefix="/posts")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# Keeps OFFSET = (page - 1) * limit inside a signed 64-bit integer.
MAX_PAGE = (2**63 - 1) // MAX_PAGE_SIZE


@dataclass(frozen=True)
class PageParams:
    page: int
    limit: int


def _positive_int(raw: Optional[str], default: int) -> int:
    """Lenient query int: missing, non-numeric or < 1 means the default."""
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value >= 1 else default


def page_params(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
) -> PageParams:
    """Parse ?page=&limit= the way existing clients expect.

    Garbage falls back to page 1 / 10 per page; oversized values are
    clamped rather than rejected.
    """
    return PageParams(
        page=min(_positive_int(page, 1), MAX_PAGE),
        limit=min(_positive_int(limit, DEFAULT_PAGE_SIZE), MAX_PAGE_SIZE),
    )


def _svc(db: AsyncSession = Depends(get_db)) -> PostService:
    return PostService(db)


@router.get("", response_model=PostPage)
async def list_posts(
    paging: PageParams = Depends(page_params),
    viewer: Optional[CurrentIdentity] = Depends(get_current_user_optional),
    svc: PostService = Depends(_svc),
):
    """Global feed, newest first."""
    posts, total = await svc.list_posts(
        page=paging.page,
        limit=paging.limit,
        viewer_id=viewer.user_id if viewer else None,
    )
    return PostPage(
        posts=posts, pagination=Pagination.build(paging.page, paging.limit, total)
    )


@router.post("", response_model=PostRead, status_code=201)
async def create_post(
    body: PostCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    return await svc.create_post(user_id=identity.user_id, content=body.content)


@router.delete("/{post_id}", response_model=Message)
async def delete_post(
    post_id: int = Path(ge=1, le=MAX_ROW_ID),
    identity: CurrentIdentity = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    await svc.delete_post(post_id=post_id, user_id=identity.user_id)
    return Message(message="Post deleted successfully")


@router.post("/{post_id}/like", response_model=LikeToggled)
async def toggle_like(
    post_id: int = Path(ge=1, le=MAX_ROW_ID),
    identity: CurrentIdentity = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    """Like or unlike, depending on whether the caller already liked it."""
    liked = await svc.toggle_like(post_id=post_id, user_id=identity.user_id)
    return LikeToggled(liked=liked, message="Post liked" if liked else "Post unliked")
