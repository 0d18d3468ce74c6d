"""Pydantic schemas for posts and likes."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from linkedcommunity.schemas.common import Pagination


class PostCreate(BaseModel):
    content: Optional[str] = None


class PostRead(BaseModel):
    """A post flattened with its author's display fields."""
    id: int
    content: str
    likes_count: int
    comments_count: int
    created_at: Optional[datetime] = None
    user_id: int
    user_name: str
    user_avatar: Optional[str] = None
    liked: bool = False

    model_config = {"from_attributes": True}


class PostPage(BaseModel):
    posts: list[PostRead]
    pagination: Pagination


class LikeToggled(BaseModel):
    liked: bool
    message: str
