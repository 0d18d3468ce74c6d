"""Post service — feed queries, authoring, deletion and likes.

Learn: Feed queries select plain columns (post + author fields) rather
than ORM entities, so every read reflects the current row values even
within a long-lived session.

likes_count is denormalized onto posts. toggle_like keeps it honest by
doing the like-row write and a recount from the likes table in the same
transaction, so the counter always equals the number of like rows.
"""

from typing import Any, Optional

import structlog
from sqlalchemy import delete, exists, false, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from linkedcommunity.db.models import POST_MAX_LENGTH, Like, Post, User
from linkedcommunity.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)

logger = structlog.get_logger()


class PostService:
    """Business logic for posts and likes."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _post_columns(self, viewer_id: Optional[int]):
        if viewer_id is None:
            liked = false()
        else:
            liked = (
                exists()
                .where(Like.post_id == Post.id, Like.user_id == viewer_id)
                .correlate(Post)
            )
        return (
            Post.id,
            Post.content,
            Post.likes_count,
            Post.comments_count,
            Post.created_at,
            User.id.label("user_id"),
            User.name.label("user_name"),
            User.avatar.label("user_avatar"),
            liked.label("liked"),
        )

    # ─── Reads ──────────────────────────────────────────

    async def list_posts(
        self,
        page: int = 1,
        limit: int = 10,
        author_id: Optional[int] = None,
        viewer_id: Optional[int] = None,
    ) -> tuple[list[dict[str, Any]], int]:
        """One page of posts, newest first, plus the total count.

        Ties on created_at are broken by id so paging is stable.
        """
        q = (
            select(*self._post_columns(viewer_id))
            .join(User, Post.user_id == User.id)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .limit(limit)
            .offset((page - 1) * limit)
        )
        count_q = select(func.count(Post.id))
        if author_id is not None:
            q = q.where(Post.user_id == author_id)
            count_q = count_q.where(Post.user_id == author_id)

        result = await self.db.execute(q)
        rows = [dict(row) for row in result.mappings().all()]
        total = await self.db.scalar(count_q)
        return rows, total or 0

    async def get_post(self, post_id: int, viewer_id: Optional[int] = None) -> dict[str, Any]:
        result = await self.db.execute(
            select(*self._post_columns(viewer_id))
            .join(User, Post.user_id == User.id)
            .where(Post.id == post_id)
        )
        row = result.mappings().first()
        if row is None:
            raise NotFoundError("Post not found")
        return dict(row)

    # ─── Writes ─────────────────────────────────────────

    async def _require_user(self, user_id: int) -> None:
        """A valid token can outlive its account."""
        if await self.db.scalar(select(User.id).where(User.id == user_id)) is None:
            raise NotFoundError("User not found")

    async def create_post(self, user_id: int, content: Optional[str]) -> dict[str, Any]:
        if not content or not content.strip():
            raise ValidationError("Post content is required")
        if len(content) > POST_MAX_LENGTH:
            raise ValidationError(
                f"Post content too long (max {POST_MAX_LENGTH} characters)"
            )
        await self._require_user(user_id)

        post = Post(user_id=user_id, content=content.strip())
        self.db.add(post)
        await self.db.commit()

        logger.info("post.created", post_id=post.id, user_id=user_id)
        return await self.get_post(post.id, viewer_id=user_id)

    async def delete_post(self, post_id: int, user_id: int) -> None:
        """Delete a post owned by user_id. Likes/comments go by cascade."""
        owner_id = await self.db.scalar(select(Post.user_id).where(Post.id == post_id))
        if owner_id is None:
            raise NotFoundError("Post not found")
        if owner_id != user_id:
            raise ForbiddenError("Not authorized to delete this post")

        await self.db.execute(delete(Post).where(Post.id == post_id))
        await self.db.commit()
        logger.info("post.deleted", post_id=post_id, user_id=user_id)

    async def toggle_like(self, post_id: int, user_id: int) -> bool:
        """Like the post if the user hasn't yet, otherwise unlike it.

        Returns the new liked state.
        """
        post_exists = await self.db.scalar(select(Post.id).where(Post.id == post_id))
        if post_exists is None:
            raise NotFoundError("Post not found")
        await self._require_user(user_id)

        existing = await self.db.scalar(
            select(Like.id).where(Like.user_id == user_id, Like.post_id == post_id)
        )
        try:
            if existing is not None:
                await self.db.execute(delete(Like).where(Like.id == existing))
                liked = False
            else:
                self.db.add(Like(user_id=user_id, post_id=post_id))
                await self.db.flush()
                liked = True

            like_count = (
                select(func.count(Like.id))
                .where(Like.post_id == post_id)
                .scalar_subquery()
            )
            await self.db.execute(
                update(Post)
                .where(Post.id == post_id)
                .values(likes_count=like_count)
                .execution_options(synchronize_session=False)
            )
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            # Only a concurrent duplicate of this (user, post) is a conflict.
            duplicate = await self.db.scalar(
                select(Like.id).where(Like.user_id == user_id, Like.post_id == post_id)
            )
            if duplicate is None:
                raise
            raise ConflictError("Like already recorded")

        logger.info("post.like_toggled", post_id=post_id, user_id=user_id, liked=liked)
        return liked
