"""User service — the credential store plus profile reads and search.

Learn: Service layer separates business logic from HTTP routing.
API routes call services, services call the database. Failures are
raised as linkedcommunity.errors types, which the app turns into
JSON error responses.
"""

from typing import Optional

import structlog
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from linkedcommunity.auth.password import hash_password, verify_password
from linkedcommunity.db.models import Post, User
from linkedcommunity.errors import (
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)

logger = structlog.get_logger()

PASSWORD_MIN_LENGTH = 6
SEARCH_MIN_LENGTH = 2
SEARCH_LIMIT = 20


def avatar_initials(name: str) -> str:
    """Uppercase initials of the first two words: "ada  lovelace" → "AL"."""
    return "".join(word[0] for word in name.split()[:2]).upper()


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class UserService:
    """Business logic for member accounts."""

    def __init__(self, db: AsyncSession, bcrypt_rounds: int = 12):
        self.db = db
        self.bcrypt_rounds = bcrypt_rounds

    # ─── Credentials ────────────────────────────────────

    async def create(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        bio: Optional[str] = None,
    ) -> User:
        """Register a new member.

        The email check runs before the insert, so two racing requests
        can both pass it; the unique index on users.email catches the
        loser, which gets the same ConflictError.
        """
        if not name or not email or not password:
            raise ValidationError("Name, email, and password are required")
        if len(password) < PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
            )
        if await self.find_by_email(email) is not None:
            raise ConflictError("User with this email already exists")

        user = User(
            name=name,
            email=email,
            password_hash=hash_password(password, rounds=self.bcrypt_rounds),
            bio=bio or "",
            avatar=avatar_initials(name),
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("User with this email already exists")
        await self.db.refresh(user)

        logger.info("auth.registered", user_id=user.id)
        return user

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def authenticate(self, email: Optional[str], password: Optional[str]) -> User:
        """Return the user for a correct email/password pair.

        Unknown email and wrong password fail identically.
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = await self.find_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("auth.login_failed")
            raise UnauthorizedError("Invalid credentials")
        return user

    # ─── Profiles ───────────────────────────────────────

    async def get(self, user_id: int) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def get_profile(self, user_id: int) -> tuple[User, int]:
        """A user plus the number of posts they own."""
        user = await self.get(user_id)
        posts_count = await self.db.scalar(
            select(func.count(Post.id)).where(Post.user_id == user_id)
        )
        return user, posts_count or 0

    async def update_profile(
        self, user_id: int, name: Optional[str], bio: Optional[str]
    ) -> User:
        if not name or not name.strip():
            raise ValidationError("Name is required")

        user = await self.get(user_id)
        user.name = name.strip()
        user.bio = bio or ""
        user.avatar = avatar_initials(user.name)
        await self.db.commit()
        await self.db.refresh(user)

        logger.info("user.profile_updated", user_id=user_id)
        return user

    # ─── Search ─────────────────────────────────────────

    async def search(self, query: Optional[str]) -> list[User]:
        """Case-insensitive substring match on name or email."""
        term = (query or "").strip()
        if len(term) < SEARCH_MIN_LENGTH:
            raise ValidationError(
                f"Search query must be at least {SEARCH_MIN_LENGTH} characters"
            )

        pattern = f"%{_escape_like(term)}%"
        result = await self.db.execute(
            select(User)
            .where(
                or_(
                    User.name.ilike(pattern, escape="\\"),
                    User.email.ilike(pattern, escape="\\"),
                )
            )
            .order_by(User.id)
            .limit(SEARCH_LIMIT)
        )
        return list(result.scalars().all())
