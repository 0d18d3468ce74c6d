"""User search."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from linkedcommunity.db.engine import get_db
from linkedcommunity.schemas.user import UserSearchResults, UserSummary
from linkedcommunity.services.user_service import UserService

router = APIRouter(prefix="/search")


@router.get("/users", response_model=UserSearchResults)
async def search_users(q: Optional[str] = None, db: AsyncSession = Depends(get_db)):
    """Match name or email, case-insensitively. At most 20 results."""
    users = await UserService(db).search(q)
    return UserSearchResults(users=[UserSummary.model_validate(u) for u in users])
