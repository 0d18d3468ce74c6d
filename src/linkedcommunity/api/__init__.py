"""API route aggregation.

All routers registered here get mounted in main.py under /api.

Learn: Unlike a router-wide auth dependency, auth here is per route:
each resource mixes public reads with protected writes, so protected
handlers declare Depends(get_current_user) themselves.
"""

from fastapi import APIRouter

from linkedcommunity.api.auth import router as auth_router
from linkedcommunity.api.health import router as health_router
from linkedcommunity.api.posts import router as posts_router
from linkedcommunity.api.search import router as search_router
from linkedcommunity.api.users import router as users_router

api_router = APIRouter(prefix="/api")

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(posts_router, tags=["posts", "likes"])
api_router.include_router(users_router, tags=["users"])
api_router.include_router(search_router, tags=["search"])
