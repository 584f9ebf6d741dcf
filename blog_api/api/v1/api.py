"""API router aggregator."""

from fastapi import APIRouter

from blog_api.api.v1.endpoints import (
    analytics,
    auth,
    categories,
    comments,
    posts,
    tags,
    upload,
    users,
)
from blog_api.config import settings

api_router = APIRouter(prefix=settings.API_PREFIX)

api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(posts.router)
api_router.include_router(categories.router)
api_router.include_router(tags.router)
api_router.include_router(comments.router)
api_router.include_router(analytics.router)
api_router.include_router(upload.router)

__all__ = ["api_router"]
