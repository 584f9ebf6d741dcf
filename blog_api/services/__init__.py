"""Services package for the blog API."""

from .analytics_service import analytics_service, AnalyticsService
from .category_service import category_service, CategoryService
from .comment_service import comment_service, CommentService
from .post_service import post_service, PostService
from .tag_service import tag_service, TagService
from .user_service import user_service, UserService

__all__ = [
    "analytics_service",
    "AnalyticsService",
    "category_service",
    "CategoryService",
    "comment_service",
    "CommentService",
    "post_service",
    "PostService",
    "tag_service",
    "TagService",
    "user_service",
    "UserService",
]
