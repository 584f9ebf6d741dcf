"""
SQLAlchemy Models for the blog
"""

from ..database import Base
from .user import User, UserRole
from .category import Category
from .tag import Tag
from .post import Post, PostStatus
from .post_category import PostCategory
from .comment import Comment, CommentStatus

# Export all models
__all__ = [
    "Base",
    "User",
    "UserRole",
    "Category",
    "Tag",
    "Post",
    "PostStatus",
    "PostCategory",
    "Comment",
    "CommentStatus",
]
