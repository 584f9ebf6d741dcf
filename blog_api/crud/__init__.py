"""CRUD operations package - exports singleton instances for all models."""

from .base import CRUDBase
from .user import crud_user
from .category import crud_category
from .tag import crud_tag
from .post import crud_post
from .post_category import crud_post_category
from .comment import crud_comment


__all__ = [
    # Base
    "CRUDBase",
    # CRUD instances
    "crud_user",
    "crud_category",
    "crud_tag",
    "crud_post",
    "crud_post_category",
    "crud_comment",
]
