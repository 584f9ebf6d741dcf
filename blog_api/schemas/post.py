"""Pydantic schemas for Post."""

from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .category import CategoryResponse
from .comment import CommentResponse
from .user import UserSummary


PostStatusLiteral = Literal["draft", "published", "archived"]


class PostCreate(BaseModel):
    """Schema for creating a new post. The slug is always derived from the title."""
    title: str = Field(..., min_length=1, max_length=500, description="Post title")
    content: str = Field(..., min_length=1, description="Post content (markdown supported)")
    excerpt: Optional[str] = Field(None, description="Brief excerpt for preview")
    status: PostStatusLiteral = "draft"
    featured_image: Optional[str] = Field(None, max_length=500, description="URL of the featured image")
    categories: List[str] = Field(default_factory=list, description="List of category IDs")
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = Field(None, max_length=500)
    published_at: Optional[datetime] = None


class PostUpdate(BaseModel):
    """Schema for updating a post.

    ``categories``, when present, replaces every existing association.
    ``increment_views`` bumps the view counter instead of touching any field.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    content: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = None
    status: Optional[PostStatusLiteral] = None
    featured_image: Optional[str] = Field(None, max_length=500)
    categories: Optional[List[str]] = None
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = Field(None, max_length=500)
    published_at: Optional[datetime] = None
    increment_views: bool = False

    @field_validator("title", "content", "status")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field may be omitted but cannot be null")
        return v


class PostResponse(BaseModel):
    """Schema for Post response."""
    id: str
    title: str
    slug: str
    content: str
    excerpt: Optional[str] = None
    status: str
    author_id: str
    author: Optional[UserSummary] = None
    featured_image: Optional[str] = None
    view_count: int = 0
    comments_count: int = 0  # approved comments, computed at read time
    categories: List[CategoryResponse] = []
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PostDetailResponse(PostResponse):
    """Single post with its approved comments."""
    comments: List[CommentResponse] = []
