"""Pydantic schemas for Comment."""

from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


CommentStatusLiteral = Literal["pending", "approved", "spam", "trash"]


class CommentCreate(BaseModel):
    """Schema for creating a comment. Status is always set to pending by the server."""
    content: str = Field(..., min_length=1, description="Comment content")
    post_id: str = Field(..., description="ID of the post this comment belongs to")
    author_id: Optional[str] = Field(None, description="ID of the comment author, if registered")
    author_name: str = Field(..., min_length=1, max_length=255)
    author_email: Optional[str] = Field(None, max_length=255)
    author_avatar: Optional[str] = Field(None, max_length=500)
    parent_id: Optional[str] = Field(None, description="Parent comment ID if this is a reply")


class CommentUpdate(BaseModel):
    content: Optional[str] = Field(None, min_length=1)
    author_name: Optional[str] = Field(None, min_length=1, max_length=255)
    author_email: Optional[str] = Field(None, max_length=255)
    author_avatar: Optional[str] = Field(None, max_length=500)
    status: Optional[CommentStatusLiteral] = None


class CommentApprove(BaseModel):
    is_approved: bool


class CommentPostInfo(BaseModel):
    """Post title block joined onto comments."""
    id: str
    title: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class CommentResponse(BaseModel):
    id: str
    content: str
    post_id: str
    author_id: Optional[str] = None
    author_name: str
    author_email: Optional[str] = None
    author_avatar: Optional[str] = None
    parent_id: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    post: Optional[CommentPostInfo] = None

    model_config = ConfigDict(from_attributes=True)


class CommentAdminListResponse(BaseModel):
    """Paginated comments for the moderation screen."""
    data: List[CommentResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class CommentBulkAction(BaseModel):
    comment_ids: List[str] = Field(..., alias="commentIds")
    action: str = Field(..., description="approve or delete")

    model_config = ConfigDict(populate_by_name=True)


class CommentBulkResponse(BaseModel):
    message: str
    processed: int


class CommentCountResponse(BaseModel):
    count: int
