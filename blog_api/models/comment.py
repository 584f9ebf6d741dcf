"""Comment model for post discussions."""

import uuid
from enum import Enum

from sqlalchemy import Column, ForeignKey, Index, String, Text, TIMESTAMP
from sqlalchemy.sql import func

from ..database import Base


class CommentStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    SPAM = "spam"
    TRASH = "trash"


class Comment(Base):
    """Comment on a post. Author fields are denormalized; no user row is required."""

    __tablename__ = "comments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Foreign Keys
    post_id = Column(
        String(36),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    parent_id = Column(
        String(36),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )  # single-level replies

    # Author (denormalized)
    author_id = Column(String(36), nullable=True)
    author_name = Column(String(255), nullable=False)
    author_email = Column(String(255), nullable=True)
    author_avatar = Column(String(500), nullable=True)

    content = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default=CommentStatus.PENDING.value, index=True)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_comment_post_status", "post_id", "status"),
    )
