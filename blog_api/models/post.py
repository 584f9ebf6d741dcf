"""Post model for blog articles."""

import uuid
from enum import Enum

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class PostStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class Post(Base):
    """Blog post. Slug is unique across all posts."""

    __tablename__ = "posts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Foreign Keys
    author_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Content
    title = Column(String(500), nullable=False)
    slug = Column(String(150), nullable=False, unique=True, index=True)
    content = Column(Text, nullable=False)
    excerpt = Column(Text, nullable=True)
    featured_image = Column(String(500), nullable=True)
    status = Column(String(20), nullable=False, default=PostStatus.DRAFT.value, index=True)

    # SEO
    meta_title = Column(String(255), nullable=True)
    meta_description = Column(String(500), nullable=True)

    # Counters
    view_count = Column(Integer, nullable=False, default=0, index=True)
    comments_count = Column(Integer, nullable=False, default=0)  # legacy column, reads recompute it

    # Timestamps
    published_at = Column(TIMESTAMP, nullable=True)
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_post_author_created", "author_id", "created_at"),
        Index("idx_post_status_created", "status", "created_at"),
    )

    # Relationships
    author = relationship("User", foreign_keys=[author_id], lazy="joined")
