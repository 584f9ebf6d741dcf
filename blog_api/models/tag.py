"""Tag model."""

import uuid

from sqlalchemy import Column, String, TIMESTAMP
from sqlalchemy.sql import func

from ..database import Base


class Tag(Base):
    __tablename__ = "tags"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(50), nullable=False)
    slug = Column(String(60), nullable=False, index=True)

    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
