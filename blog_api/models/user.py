"""User model."""

import uuid
from enum import Enum

from sqlalchemy import Boolean, CheckConstraint, Column, String, TIMESTAMP
from sqlalchemy.sql import func

from ..database import Base


class UserRole(str, Enum):
    ADMIN = "admin"
    AUTHOR = "author"
    EDITOR = "editor"
    USER = "user"
    GUEST = "guest"


class User(Base):
    __tablename__ = "users"

    # Primary Key
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Authentication
    email = Column(String(255), unique=True, nullable=False, index=True)  # stored lower-cased
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)

    # Role & Authorization
    role = Column(String(20), nullable=False, default=UserRole.USER.value, index=True)

    # Profile
    avatar_url = Column(String(500))
    bio = Column(String(1000))

    # Account Status
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(TIMESTAMP, nullable=True)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    # Constraints
    __table_args__ = (
        CheckConstraint(
            "role IN ('admin', 'author', 'editor', 'user', 'guest')",
            name="check_user_role"
        ),
    )
