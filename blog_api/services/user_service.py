"""Service layer for user accounts and authentication."""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog_api.core.exceptions import ConflictError, NotFoundError, ServiceError
from blog_api.crud.user import crud_user
from blog_api.models.user import User, UserRole
from blog_api.schemas.user import RegisterRequest, UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """
    Service for user registration, login checks and admin user management.

    Emails are stored lowercased and must be unique.
    """

    def _get_or_404(self, db: Session, user_id: str) -> User:
        user = crud_user.get(db, user_id)
        if not user:
            raise NotFoundError(f"User with ID {user_id} not found")
        return user

    def create(self, db: Session, *, user_in: UserCreate) -> User:
        """
        Create a user with a hashed password.

        Raises:
            ConflictError: If the email is already registered
        """
        if crud_user.get_by_email(db, user_in.email):
            raise ConflictError(f"User with email {user_in.email} already exists")
        try:
            user = crud_user.create_user(db, user_in=user_in)
        except IntegrityError as e:
            raise ConflictError(f"User with email {user_in.email} already exists") from e
        except Exception as e:
            logger.error(f"Failed to create user {user_in.email}: {e}")
            raise ServiceError(f"Failed to create user: {e}") from e
        logger.info(f"User {user.id} created with role {user.role}")
        return user

    def register(self, db: Session, *, register_in: RegisterRequest) -> User:
        """Self-registration always gets the ``user`` role."""
        return self.create(
            db,
            user_in=UserCreate(
                email=register_in.email,
                password=register_in.password,
                name=register_in.name,
                role=UserRole.USER.value,
            ),
        )

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
        """Return the user when the credentials match, else None. Stamps ``last_login`` on success."""
        user = crud_user.authenticate(db, email=email, password=password)
        if not user:
            logger.info(f"Failed login attempt for {email}")
            return None
        if user.is_active:
            user = crud_user.touch_last_login(db, user=user)
        return user

    def find_all(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[User]:
        return crud_user.get_multi(db, skip=skip, limit=limit)

    def find_one(self, db: Session, *, user_id: str) -> User:
        return self._get_or_404(db, user_id)

    def update(self, db: Session, *, user_id: str, user_in: UserUpdate) -> User:
        user = self._get_or_404(db, user_id)
        if user_in.email and user_in.email != user.email:
            if crud_user.get_by_email(db, user_in.email):
                raise ConflictError(f"User with email {user_in.email} already exists")
        try:
            return crud_user.update_user(db, db_obj=user, user_in=user_in)
        except IntegrityError as e:
            raise ConflictError(f"User with email {user_in.email} already exists") from e
        except Exception as e:
            logger.error(f"Failed to update user {user_id}: {e}")
            raise ServiceError(f"Failed to update user: {e}") from e

    def remove(self, db: Session, *, user_id: str) -> None:
        self._get_or_404(db, user_id)
        try:
            crud_user.delete(db, id=user_id)
        except Exception as e:
            logger.error(f"Failed to delete user {user_id}: {e}")
            raise ServiceError(f"Failed to delete user: {e}") from e
        logger.info(f"User {user_id} deleted")


# Singleton instance
user_service = UserService()
