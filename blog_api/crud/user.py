"""CRUD operations for `User` model."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from blog_api.core.security import get_password_hash, verify_password
from blog_api.crud.base import CRUDBase
from blog_api.models.user import User
from blog_api.schemas.user import UserCreate, UserUpdate


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    def get_by_email(self, db: Session, email: Optional[str]) -> Optional[User]:
        """Case-insensitive lookup by email."""
        if not email:
            return None
        stmt = select(User).where(func.lower(User.email) == _normalize_email(email)).limit(1)
        return db.scalars(stmt).first()

    def create_user(self, db: Session, *, user_in: UserCreate) -> User:
        user_data = user_in.model_dump(exclude_unset=True)
        raw_password = user_data.pop("password")
        user_data["password_hash"] = get_password_hash(raw_password)
        user_data["email"] = _normalize_email(user_data["email"])
        user_data.setdefault("role", "user")
        return self.create(db, obj_in=user_data)

    def update_user(self, db: Session, *, db_obj: User, user_in: UserUpdate) -> User:
        update_data = user_in.model_dump(exclude_unset=True)
        raw_password = update_data.pop("password", None)
        if raw_password:
            update_data["password_hash"] = get_password_hash(raw_password)
        if update_data.get("email"):
            update_data["email"] = _normalize_email(update_data["email"])
        return self.update(db, db_obj=db_obj, obj_in=update_data)

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(db, email)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    def touch_last_login(self, db: Session, *, user: User) -> User:
        user.last_login = datetime.utcnow()
        try:
            db.add(user)
            db.commit()
            db.refresh(user)
        except Exception:
            db.rollback()
            raise
        return user


# Singleton instance
crud_user = CRUDUser(User)
