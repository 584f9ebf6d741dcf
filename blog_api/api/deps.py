"""FastAPI dependency injection functions for authentication and database access."""

import logging
from typing import Callable, Generator, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session, sessionmaker

from blog_api.core.security import decode_token
from blog_api.crud import crud_user
from blog_api.database import AdminSessionLocal, SessionLocal
from blog_api.models.user import User

logger = logging.getLogger(__name__)

# OAuth2 Bearer token scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")
oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency to get a session on the regular connection.

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_admin_db() -> Generator[Session, None, None]:
    """Dependency to get a session on the service-role connection (admin writes)."""
    db = AdminSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory() -> sessionmaker:
    """Session factory for work that outlives the request, such as background tasks."""
    return SessionLocal


def _user_from_token(token: str, db: Session) -> Optional[User]:
    payload = decode_token(token)
    user_id = payload.get("sub")
    if user_id is None:
        return None
    return crud_user.get(db, user_id)


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Dependency to get current authenticated user from JWT token.

    Args:
        token: JWT token from Authorization header
        db: Database session

    Returns:
        User: Authenticated user model

    Raises:
        HTTPException: 401 if token is invalid or user not found
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        user = _user_from_token(token, db)
    except HTTPException:
        logger.warning("[AUTH] Token decode failed")
        raise credentials_exception

    if user is None:
        logger.warning("[AUTH] No user for token subject")
        raise credentials_exception

    logger.debug(f"[AUTH] User authenticated: id={user.id}, role={user.role}")
    return user


def get_current_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Dependency to verify current user is active.

    Raises:
        HTTPException: 403 if user is inactive
    """
    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user"
        )
    return current_user


def get_optional_current_user(
    token: Optional[str] = Depends(oauth2_scheme_optional),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """
    Dependency to optionally get current authenticated user.
    Returns None if no valid token provided.
    """
    if not token:
        return None

    try:
        user = _user_from_token(token, db)
    except HTTPException:
        return None

    if user is None or not user.is_active:
        return None
    return user


def require_role(*allowed_roles: str) -> Callable:
    """
    Factory function to create role-based access control dependency.

    Args:
        *allowed_roles: User roles allowed to access the endpoint

    Raises:
        HTTPException: 403 if user role not in allowed_roles

    Example:
        @router.delete("/users/{user_id}")
        async def delete_user(current_user: User = Depends(require_role("admin"))):
            ...
    """
    async def role_checker(
        current_user: User = Depends(get_current_active_user)
    ) -> User:
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Not enough permissions. Required role(s): {', '.join(allowed_roles)}"
            )
        return current_user

    return role_checker


__all__ = [
    "oauth2_scheme",
    "oauth2_scheme_optional",
    "get_db",
    "get_admin_db",
    "get_session_factory",
    "get_current_user",
    "get_current_active_user",
    "get_optional_current_user",
    "require_role",
]
